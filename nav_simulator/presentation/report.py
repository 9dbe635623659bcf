"""Report generators for simulation breakdowns."""
from __future__ import annotations

import csv
import io
from typing import Sequence

import pandas as pd

from nav_simulator.domain.models import SimulationResult, ValuationRecord, YearSlice


def yearly_breakdown_to_rows(breakdown: Sequence[YearSlice]) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for item in breakdown:
        rows.append(
            {
                "year": str(item.year),
                "invested": str(item.invested_this_year),
                "cumulative_invested": str(item.cumulative_invested),
                "units": str(item.units_this_year),
                "cumulative_units": str(item.cumulative_units),
                "value": str(item.value_at_year_end),
                "returns": str(item.returns_at_year_end),
                "returns_percent": str(item.returns_percent_at_year_end),
                "year_end_nav": str(item.valuation_used_for_year_end),
            }
        )
    return rows


def render_csv(breakdown: Sequence[YearSlice]) -> bytes:
    rows = yearly_breakdown_to_rows(breakdown)
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(rows[0].keys()) if rows else [])
    if rows:
        writer.writeheader()
        writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def render_html(result: SimulationResult) -> str:
    rows = yearly_breakdown_to_rows(result.yearly_breakdown)
    if not rows:
        return "<p>No contributions could be priced.</p>"
    header = "".join(f"<th>{col}</th>" for col in rows[0].keys())
    body_parts = []
    for row in rows:
        body_parts.append("<tr>" + "".join(f"<td>{value}</td>" for value in row.values()) + "</tr>")
    body_html = "".join(body_parts)
    return f"<table><thead><tr>{header}</tr></thead><tbody>{body_html}</tbody></table>"


def breakdown_to_dataframe(breakdown: Sequence[YearSlice]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "year": item.year,
                "invested": item.invested_this_year,
                "cumulative_invested": item.cumulative_invested,
                "units": item.units_this_year,
                "cumulative_units": item.cumulative_units,
                "value": item.value_at_year_end,
                "returns": item.returns_at_year_end,
                "returns_percent": item.returns_percent_at_year_end,
                "year_end_nav": item.valuation_used_for_year_end,
            }
            for item in breakdown
        ]
    )


def records_to_dataframe(records: Sequence[ValuationRecord]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"date": pd.Timestamp(r.nav_date), "nav": float(r.value)} for r in records],
        columns=["date", "nav"],
    )
