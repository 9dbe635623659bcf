"""Raw NAV feed rows to typed valuation records."""
from __future__ import annotations

import logging
from typing import Iterable, Mapping

from nav_simulator.domain.models import FeedParseResult, RejectedRow, ValuationRecord
from nav_simulator.domain.series import ValuationSeries
from nav_simulator.infrastructure.parsing.utils import parse_nav_date, parse_nav_value

logger = logging.getLogger(__name__)

VALUE_KEYS = ("nav", "value")


def _raw_value(row: Mapping[str, object]) -> object:
    for key in VALUE_KEYS:
        if key in row:
            return row[key]
    return None


def parse_feed(rows: Iterable[Mapping[str, object]]) -> FeedParseResult:
    """Parse every row it can; malformed rows are reported, never fatal."""
    records: list[ValuationRecord] = []
    rejected: list[RejectedRow] = []
    for idx, row in enumerate(rows):
        if not isinstance(row, Mapping):
            rejected.append(RejectedRow(index=idx, raw_date=None, raw_value=None, reason="row is not a mapping"))
            continue
        raw_date = row.get("date")
        raw_value = _raw_value(row)
        nav_date = parse_nav_date(raw_date)
        if nav_date is None:
            reason = f"unparsable date {raw_date!r}"
        else:
            value = parse_nav_value(raw_value)
            if value is not None:
                records.append(ValuationRecord(nav_date=nav_date, value=value))
                continue
            reason = f"unparsable or non-positive NAV {raw_value!r}"
        logger.debug("Skipping feed row %d: %s", idx, reason)
        rejected.append(RejectedRow(index=idx, raw_date=raw_date, raw_value=raw_value, reason=reason))

    if rejected:
        logger.warning("Skipped %d malformed NAV rows out of %d", len(rejected), len(records) + len(rejected))
    return FeedParseResult(records=tuple(records), rejected=tuple(rejected))


def series_from_feed(rows: Iterable[Mapping[str, object]]) -> ValuationSeries:
    return ValuationSeries(parse_feed(rows).records)
