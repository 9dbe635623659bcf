"""Domain models for the NAV simulation engine.

These dataclasses capture the typed valuation records consumed by the engine
and the result records it hands back to presentation code.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Sequence


@dataclass(frozen=True)
class ValuationRecord:
    """Per-unit NAV of a fund on a specific date."""

    nav_date: date
    value: Decimal


@dataclass(frozen=True)
class RejectedRow:
    """A raw feed row that could not be turned into a ValuationRecord."""

    index: int
    raw_date: object
    raw_value: object
    reason: str


@dataclass(frozen=True)
class FeedParseResult:
    records: Sequence[ValuationRecord] = field(default_factory=tuple)
    rejected: Sequence[RejectedRow] = field(default_factory=tuple)


@dataclass(frozen=True)
class FundMeta:
    scheme_code: int | None
    scheme_name: str
    fund_house: str = ""
    scheme_type: str = ""
    scheme_category: str = ""
    isin_growth: str | None = None
    isin_div_reinvestment: str | None = None


@dataclass(frozen=True)
class FundDetails:
    """One fund-details load: metadata plus its parsed NAV history."""

    meta: FundMeta
    records: Sequence[ValuationRecord]
    rejected: Sequence[RejectedRow] = field(default_factory=tuple)


@dataclass(frozen=True)
class ContributionEvent:
    contribution_date: date
    amount: Decimal


@dataclass(frozen=True)
class YearSlice:
    """Per-calendar-year aggregation of contributions and year-end value."""

    year: int
    invested_this_year: Decimal
    cumulative_invested: Decimal
    units_this_year: Decimal
    cumulative_units: Decimal
    value_at_year_end: Decimal
    returns_at_year_end: Decimal
    returns_percent_at_year_end: Decimal
    valuation_used_for_year_end: Decimal


@dataclass(frozen=True)
class SimulationResult:
    total_invested: Decimal
    current_value: Decimal
    total_units: Decimal
    returns: Decimal
    returns_percentage: Decimal
    is_profit: bool
    yearly_breakdown: Sequence[YearSlice] = field(default_factory=tuple)
    start_date: date | None = None
    current_valuation: Decimal = Decimal("0")
    purchase_valuation: Decimal | None = None


@dataclass(frozen=True)
class ProjectionResult:
    total_invested: Decimal
    future_value: Decimal
    returns: Decimal
    returns_percentage: Decimal
    is_profit: bool


@dataclass(frozen=True)
class TrailingReturn:
    window: str
    start_value: Decimal
    latest_value: Decimal
    change_percent: Decimal
    is_positive: bool


def percentage(part: Decimal, whole: Decimal) -> Decimal:
    """``part / whole * 100``, or 0 when ``whole`` is zero."""
    if not whole:
        return Decimal("0")
    return part / whole * 100
