"""Domain services simulating historical investments against a NAV series."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, localcontext
from typing import Iterable

from nav_simulator.config import SETTINGS
from nav_simulator.errors import NoValuationAvailableError

from .models import ContributionEvent, SimulationResult, YearSlice, percentage
from .series import ValuationSeries

ZERO = Decimal("0")


@dataclass
class _YearBucket:
    invested: Decimal = ZERO
    units: Decimal = ZERO


class HistoricalSimulator:
    """Replays contributions against actual NAVs ("what if I had invested")."""

    def simulate(
        self,
        series: ValuationSeries,
        events: Iterable[ContributionEvent],
        current_valuation: Decimal | None = None,
        as_of: date | None = None,
    ) -> SimulationResult:
        """Accumulate units for each contribution priced at its nearest NAV.

        Contributions that cannot be priced (empty series or a non-positive
        NAV) are skipped, so an empty series produces an all-zero result
        rather than an error.
        """
        as_of = as_of or date.today()
        current = self._current_valuation(series, current_valuation)

        buckets: dict[int, _YearBucket] = {}
        total_units = ZERO
        total_invested = ZERO
        start_date: date | None = None
        with localcontext(SETTINGS.decimal_context):
            for event in events:
                if start_date is None:
                    start_date = event.contribution_date
                record = series.nearest(event.contribution_date)
                if record is None or record.value <= 0:
                    continue
                units = event.amount / record.value
                total_units += units
                total_invested += event.amount
                bucket = buckets.setdefault(event.contribution_date.year, _YearBucket())
                bucket.invested += event.amount
                bucket.units += units

            breakdown: list[YearSlice] = []
            cumulative_invested = ZERO
            cumulative_units = ZERO
            for year in sorted(buckets):
                bucket = buckets[year]
                cumulative_invested += bucket.invested
                cumulative_units += bucket.units
                breakdown.append(
                    self._year_slice(
                        year=year,
                        invested_this_year=bucket.invested,
                        cumulative_invested=cumulative_invested,
                        units_this_year=bucket.units,
                        cumulative_units=cumulative_units,
                        year_end_valuation=self._year_end_valuation(series, year, current, as_of),
                    )
                )

            current_value = total_units * current
            returns = current_value - total_invested
            return SimulationResult(
                total_invested=total_invested,
                current_value=current_value,
                total_units=total_units,
                returns=returns,
                returns_percentage=percentage(returns, total_invested),
                is_profit=returns >= 0,
                yearly_breakdown=tuple(breakdown),
                start_date=start_date,
                current_valuation=current,
            )

    def simulate_lump_sum(
        self,
        series: ValuationSeries,
        purchase_date: date,
        amount: Decimal,
        current_valuation: Decimal | None = None,
        as_of: date | None = None,
    ) -> SimulationResult:
        as_of = as_of or date.today()
        purchase = series.nearest(purchase_date)
        if purchase is None or purchase.value <= 0:
            raise NoValuationAvailableError(f"No NAV available to price a purchase on {purchase_date.isoformat()}")
        current = self._current_valuation(series, current_valuation)

        with localcontext(SETTINGS.decimal_context):
            units = amount / purchase.value
            breakdown = tuple(
                self._year_slice(
                    year=year,
                    invested_this_year=amount if year == purchase_date.year else ZERO,
                    cumulative_invested=amount,
                    units_this_year=units if year == purchase_date.year else ZERO,
                    cumulative_units=units,
                    year_end_valuation=self._year_end_valuation(series, year, current, as_of),
                )
                for year in range(purchase_date.year, max(purchase_date.year, as_of.year) + 1)
            )
            current_value = units * current
            returns = current_value - amount
            return SimulationResult(
                total_invested=amount,
                current_value=current_value,
                total_units=units,
                returns=returns,
                returns_percentage=percentage(returns, amount),
                is_profit=returns >= 0,
                yearly_breakdown=breakdown,
                start_date=purchase_date,
                current_valuation=current,
                purchase_valuation=purchase.value,
            )

    @staticmethod
    def _current_valuation(series: ValuationSeries, override: Decimal | None) -> Decimal:
        if override is not None:
            return override
        latest = series.latest()
        return latest.value if latest is not None else ZERO

    @staticmethod
    def _year_end_valuation(series: ValuationSeries, year: int, current: Decimal, as_of: date) -> Decimal:
        if year >= as_of.year:
            return current
        record = series.nearest(date(year, 12, 31))
        return record.value if record is not None else current

    @staticmethod
    def _year_slice(
        year: int,
        invested_this_year: Decimal,
        cumulative_invested: Decimal,
        units_this_year: Decimal,
        cumulative_units: Decimal,
        year_end_valuation: Decimal,
    ) -> YearSlice:
        value = cumulative_units * year_end_valuation
        returns = value - cumulative_invested
        return YearSlice(
            year=year,
            invested_this_year=invested_this_year,
            cumulative_invested=cumulative_invested,
            units_this_year=units_this_year,
            cumulative_units=cumulative_units,
            value_at_year_end=value,
            returns_at_year_end=returns,
            returns_percent_at_year_end=percentage(returns, cumulative_invested),
            valuation_used_for_year_end=year_end_valuation,
        )
