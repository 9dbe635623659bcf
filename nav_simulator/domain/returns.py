"""Trailing returns over fixed look-back windows."""
from __future__ import annotations

from datetime import date
from decimal import localcontext
from enum import Enum
from typing import Sequence

from nav_simulator.config import SETTINGS

from .models import TrailingReturn, ValuationRecord
from .schedule import add_months
from .series import ValuationSeries


class Window(str, Enum):
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    SIX_MONTHS = "6M"
    ONE_YEAR = "1Y"
    THREE_YEARS = "3Y"
    FIVE_YEARS = "5Y"
    ALL = "ALL"

    @property
    def months(self) -> int | None:
        return _WINDOW_MONTHS[self]

    def cutoff(self, as_of: date) -> date | None:
        if self.months is None:
            return None
        return add_months(as_of, -self.months)


_WINDOW_MONTHS = {
    Window.ONE_MONTH: 1,
    Window.THREE_MONTHS: 3,
    Window.SIX_MONTHS: 6,
    Window.ONE_YEAR: 12,
    Window.THREE_YEARS: 36,
    Window.FIVE_YEARS: 60,
    Window.ALL: None,
}


class PeriodReturnAnalyzer:
    def trailing_return(
        self,
        series: ValuationSeries,
        window: Window | str,
        as_of: date | None = None,
    ) -> TrailingReturn | None:
        """Percentage change from the window's starting NAV to the latest NAV.

        Returns None for an empty series or a zero starting NAV.
        """
        window = Window(window)
        latest = series.latest()
        if latest is None:
            return None
        cutoff = window.cutoff(as_of or date.today())
        start = series.earliest() if cutoff is None else series.nearest(cutoff)
        if start is None or not start.value:
            return None
        with localcontext(SETTINGS.decimal_context):
            change = (latest.value - start.value) / start.value * 100
        return TrailingReturn(
            window=window.value,
            start_value=start.value,
            latest_value=latest.value,
            change_percent=change,
            is_positive=change >= 0,
        )

    def all_returns(self, series: ValuationSeries, as_of: date | None = None) -> dict[Window, TrailingReturn | None]:
        as_of = as_of or date.today()
        return {window: self.trailing_return(series, window, as_of) for window in Window}

    def window_records(
        self,
        series: ValuationSeries,
        window: Window | str,
        as_of: date | None = None,
    ) -> Sequence[ValuationRecord]:
        cutoff = Window(window).cutoff(as_of or date.today())
        if cutoff is None:
            return series.records
        return series.since(cutoff)
