"""Monthly contribution schedules with optional annual step-up."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterator

import pandas as pd

from nav_simulator.config import SETTINGS
from nav_simulator.errors import InvalidParameterError

from .models import ContributionEvent


def add_months(anchor: date, months: int) -> date:
    """Shift ``anchor`` by whole months, clipping the day to the month length."""
    return (pd.Timestamp(anchor) + pd.DateOffset(months=months)).date()


@dataclass(frozen=True)
class ContributionSchedule:
    """Restartable sequence of monthly contributions from ``start`` to ``end``.

    Every iteration recomputes the events from the anchor date, so the
    schedule can be walked any number of times with identical output.
    """

    start: date
    end: date
    base_amount: Decimal
    step_up_percent: Decimal = Decimal("0")

    def amount_for(self, contribution_date: date) -> Decimal:
        offset = contribution_date.year - self.start.year
        if not self.step_up_percent or offset <= 0:
            return self.base_amount
        growth = 1 + self.step_up_percent / 100
        return self.base_amount * growth**offset

    def __iter__(self) -> Iterator[ContributionEvent]:
        step = 0
        current = self.start
        while current <= self.end:
            yield ContributionEvent(contribution_date=current, amount=self.amount_for(current))
            step += 1
            current = add_months(self.start, step)

    def events(self) -> tuple[ContributionEvent, ...]:
        return tuple(self)


class ContributionScheduler:
    """Builds contribution schedules; only the monthly cadence is supported."""

    CADENCES = ("monthly",)

    def generate(
        self,
        start: date,
        end: date,
        base_amount: Decimal,
        cadence: str = SETTINGS.cadence,
        step_up_percent: Decimal = Decimal("0"),
    ) -> ContributionSchedule:
        if cadence not in self.CADENCES:
            raise InvalidParameterError("cadence", cadence, f"expected one of {', '.join(self.CADENCES)}")
        base_amount = Decimal(base_amount)
        step_up_percent = Decimal(step_up_percent)
        if not base_amount > 0:
            raise InvalidParameterError("amount", base_amount, "must be greater than zero")
        if step_up_percent < 0:
            raise InvalidParameterError("step-up percent", step_up_percent, "must not be negative")
        return ContributionSchedule(
            start=start,
            end=end,
            base_amount=base_amount,
            step_up_percent=step_up_percent,
        )
