"""Future-value projections for hypothetical investments."""
from __future__ import annotations

from decimal import Decimal, localcontext

from nav_simulator.config import SETTINGS

from .models import ProjectionResult, percentage


def monthly_rate(annual_return: Decimal) -> Decimal:
    return Decimal(annual_return) / 100 / 12


def _result(total_invested: Decimal, future_value: Decimal) -> ProjectionResult:
    returns = future_value - total_invested
    return ProjectionResult(
        total_invested=total_invested,
        future_value=future_value,
        returns=returns,
        returns_percentage=percentage(returns, total_invested),
        is_profit=returns >= 0,
    )


class ProjectionCalculator:
    """Compound-growth projections at a fixed expected annual return.

    Rates are compounded monthly (``annual_return / 100 / 12``) in every mode.
    """

    def regular(self, amount: Decimal, years: int, annual_return: Decimal) -> ProjectionResult:
        """Fixed monthly contribution, each paid at the start of its month."""
        amount = Decimal(amount)
        months = years * 12
        with localcontext(SETTINGS.decimal_context):
            rate = monthly_rate(annual_return)
            if rate == 0:
                future_value = amount * months
            else:
                growth = 1 + rate
                future_value = amount * (growth**months - 1) / rate * growth
            return _result(amount * months, future_value)

    def step_up(
        self,
        amount: Decimal,
        years: int,
        annual_return: Decimal,
        step_up_percent: Decimal,
    ) -> ProjectionResult:
        """Monthly contribution raised by ``step_up_percent`` every twelve months.

        Each contribution compounds for the months left until the horizon, so
        the sum is accumulated month by month instead of in closed form.
        """
        current_amount = Decimal(amount)
        total_months = years * 12
        with localcontext(SETTINGS.decimal_context):
            growth = 1 + monthly_rate(annual_return)
            step = 1 + Decimal(step_up_percent) / 100
            total_invested = Decimal("0")
            future_value = Decimal("0")
            for year in range(years):
                for month in range(12):
                    months_to_grow = total_months - year * 12 - month
                    future_value += current_amount * growth**months_to_grow
                    total_invested += current_amount
                current_amount *= step
            return _result(total_invested, future_value)

    def lump_sum(self, amount: Decimal, years: int, annual_return: Decimal) -> ProjectionResult:
        amount = Decimal(amount)
        with localcontext(SETTINGS.decimal_context):
            future_value = amount * (1 + monthly_rate(annual_return)) ** (years * 12)
            return _result(amount, future_value)
