"""Up-front checks on caller-supplied simulation parameters."""
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Mapping, Sequence

from nav_simulator.application.dto import InvestmentType
from nav_simulator.config import SETTINGS
from nav_simulator.errors import InvalidParameterError


def _as_decimal(name: str, value: object) -> Decimal:
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise InvalidParameterError(name, value, "not a number") from exc
    if not result.is_finite():
        raise InvalidParameterError(name, value, "not a finite number")
    return result


def validate_amount(amount: object) -> Decimal:
    result = _as_decimal("amount", amount)
    if result <= 0:
        raise InvalidParameterError("amount", amount, "must be greater than zero")
    return result


def validate_step_up(step_up_percent: object) -> Decimal:
    result = _as_decimal("step-up percent", step_up_percent)
    if not SETTINGS.min_step_up_percent <= result <= SETTINGS.max_step_up_percent:
        raise InvalidParameterError(
            "step-up percent",
            step_up_percent,
            f"must be between {SETTINGS.min_step_up_percent} and {SETTINGS.max_step_up_percent}",
        )
    return result


def validate_years(years: object) -> int:
    if isinstance(years, bool) or not isinstance(years, int):
        raise InvalidParameterError("years", years, "must be a whole number")
    if not SETTINGS.min_years <= years <= SETTINGS.max_years:
        raise InvalidParameterError("years", years, f"must be between {SETTINGS.min_years} and {SETTINGS.max_years}")
    return years


def validate_annual_return(annual_return: object) -> Decimal:
    result = _as_decimal("annual return", annual_return)
    if not SETTINGS.min_annual_return <= result <= SETTINGS.max_annual_return:
        raise InvalidParameterError(
            "annual return",
            annual_return,
            f"must be between {SETTINGS.min_annual_return} and {SETTINGS.max_annual_return}",
        )
    return result


def validate_start_month(year: int, month: int, months_by_year: Mapping[int, Sequence[int]]) -> None:
    if month not in months_by_year.get(year, ()):
        raise InvalidParameterError("start month", f"{year}-{month:02d}", "no NAV available in that month")


def validate_investment_type(value: object) -> InvestmentType:
    try:
        return InvestmentType(value)
    except ValueError as exc:
        choices = ", ".join(item.value for item in InvestmentType)
        raise InvalidParameterError("investment type", value, f"expected one of {choices}") from exc
