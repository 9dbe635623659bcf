"""Central configuration for the NAV simulator package."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Context, Decimal


@dataclass(slots=True, frozen=True)
class Settings:
    decimal_context: Context
    min_step_up_percent: Decimal
    max_step_up_percent: Decimal
    min_years: int
    max_years: int
    min_annual_return: Decimal
    max_annual_return: Decimal
    default_lookback_years: int
    cadence: str


SETTINGS = Settings(
    decimal_context=Context(prec=28),
    min_step_up_percent=Decimal("0"),
    max_step_up_percent=Decimal("100"),
    min_years=1,
    max_years=40,
    min_annual_return=Decimal("0"),
    max_annual_return=Decimal("100"),
    default_lookback_years=3,
    cadence="monthly",
)
