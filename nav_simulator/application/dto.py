"""Application-level DTOs for simulation requests."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class InvestmentType(str, Enum):
    SIP = "sip"
    STEP_UP = "stepup"
    ONE_TIME = "onetime"


@dataclass(slots=True, frozen=True)
class HistoricalRequest:
    investment_type: InvestmentType
    amount: Decimal
    start_year: int
    start_month: int
    step_up_percent: Decimal = Decimal("0")
    as_of: date | None = None


@dataclass(slots=True, frozen=True)
class ProjectionRequest:
    investment_type: InvestmentType
    amount: Decimal
    years: int
    annual_return: Decimal
    step_up_percent: Decimal = Decimal("0")
