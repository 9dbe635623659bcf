"""Application services orchestrating simulations for a loaded fund."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from nav_simulator.application.dto import HistoricalRequest, InvestmentType, ProjectionRequest
from nav_simulator.application.validation import (
    validate_amount,
    validate_annual_return,
    validate_investment_type,
    validate_start_month,
    validate_step_up,
    validate_years,
)
from nav_simulator.config import SETTINGS
from nav_simulator.domain.models import ProjectionResult, SimulationResult, TrailingReturn
from nav_simulator.domain.projection import ProjectionCalculator
from nav_simulator.domain.repositories import FundDetailsRepository
from nav_simulator.domain.returns import PeriodReturnAnalyzer, Window
from nav_simulator.domain.schedule import ContributionScheduler
from nav_simulator.domain.series import ValuationSeries
from nav_simulator.domain.services import HistoricalSimulator

logger = logging.getLogger(__name__)


def load_series(repository: FundDetailsRepository) -> ValuationSeries:
    return ValuationSeries(repository.load_fund_details().records)


def start_month_for(
    series: ValuationSeries,
    years_ago: int,
    as_of: date | None = None,
    prefer_last_month: bool = True,
) -> tuple[int, int] | None:
    """Pick the available (year, month) closest to ``years_ago`` years before ``as_of``.

    The chosen year is the latest one with data not after the target year
    (falling back to the earliest year). Inside the target year the first
    available month on or after the target month wins, otherwise the last one.
    In an earlier year the last month is used, or the first when
    ``prefer_last_month`` is False.
    """
    months_by_year = series.months_by_year()
    if not months_by_year:
        return None
    as_of = as_of or date.today()
    target_year = as_of.year - years_ago
    years = list(months_by_year)
    chosen = years[0]
    for year in years:
        if year <= target_year:
            chosen = year
    months = months_by_year[chosen]
    if chosen == target_year:
        later = [month for month in months if month >= as_of.month]
        return chosen, (later[0] if later else months[-1])
    return chosen, (months[-1] if prefer_last_month else months[0])


def default_start_month(series: ValuationSeries, as_of: date | None = None) -> tuple[int, int] | None:
    return start_month_for(series, SETTINGS.default_lookback_years, as_of, prefer_last_month=False)


@dataclass(slots=True)
class SimulateHistoricalUseCase:
    series: ValuationSeries
    simulator: HistoricalSimulator = field(default_factory=HistoricalSimulator)
    scheduler: ContributionScheduler = field(default_factory=ContributionScheduler)

    def execute(self, request: HistoricalRequest) -> SimulationResult:
        investment_type = validate_investment_type(request.investment_type)
        amount = validate_amount(request.amount)
        step_up = validate_step_up(request.step_up_percent) if investment_type is InvestmentType.STEP_UP else None
        validate_start_month(request.start_year, request.start_month, self.series.months_by_year())

        start = date(request.start_year, request.start_month, 1)
        as_of = request.as_of or date.today()
        logger.debug("Historical %s simulation from %s to %s", investment_type.value, start, as_of)

        if investment_type is InvestmentType.ONE_TIME:
            return self.simulator.simulate_lump_sum(self.series, start, amount, as_of=as_of)
        schedule = self.scheduler.generate(start, as_of, amount, step_up_percent=step_up or 0)
        return self.simulator.simulate(self.series, schedule, as_of=as_of)


@dataclass(slots=True)
class ProjectFutureUseCase:
    calculator: ProjectionCalculator = field(default_factory=ProjectionCalculator)

    def execute(self, request: ProjectionRequest) -> ProjectionResult:
        investment_type = validate_investment_type(request.investment_type)
        amount = validate_amount(request.amount)
        years = validate_years(request.years)
        annual_return = validate_annual_return(request.annual_return)

        if investment_type is InvestmentType.SIP:
            return self.calculator.regular(amount, years, annual_return)
        if investment_type is InvestmentType.STEP_UP:
            step_up = validate_step_up(request.step_up_percent)
            return self.calculator.step_up(amount, years, annual_return, step_up)
        return self.calculator.lump_sum(amount, years, annual_return)


@dataclass(slots=True)
class TrailingReturnsUseCase:
    series: ValuationSeries
    analyzer: PeriodReturnAnalyzer = field(default_factory=PeriodReturnAnalyzer)

    def execute(self, as_of: date | None = None) -> dict[Window, TrailingReturn | None]:
        return self.analyzer.all_returns(self.series, as_of)
