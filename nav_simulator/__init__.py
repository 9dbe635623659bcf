"""Mutual fund NAV investment simulation toolkit."""
from nav_simulator.application.use_cases import (
    ProjectFutureUseCase,
    SimulateHistoricalUseCase,
    TrailingReturnsUseCase,
)
from nav_simulator.domain.projection import ProjectionCalculator
from nav_simulator.domain.returns import PeriodReturnAnalyzer, Window
from nav_simulator.domain.schedule import ContributionScheduler
from nav_simulator.domain.series import ValuationSeries
from nav_simulator.domain.services import HistoricalSimulator
from nav_simulator.infrastructure.repositories.file_repositories import (
    JsonFundDetailsRepository,
    TabularValuationRepository,
)

__all__ = [
    "ProjectFutureUseCase",
    "SimulateHistoricalUseCase",
    "TrailingReturnsUseCase",
    "ProjectionCalculator",
    "PeriodReturnAnalyzer",
    "Window",
    "ContributionScheduler",
    "ValuationSeries",
    "HistoricalSimulator",
    "JsonFundDetailsRepository",
    "TabularValuationRepository",
]
