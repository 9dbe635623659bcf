from datetime import date
from decimal import Decimal

import pytest

from nav_simulator.domain.models import ValuationRecord
from nav_simulator.domain.returns import PeriodReturnAnalyzer, Window
from nav_simulator.domain.series import ValuationSeries


def make_series(*points: tuple[date, str]) -> ValuationSeries:
    return ValuationSeries(ValuationRecord(nav_date=d, value=Decimal(v)) for d, v in points)


def test_all_window_uses_earliest_record():
    series = make_series((date(2020, 1, 1), "10"), (date(2023, 1, 1), "20"))

    result = PeriodReturnAnalyzer().trailing_return(series, Window.ALL, as_of=date(2023, 1, 5))

    assert result.change_percent == Decimal("100")
    assert result.is_positive
    assert result.start_value == Decimal("10")
    assert result.latest_value == Decimal("20")


def test_finite_window_uses_nearest_to_cutoff_with_earlier_tie():
    series = make_series(
        (date(2022, 1, 10), "50"),
        (date(2022, 1, 20), "40"),
        (date(2023, 1, 13), "60"),
    )

    result = PeriodReturnAnalyzer().trailing_return(series, "1Y", as_of=date(2023, 1, 15))

    assert result.window == "1Y"
    assert result.start_value == Decimal("50")
    assert result.change_percent == Decimal("20")


def test_negative_change_is_not_positive():
    series = make_series((date(2023, 1, 1), "20"), (date(2023, 2, 1), "15"))

    result = PeriodReturnAnalyzer().trailing_return(series, Window.ONE_MONTH, as_of=date(2023, 2, 1))

    assert result.change_percent == Decimal("-25")
    assert not result.is_positive


def test_empty_series_has_no_return():
    assert PeriodReturnAnalyzer().trailing_return(ValuationSeries(), Window.ALL) is None


def test_zero_start_value_has_no_return():
    series = make_series((date(2020, 1, 1), "0"), (date(2023, 1, 1), "20"))

    assert PeriodReturnAnalyzer().trailing_return(series, Window.ALL, as_of=date(2023, 1, 1)) is None


def test_all_returns_covers_every_window():
    series = make_series((date(2020, 1, 1), "10"), (date(2023, 1, 1), "20"))

    results = PeriodReturnAnalyzer().all_returns(series, as_of=date(2023, 1, 1))

    assert list(results) == list(Window)
    assert all(result is not None for result in results.values())


def test_window_cutoff_and_records():
    series = make_series((date(2024, 1, 15), "10"), (date(2024, 3, 1), "11"), (date(2024, 3, 30), "12"))
    analyzer = PeriodReturnAnalyzer()

    assert Window.ONE_MONTH.cutoff(date(2024, 3, 31)) == date(2024, 2, 29)
    assert Window.ALL.cutoff(date(2024, 3, 31)) is None
    assert [r.value for r in analyzer.window_records(series, Window.ONE_MONTH, as_of=date(2024, 3, 31))] == [
        Decimal("11"),
        Decimal("12"),
    ]
    assert len(analyzer.window_records(series, Window.ALL)) == 3


@pytest.mark.parametrize("window, months", [("1M", 1), ("3M", 3), ("6M", 6), ("1Y", 12), ("3Y", 36), ("5Y", 60)])
def test_window_months(window, months):
    assert Window(window).months == months
