from datetime import date
from decimal import Decimal

import pytest

from nav_simulator.domain.schedule import ContributionScheduler, add_months
from nav_simulator.errors import InvalidParameterError


def test_add_months_clips_to_month_length():
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)
    assert add_months(date(2024, 3, 31), -1) == date(2024, 2, 29)


def test_schedule_keeps_anchor_day_after_short_month():
    schedule = ContributionScheduler().generate(date(2024, 1, 31), date(2024, 5, 1), Decimal("1000"))

    assert [event.contribution_date for event in schedule] == [
        date(2024, 1, 31),
        date(2024, 2, 29),
        date(2024, 3, 31),
        date(2024, 4, 30),
    ]


def test_schedule_end_date_is_inclusive():
    schedule = ContributionScheduler().generate(date(2024, 1, 15), date(2024, 3, 15), Decimal("500"))

    events = schedule.events()
    assert len(events) == 3
    assert events[-1].contribution_date == date(2024, 3, 15)
    assert all(event.amount == Decimal("500") for event in events)


def test_schedule_with_end_before_start_is_empty():
    schedule = ContributionScheduler().generate(date(2024, 5, 1), date(2024, 4, 1), Decimal("500"))

    assert schedule.events() == ()


def test_step_up_changes_only_at_calendar_year_boundary():
    schedule = ContributionScheduler().generate(
        date(2023, 11, 1),
        date(2025, 2, 1),
        Decimal("1000"),
        step_up_percent=Decimal("10"),
    )

    amounts = {}
    for event in schedule:
        amounts.setdefault(event.contribution_date.year, set()).add(event.amount)

    assert amounts == {2023: {Decimal("1000")}, 2024: {Decimal("1100")}, 2025: {Decimal("1210")}}


def test_schedule_is_restartable():
    schedule = ContributionScheduler().generate(date(2020, 1, 1), date(2021, 6, 1), Decimal("250"), step_up_percent=5)

    assert list(schedule) == list(schedule)
    assert len(schedule.events()) == 18


def test_unknown_cadence_is_rejected():
    with pytest.raises(InvalidParameterError):
        ContributionScheduler().generate(date(2024, 1, 1), date(2024, 6, 1), Decimal("100"), cadence="weekly")


@pytest.mark.parametrize("amount", ["0", "-100"])
def test_non_positive_amount_is_rejected(amount):
    with pytest.raises(InvalidParameterError, match="Invalid amount"):
        ContributionScheduler().generate(date(2024, 1, 1), date(2024, 6, 1), Decimal(amount))


def test_negative_step_up_is_rejected():
    with pytest.raises(InvalidParameterError, match="must not be negative"):
        ContributionScheduler().generate(date(2024, 1, 1), date(2024, 6, 1), Decimal("100"), step_up_percent=-5)
