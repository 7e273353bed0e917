from datetime import date, datetime, time
from types import SimpleNamespace

import pytest

from app.services.availability import (
    ScheduleValidationError,
    ensure_open,
    is_open,
    validate_schedule_entry,
    weekday_index,
)
from app.services.errors import ClosedForPickupTime

SUNDAY = date(2026, 10, 18)
MONDAY = date(2026, 10, 19)


def entry(day, start, end):
    return SimpleNamespace(day=day, start_time=start, end_time=end)


def test_weekday_index_is_sunday_first():
    assert weekday_index(SUNDAY) == 0
    assert weekday_index(MONDAY) == 1
    assert weekday_index(date(2026, 10, 24)) == 6


def test_open_inside_window_and_on_both_bounds():
    schedule = [entry(0, time(10, 0), time(18, 0))]
    assert is_open(schedule, SUNDAY, time(12, 30))
    assert is_open(schedule, SUNDAY, time(10, 0))
    assert is_open(schedule, SUNDAY, time(18, 0))


def test_closed_outside_window():
    schedule = [entry(0, time(10, 0), time(18, 0))]
    assert not is_open(schedule, SUNDAY, time(9, 59))
    assert not is_open(schedule, SUNDAY, time(18, 1))


def test_closed_on_day_without_entry():
    schedule = [entry(0, time(10, 0), time(18, 0))]
    assert not is_open(schedule, MONDAY, time(12, 0))


def test_empty_schedule_means_closed():
    assert not is_open([], SUNDAY, time(12, 0))
    assert not is_open(None, SUNDAY, time(12, 0))


def test_any_matching_entry_opens():
    schedule = [
        entry(0, time(8, 0), time(10, 0)),
        entry(0, time(17, 0), time(21, 0)),
    ]
    assert is_open(schedule, SUNDAY, time(18, 0))
    assert not is_open(schedule, SUNDAY, time(12, 0))


def test_overnight_entry_never_matches():
    schedule = [entry(0, time(22, 0), time(2, 0))]
    assert not is_open(schedule, SUNDAY, time(23, 0))
    assert not is_open(schedule, SUNDAY, time(1, 0))


def test_only_hour_and_minute_of_entries_matter():
    schedule = [entry(0, datetime(1999, 1, 1, 10, 0, 59), datetime(1999, 1, 1, 11, 0))]
    assert is_open(schedule, SUNDAY, datetime(2026, 10, 18, 10, 0, 30))


def test_ensure_open_raises_when_closed():
    schedule = [entry(1, time(10, 0), time(18, 0))]
    ensure_open(schedule, datetime(2026, 10, 19, 12, 0))
    with pytest.raises(ClosedForPickupTime):
        ensure_open(schedule, datetime(2026, 10, 19, 20, 0))


@pytest.mark.parametrize("day,start,end", [
    (7, time(10, 0), time(12, 0)),
    (-1, time(10, 0), time(12, 0)),
    (1, None, time(12, 0)),
    (1, time(12, 0), time(12, 0)),
    (1, time(18, 0), time(9, 0)),
])
def test_schedule_entry_validation_rejects(day, start, end):
    with pytest.raises(ScheduleValidationError):
        validate_schedule_entry(day, start, end)


def test_schedule_entry_validation_accepts_valid_entry():
    validate_schedule_entry(3, time(9, 0), time(17, 30))


def test_monday_ten_to_five_scenario():
    schedule = [entry(1, time(10, 0), time(17, 0))]
    assert is_open(schedule, MONDAY, time(12, 0))
    assert not is_open(schedule, MONDAY, time(18, 0))
    assert not is_open(schedule, date(2026, 10, 20), time(12, 0))
