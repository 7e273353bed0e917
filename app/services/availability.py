from datetime import date, datetime, time
from typing import Iterable, Optional, Union

from app.services.errors import ClosedForPickupTime


DAYS_OF_WEEK = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]


class ScheduleValidationError(ValueError):
    pass


def weekday_index(value: Union[date, datetime]) -> int:
    """Day of week with Sunday as 0."""
    return (value.weekday() + 1) % 7


def _hour_minute(value: Union[time, datetime]):
    return value.hour, value.minute


def is_open(schedule: Iterable, pickup_date: Union[date, datetime], pickup_time: Union[time, datetime]) -> bool:
    """Return True if any schedule entry for the pickup weekday covers the pickup time.

    Only hour and minute of the stored entries matter; their date part (if
    any) is discarded and replaced by the pickup date. Bounds are inclusive.
    An entry whose close time is before its open time never matches, and an
    empty schedule means closed.
    """
    pickup_day = weekday_index(pickup_date)
    hour, minute = _hour_minute(pickup_time)
    candidate = datetime(pickup_date.year, pickup_date.month, pickup_date.day, hour, minute)

    for entry in schedule or ():
        if entry.day != pickup_day:
            continue
        open_at = datetime(pickup_date.year, pickup_date.month, pickup_date.day, *_hour_minute(entry.start_time))
        close_at = datetime(pickup_date.year, pickup_date.month, pickup_date.day, *_hour_minute(entry.end_time))
        if open_at <= candidate <= close_at:
            return True
    return False


def ensure_open(schedule: Iterable, pickup_datetime: datetime) -> None:
    if not is_open(schedule, pickup_datetime, pickup_datetime):
        raise ClosedForPickupTime()


def validate_schedule_entry(day: int, start_time: Optional[time], end_time: Optional[time]) -> None:
    if day is None or not 0 <= int(day) <= 6:
        raise ScheduleValidationError("Day must be between 0 (Sunday) and 6 (Saturday)")
    if start_time is None or end_time is None:
        raise ScheduleValidationError("Start and end times are required")
    if _hour_minute(start_time) >= _hour_minute(end_time):
        raise ScheduleValidationError(
            f"Start time must be before end time on {DAYS_OF_WEEK[int(day)]}"
        )
