"""
Appointment slot availability

The shop has a single chair, so slots are shared by every service: a booked
slot blocks all services for that date and time.

Slots are discrete HH:MM labels between the opening and closing hour. The
closing hour itself is a bookable slot (e.g. 17:00) but nothing after it.
"""

from datetime import date, datetime, time, timedelta
from typing import Iterable, Iterator, Optional

from ...config import BUSINESS_END_HOUR, BUSINESS_START_HOUR, SLOT_INTERVAL_MINUTES

TIME_FORMAT = "%H:%M"
DATE_FORMAT = "%Y-%m-%d"


def generate_time_slots(
    start_hour: int = BUSINESS_START_HOUR,
    end_hour: int = BUSINESS_END_HOUR,
    interval: int = SLOT_INTERVAL_MINUTES,
) -> Iterator[str]:
    """
    Yield slot labels from start_hour:00 up to and including end_hour:00.

    Args:
        start_hour: Opening hour (0-23)
        end_hour: Closing hour (0-23), its :00 slot is included
        interval: Minutes between slots

    Raises:
        ValueError: If the hours or interval are out of range
    """
    if interval <= 0:
        raise ValueError("Slot interval must be a positive number of minutes")
    if not 0 <= start_hour <= end_hour <= 23:
        raise ValueError("Business hours must satisfy 0 <= start_hour <= end_hour <= 23")

    minute_of_day = start_hour * 60
    closing_minute = end_hour * 60
    while minute_of_day <= closing_minute:
        hours, minutes = divmod(minute_of_day, 60)
        yield f"{hours:02d}:{minutes:02d}"
        minute_of_day += interval


def parse_slot_time(value: str) -> time:
    """Parse an HH:MM label into a time (raises ValueError on bad input)"""
    return datetime.strptime(value.strip(), TIME_FORMAT).time()


def parse_slot_date(value: str) -> date:
    """Parse a YYYY-MM-DD string into a date (raises ValueError on bad input)"""
    return datetime.strptime(value.strip(), DATE_FORMAT).date()


def slot_datetime(day: date, label: str) -> datetime:
    return datetime.combine(day, parse_slot_time(label))


def is_slot_past(day: date, label: str, now: datetime) -> bool:
    """A slot is past unless its date and time are strictly after now"""
    return slot_datetime(day, label) <= now


def is_bookable_label(label: str) -> bool:
    return label in set(generate_time_slots())


def available_slots(
    day: date,
    booked: Iterable[str],
    now: datetime,
    slots: Optional[Iterable[str]] = None,
) -> list[str]:
    """
    Return the slots for a day that are neither past nor already booked.

    Args:
        day: Calendar date being viewed
        booked: Labels held by non-canceled appointments on that date
        now: Evaluation instant. Results for today shrink as this advances,
            so callers should refetch rather than cache same-day results
        slots: Candidate labels, defaults to the configured business day
    """
    taken = set(booked)
    candidates = generate_time_slots() if slots is None else slots
    return [
        label
        for label in candidates
        if label not in taken and not is_slot_past(day, label, now)
    ]


def calculate_end_time(start_time: str, duration_minutes: int) -> str:
    """
    Compute the HH:MM end label of a service starting at start_time.

    Hours are not wrapped at midnight, so a very long service can yield
    labels such as "24:30".
    """
    if duration_minutes is None or duration_minutes < 0:
        raise ValueError("Duration must be a non-negative number of minutes")

    start = parse_slot_time(start_time)
    total = start.hour * 60 + start.minute + int(duration_minutes)
    hours, minutes = divmod(total, 60)
    return f"{hours:02d}:{minutes:02d}"


def booking_horizon(today: date, days: int) -> date:
    """Last date that can be booked"""
    return today + timedelta(days=days)
