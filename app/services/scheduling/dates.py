"""
Calendar helpers for activity scheduling.
All weekdays are ISO numbers: 1=Monday ... 7=Sunday.
"""

from datetime import date, timedelta
from typing import Iterable, Iterator, Mapping

from .types import BlockedDateEvent


WEEKDAY_NAMES = {
    1: "Monday",
    2: "Tuesday",
    3: "Wednesday",
    4: "Thursday",
    5: "Friday",
    6: "Saturday",
    7: "Sunday",
}

ONE_DAY = timedelta(days=1)


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every date from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current += ONE_DAY


def weekday_name(weekday: int) -> str:
    return WEEKDAY_NAMES.get(weekday, f"weekday {weekday}")


def is_blocked(day: date, blocked_events: Mapping[date, BlockedDateEvent]) -> bool:
    event = blocked_events.get(day)
    return event is not None and event.is_blocked


def adjacent_dates(day: date) -> tuple[date, date]:
    """The calendar days immediately before and after."""
    return day - ONE_DAY, day + ONE_DAY


def build_candidate_dates(
    start: date,
    end: date,
    allowed_weekdays: Iterable[int],
    blocked_events: Mapping[date, BlockedDateEvent],
) -> list[date]:
    """
    Dates in [start, end] that may host an activity at all.

    A date qualifies when its weekday is one of allowed_weekdays and no
    blocked event sits on it. Order is chronological.
    """
    allowed = set(allowed_weekdays)
    return [
        d for d in iter_dates(start, end)
        if d.isoweekday() in allowed and not is_blocked(d, blocked_events)
    ]


def index_blocked_events(events: Iterable[BlockedDateEvent]) -> dict[date, BlockedDateEvent]:
    """Key events by date. A later event for the same date wins."""
    return {e.event_date: e for e in events}
