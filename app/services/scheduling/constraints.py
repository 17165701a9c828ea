"""
Constraint checking utilities for activity placement.
Handles weekday rules, per-day capacity and supervisor spreading, plus
a post-hoc validator for finished schedules.
"""

from collections import Counter, defaultdict
from datetime import date
from typing import Iterable, Mapping, Optional

from .types import (
    FailureReason,
    Rejection,
    ScheduleContext,
    ScheduleResult,
    StoreActivitySetting,
    UNASSIGNED_SUPERVISOR,
)
from .dates import adjacent_dates, is_blocked, weekday_name


def check_weekday_rules(
    setting: Optional[StoreActivitySetting],
    day: date
) -> Optional[Rejection]:
    """Forbidden weekdays are checked before allowed weekdays."""
    if setting is None:
        return None

    weekday = day.isoweekday()
    if setting.forbidden_days and weekday in setting.forbidden_days:
        return Rejection(
            FailureReason.WEEKDAY_RESTRICTION,
            f"cannot be scheduled on {weekday_name(weekday)}",
        )
    if setting.allowed_days and weekday not in setting.allowed_days:
        allowed = ", ".join(weekday_name(d) for d in sorted(setting.allowed_days))
        return Rejection(
            FailureReason.WEEKDAY_RESTRICTION,
            f"only allowed on {allowed}",
        )
    return None


def check_capacity(
    date_count: Mapping[date, int],
    day: date,
    max_per_day: int
) -> Optional[Rejection]:
    count = date_count.get(day, 0)
    if count >= max_per_day:
        return Rejection(
            FailureReason.CAPACITY,
            f"{day.isoformat()} is full ({count}/{max_per_day})",
        )
    return None


def check_same_day_supervisor(
    date_supervisors: Mapping[date, set[str]],
    day: date,
    supervisor_id: Optional[str]
) -> Optional[Rejection]:
    if supervisor_id is None:
        return None
    if supervisor_id in date_supervisors.get(day, ()):
        return Rejection(
            FailureReason.SUPERVISOR_CONFLICT,
            f"{day.isoformat()} already has a store from the same supervisor",
        )
    return None


def check_adjacent_supervisor(
    date_supervisors: Mapping[date, set[str]],
    day: date,
    supervisor_id: Optional[str]
) -> Optional[Rejection]:
    """
    Reject when the day before or after already hosts the same supervisor.
    Neighbours missing from the bookkeeping (outside the pool) never conflict.
    """
    if supervisor_id is None:
        return None
    for neighbour in adjacent_dates(day):
        if supervisor_id in date_supervisors.get(neighbour, ()):
            return Rejection(
                FailureReason.SUPERVISOR_CONFLICT,
                f"{day.isoformat()} is adjacent to a same-supervisor date ({neighbour.isoformat()})",
            )
    return None


def check_placement(
    day: date,
    setting: Optional[StoreActivitySetting],
    supervisor_id: Optional[str],
    date_count: Mapping[date, int],
    date_supervisors: Mapping[date, set[str]],
    max_per_day: int,
    strict: bool = True,
) -> Optional[Rejection]:
    """
    Run the placement checks in order and return the first rejection.

    The relaxed variant (strict=False) keeps the weekday rules and the
    capacity limit but drops both supervisor checks.
    """
    rejection = check_weekday_rules(setting, day)
    if rejection:
        return rejection

    rejection = check_capacity(date_count, day, max_per_day)
    if rejection:
        return rejection

    if not strict:
        return None

    rejection = check_same_day_supervisor(date_supervisors, day, supervisor_id)
    if rejection:
        return rejection

    return check_adjacent_supervisor(date_supervisors, day, supervisor_id)


def validate_schedule(
    context: ScheduleContext,
    result: ScheduleResult,
    allowed_weekdays: Iterable[int],
    max_per_day: int,
    group_unassigned: bool = True,
) -> dict:
    """
    Validate a finished schedule against the placement invariants.

    Supervisor rules are only enforced between assignments made by the
    strict pass.

    Returns:
        {
            'valid': bool,
            'over_capacity': {date: count},
            'out_of_range': [store_id],
            'blocked_dates': [store_id],
            'disallowed_weekdays': [store_id],
            'weekday_violations': [store_id],
            'duplicate_stores': [store_id],
            'unaccounted_stores': [store_id],
            'supervisor_conflicts': [(date, supervisor_id)],
        }
    """
    allowed = set(allowed_weekdays)
    store_map = context.store_map

    counts = Counter(a.activity_date for a in result.placed)
    over_capacity = {d: c for d, c in counts.items() if c > max_per_day}

    out_of_range = []
    blocked = []
    disallowed = []
    weekday_violations = []
    for a in result.placed:
        if not (context.campaign_start <= a.activity_date <= context.campaign_end):
            out_of_range.append(a.store_id)
        if is_blocked(a.activity_date, context.blocked_events):
            blocked.append(a.store_id)
        if a.activity_date.isoweekday() not in allowed:
            disallowed.append(a.store_id)
        if check_weekday_rules(context.settings.get(a.store_id), a.activity_date):
            weekday_violations.append(a.store_id)

    store_counts = Counter(a.store_id for a in result.placed)
    duplicates = [sid for sid, c in store_counts.items() if c > 1]

    seen = [a.store_id for a in result.placed] + [u.store.id for u in result.unplaced]
    unaccounted = [s.id for s in context.stores if s.id not in seen]

    strict_supervisors: dict[date, list[str]] = defaultdict(list)
    for a in result.placed:
        store = store_map.get(a.store_id)
        if a.relaxed or store is None:
            continue
        key = store.supervisor_id or (UNASSIGNED_SUPERVISOR if group_unassigned else None)
        if key is not None:
            strict_supervisors[a.activity_date].append(key)

    supervisor_conflicts = []
    for day, supervisors in sorted(strict_supervisors.items()):
        for supervisor_id, c in Counter(supervisors).items():
            if c > 1:
                supervisor_conflicts.append((day, supervisor_id))
        for neighbour in adjacent_dates(day):
            if neighbour > day:
                for supervisor_id in set(supervisors) & set(strict_supervisors.get(neighbour, ())):
                    supervisor_conflicts.append((day, supervisor_id))

    return {
        'valid': not (
            over_capacity or out_of_range or blocked or disallowed or weekday_violations
            or duplicates or unaccounted or supervisor_conflicts
        ),
        'over_capacity': over_capacity,
        'out_of_range': out_of_range,
        'blocked_dates': blocked,
        'disallowed_weekdays': disallowed,
        'weekday_violations': weekday_violations,
        'duplicate_stores': duplicates,
        'unaccounted_stores': unaccounted,
        'supervisor_conflicts': supervisor_conflicts,
    }
