"""
Internal data types for activity scheduling.
decoupled from SQLAlchemy models for cleaner logic.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


# Stores without a supervisor are grouped under this pseudo-id
UNASSIGNED_SUPERVISOR = "unassigned"


class ScheduleInputError(ValueError):
    """Raised before scheduling when the inputs are malformed."""


class FailureReason(str, Enum):
    WEEKDAY_RESTRICTION = "WEEKDAY_RESTRICTION"
    CAPACITY = "CAPACITY"
    SUPERVISOR_CONFLICT = "SUPERVISOR_CONFLICT"
    NO_DATE_AVAILABLE = "NO_DATE_AVAILABLE"
    EMPTY_POOL = "EMPTY_POOL"


@dataclass
class Store:
    id: int
    name: str
    supervisor_id: Optional[str] = None


@dataclass
class StoreActivitySetting:
    """Per-store weekday rules, ISO weekdays (1=Monday ... 7=Sunday)."""
    store_id: int
    allowed_days: list[int] = field(default_factory=list)  # empty = any day
    forbidden_days: list[int] = field(default_factory=list)


@dataclass
class BlockedDateEvent:
    event_date: date
    is_blocked: bool = True
    description: Optional[str] = None


@dataclass(frozen=True)
class Rejection:
    """Why a candidate date was refused for a store."""
    code: FailureReason
    message: str


@dataclass(frozen=True)
class ScheduleAssignment:
    store_id: int
    activity_date: date
    relaxed: bool = False  # placed by the relaxed pass


@dataclass
class UnplacedStore:
    store: Store
    reason: str
    reason_code: FailureReason
    strict_reason: Optional[str] = None  # last rejection seen in the strict pass


@dataclass
class ScheduleContext:
    """All data needed to schedule one campaign."""
    campaign_start: date
    campaign_end: date
    stores: list[Store]  # priority order
    settings: dict[int, StoreActivitySetting] = field(default_factory=dict)
    blocked_events: dict[date, BlockedDateEvent] = field(default_factory=dict)
    campaign_id: Optional[int] = None

    @property
    def store_map(self) -> dict[int, Store]:
        return {s.id: s for s in self.stores}


@dataclass
class ScheduleResult:
    """Output of the scheduling algorithm."""
    success: bool
    placed: list[ScheduleAssignment]
    unplaced: list[UnplacedStore] = field(default_factory=list)
    candidate_dates: list[date] = field(default_factory=list)
    error: Optional[str] = None  # set only for terminal failures

    @property
    def total_stores(self) -> int:
        return len(self.placed) + len(self.unplaced)

    @property
    def relaxed_count(self) -> int:
        return sum(1 for a in self.placed if a.relaxed)

    def by_date(self) -> dict[date, list[int]]:
        """activity_date -> store ids, in date order."""
        grouped: dict[date, list[int]] = defaultdict(list)
        for a in sorted(self.placed, key=lambda a: a.activity_date):
            grouped[a.activity_date].append(a.store_id)
        return dict(grouped)
