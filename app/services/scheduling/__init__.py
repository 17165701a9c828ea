"""
Activity scheduling service package.

Usage:
    from app.services.scheduling import generate_schedule

    # Simple usage - load data and solve in one call
    result = generate_schedule(db, campaign_id=1)

    # Or build the inputs yourself (no database involved)
    from datetime import date
    from app.services.scheduling import schedule, Store

    result = schedule(
        date(2024, 3, 1), date(2024, 3, 31),
        stores=[Store(id=1, name="Main St", supervisor_id="S1")],
    )
"""

from .types import (
    UNASSIGNED_SUPERVISOR,
    BlockedDateEvent,
    FailureReason,
    Rejection,
    ScheduleAssignment,
    ScheduleContext,
    ScheduleInputError,
    ScheduleResult,
    Store,
    StoreActivitySetting,
    UnplacedStore,
)
from .data_loader import CampaignNotFoundError, load_schedule_context
from .generator import format_schedule_summary, generate_schedule, generate_schedule_from_context
from .persistence import (
    CapacityExceededError,
    replace_campaign_schedules,
    save_assignments,
    upsert_assignment,
)
from .solver import ALLOWED_WEEKDAYS, MAX_PER_DAY, ActivityScheduler, schedule, solve_schedule

__all__ = [
    # Types
    "BlockedDateEvent",
    "FailureReason",
    "Rejection",
    "ScheduleAssignment",
    "ScheduleContext",
    "ScheduleResult",
    "Store",
    "StoreActivitySetting",
    "UnplacedStore",
    "UNASSIGNED_SUPERVISOR",
    # Errors
    "CampaignNotFoundError",
    "CapacityExceededError",
    "ScheduleInputError",
    # Policy
    "ALLOWED_WEEKDAYS",
    "MAX_PER_DAY",
    # Main entry points
    "generate_schedule",
    "generate_schedule_from_context",
    "schedule",
    "format_schedule_summary",
    # Lower-level functions
    "ActivityScheduler",
    "load_schedule_context",
    "solve_schedule",
    "replace_campaign_schedules",
    "save_assignments",
    "upsert_assignment",
]
