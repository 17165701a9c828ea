"""
Schedule generator - main orchestration layer.

This module provides the high-level API for auto-scheduling a campaign,
combining data loading and solving into a single flow, and renders the
summary an operator confirms before anything is saved.
"""

from sqlalchemy.orm import Session

from .data_loader import load_schedule_context
from .solver import solve_schedule
from .types import ScheduleContext, ScheduleResult


SUMMARY_SUGGESTIONS = [
    "Check whether the store activity settings are too strict",
    "Extend the campaign period to add more candidate dates",
    "Place these stores manually",
]


def generate_schedule(db: Session, campaign_id: int) -> ScheduleResult:
    """
    Auto-schedule every active store for a campaign.

    main entry point for activity scheduling. This function:
    1. Loads campaign, stores, settings and event dates from the database
    2. Runs the two-pass scheduler
    3. Returns the result; nothing is persisted

    Args:
        db: Database session
        campaign_id: The campaign to schedule

    Returns:
        ScheduleResult containing:
        - success: True when every store was placed
        - placed: list of ScheduleAssignment
        - unplaced: stores that could not be placed, with reasons
        - candidate_dates: the pool the scheduler worked from
        - error: message when the candidate pool was empty

    Raises:
        CampaignNotFoundError: if the campaign does not exist
        ScheduleInputError: if the campaign dates are inverted

    Example:
        from app.services.scheduling import generate_schedule, replace_campaign_schedules

        result = generate_schedule(db, campaign_id=1)
        if result.error is None:
            replace_campaign_schedules(db, 1, result.placed)
            db.commit()
    """
    context = load_schedule_context(db, campaign_id)
    return solve_schedule(context)


def generate_schedule_from_context(context: ScheduleContext) -> ScheduleResult:
    """
    Generate a schedule from a pre-loaded context.

    Useful for testing or when you want to manipulate the context
    before solving.
    """
    return solve_schedule(context)


def format_schedule_summary(result: ScheduleResult) -> str:
    """Human-readable summary shown before an operator applies a schedule."""
    if result.error:
        return result.error

    lines = [f"Auto-scheduled {len(result.placed)}/{result.total_stores} stores."]
    if result.relaxed_count:
        lines.append(
            f"{result.relaxed_count} placed with supervisor spreading relaxed."
        )

    if result.unplaced:
        lines.append("")
        lines.append(f"{len(result.unplaced)} stores could not be scheduled:")
        for u in result.unplaced:
            lines.append(f"- {u.store.name}: {u.reason}")
        lines.append("")
        lines.append("Suggestions:")
        for i, suggestion in enumerate(SUMMARY_SUGGESTIONS, start=1):
            lines.append(f"{i}. {suggestion}")

    lines.append("")
    lines.append("Applying this schedule replaces the campaign's existing schedule.")
    return "\n".join(lines)
