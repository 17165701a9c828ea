"""
Persistence writer for campaign schedules.
Callers own the transaction: nothing here commits.
"""

import logging
from datetime import date
from typing import Iterable, Optional, Protocol

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from app.db.models.campaign_schedules import CampaignSchedules


logger = logging.getLogger(__name__)


class AssignmentLike(Protocol):
    store_id: int
    activity_date: date


class CapacityExceededError(Exception):
    pass


def count_on_date(
    db: Session,
    campaign_id: int,
    activity_date: date,
    exclude_store_id: Optional[int] = None,
) -> int:
    """Number of stores already booked on a date for a campaign."""
    stmt = select(func.count(CampaignSchedules.id)).where(
        CampaignSchedules.campaign_id == campaign_id,
        CampaignSchedules.activity_date == activity_date,
    )
    if exclude_store_id is not None:
        stmt = stmt.where(CampaignSchedules.store_id != exclude_store_id)
    return db.execute(stmt).scalar_one()


def upsert_assignment(
    db: Session,
    campaign_id: int,
    store_id: int,
    activity_date: date,
    max_per_day: Optional[int] = None,
) -> CampaignSchedules:
    """
    Create or move a store's schedule for a campaign.

    Raises:
        CapacityExceededError: if max_per_day is given and the date is full
    """
    if max_per_day is not None:
        booked = count_on_date(db, campaign_id, activity_date, exclude_store_id=store_id)
        if booked >= max_per_day:
            raise CapacityExceededError(
                f"{activity_date.isoformat()} already has {booked} stores (max {max_per_day})"
            )

    row = db.execute(
        select(CampaignSchedules).where(
            CampaignSchedules.campaign_id == campaign_id,
            CampaignSchedules.store_id == store_id,
        )
    ).scalar_one_or_none()

    if row is None:
        row = CampaignSchedules(campaign_id=campaign_id, store_id=store_id, activity_date=activity_date)
        db.add(row)
    else:
        row.activity_date = activity_date

    db.flush()
    return row


def save_assignments(
    db: Session,
    campaign_id: int,
    assignments: Iterable[AssignmentLike],
) -> list[CampaignSchedules]:
    """Upsert each assignment by (campaign, store)."""
    rows = [
        upsert_assignment(db, campaign_id, a.store_id, a.activity_date)
        for a in assignments
    ]
    logger.info(f"Saved {len(rows)} schedules for campaign {campaign_id}")
    return rows


def replace_campaign_schedules(
    db: Session,
    campaign_id: int,
    assignments: Iterable[AssignmentLike],
) -> list[CampaignSchedules]:
    """Drop every schedule of the campaign, then insert the given ones."""
    db.execute(delete(CampaignSchedules).where(CampaignSchedules.campaign_id == campaign_id))

    rows = [
        CampaignSchedules(campaign_id=campaign_id, store_id=a.store_id, activity_date=a.activity_date)
        for a in assignments
    ]
    db.add_all(rows)
    db.flush()
    logger.info(f"Replaced schedules for campaign {campaign_id} with {len(rows)} rows")
    return rows


def delete_schedule(db: Session, schedule_id: int) -> bool:
    row = db.get(CampaignSchedules, schedule_id)
    if row is None:
        return False
    db.delete(row)
    db.flush()
    return True
