"""
Data loader for activity scheduling.
Fetches campaign, stores, settings and event dates from the database and
converts them to internal types.
"""

from datetime import date
from sqlalchemy import select, and_
from sqlalchemy.orm import Session

from app.db.models.campaigns import Campaigns
from app.db.models.stores import Stores
from app.db.models.store_activity_settings import StoreActivitySettings
from app.db.models.event_dates import EventDates

from .types import (
    BlockedDateEvent,
    ScheduleContext,
    Store,
    StoreActivitySetting,
)


class CampaignNotFoundError(LookupError):
    pass


def load_campaign(db: Session, campaign_id: int) -> Campaigns:
    campaign = db.get(Campaigns, campaign_id)
    if campaign is None:
        raise CampaignNotFoundError(f"Campaign {campaign_id} not found")
    return campaign


def load_stores(db: Session) -> list[Store]:
    """Load active stores ordered by store code (the placement priority)."""

    stmt = select(Stores).where(Stores.is_active == True).order_by(Stores.store_code)
    rows = db.execute(stmt).scalars().all()

    return [
        Store(
            id=s.id,
            name=s.store_name,
            supervisor_id=s.supervisor_id or None,
        )
        for s in rows
    ]


def load_activity_settings(db: Session, store_ids: list[int]) -> dict[int, StoreActivitySetting]:
    """Load weekday settings for a set of stores, keyed by store id."""

    if not store_ids:
        return {}

    stmt = select(StoreActivitySettings).where(StoreActivitySettings.store_id.in_(store_ids))
    rows = db.execute(stmt).scalars().all()

    return {
        r.store_id: StoreActivitySetting(
            store_id=r.store_id,
            allowed_days=list(r.allowed_days or []),
            forbidden_days=list(r.forbidden_days or []),
        )
        for r in rows
    }


def load_blocked_events(db: Session, start: date, end: date) -> dict[date, BlockedDateEvent]:
    """Load event dates inside the range, keyed by date."""

    stmt = select(EventDates).where(
        and_(
            EventDates.event_date >= start,
            EventDates.event_date <= end,
        )
    )
    rows = db.execute(stmt).scalars().all()

    return {
        r.event_date: BlockedDateEvent(
            event_date=r.event_date,
            is_blocked=r.is_blocked,
            description=r.description,
        )
        for r in rows
    }


def load_schedule_context(db: Session, campaign_id: int) -> ScheduleContext:
    """
    Load all data needed to auto-schedule a campaign.

    Raises:
        CampaignNotFoundError: if the campaign does not exist
    """
    campaign = load_campaign(db, campaign_id)
    stores = load_stores(db)

    return ScheduleContext(
        campaign_id=campaign.id,
        campaign_start=campaign.start_date,
        campaign_end=campaign.end_date,
        stores=stores,
        settings=load_activity_settings(db, [s.id for s in stores]),
        blocked_events=load_blocked_events(db, campaign.start_date, campaign.end_date),
    )
