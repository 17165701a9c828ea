from collections import Counter
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_campaign_or_404, get_store_or_404
from app.db.models.campaigns import Campaigns
from app.db.models.campaign_schedules import CampaignSchedules
from app.db.models.stores import Stores
from app.schemas.campaign_schedules import (
    CampaignScheduleUpsert,
    CampaignScheduleBatch,
    CampaignScheduleResponse,
)
from app.services.scheduling.persistence import (
    CapacityExceededError,
    delete_schedule,
    replace_campaign_schedules,
    upsert_assignment,
)
from app.services.scheduling.solver import MAX_PER_DAY

router = APIRouter(prefix="/campaign-schedules", tags=["campaign-schedules"])


def _check_in_range(campaign: Campaigns, activity_date) -> None:
    if not (campaign.start_date <= activity_date <= campaign.end_date):
        raise HTTPException(
            status_code=422,
            detail=f"{activity_date.isoformat()} is outside the campaign period "
                   f"({campaign.start_date.isoformat()} to {campaign.end_date.isoformat()})",
        )


@router.get("", response_model=List[CampaignScheduleResponse])
def list_schedules(
    campaign_id: int,
    db: Session = Depends(get_db),
):
    return (
        db.query(CampaignSchedules)
        .filter(CampaignSchedules.campaign_id == campaign_id)
        .order_by(CampaignSchedules.activity_date, CampaignSchedules.store_id)
        .all()
    )


@router.post("", response_model=CampaignScheduleResponse)
def place_store(
    payload: CampaignScheduleUpsert,
    db: Session = Depends(get_db),
):
    """Manually place (or move) one store. A date holds at most MAX_PER_DAY stores."""
    campaign = get_campaign_or_404(payload.campaign_id, db)
    get_store_or_404(db, payload.store_id)
    _check_in_range(campaign, payload.activity_date)

    try:
        row = upsert_assignment(
            db,
            campaign.id,
            payload.store_id,
            payload.activity_date,
            max_per_day=MAX_PER_DAY,
        )
    except CapacityExceededError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    db.commit()
    db.refresh(row)
    return row


@router.put("", response_model=List[CampaignScheduleResponse])
def replace_schedules(
    payload: CampaignScheduleBatch,
    db: Session = Depends(get_db),
):
    """Replace every schedule of a campaign with the submitted list."""
    campaign = get_campaign_or_404(payload.campaign_id, db)

    store_counts = Counter(s.store_id for s in payload.schedules)
    duplicates = sorted(sid for sid, c in store_counts.items() if c > 1)
    if duplicates:
        raise HTTPException(status_code=400, detail=f"Stores scheduled more than once: {duplicates}")

    known = {
        sid for (sid,) in db.query(Stores.id).filter(Stores.id.in_(list(store_counts))).all()
    }
    missing = sorted(set(store_counts) - known)
    if missing:
        raise HTTPException(status_code=404, detail=f"Stores not found: {missing}")

    for s in payload.schedules:
        _check_in_range(campaign, s.activity_date)

    date_counts = Counter(s.activity_date for s in payload.schedules)
    full = sorted(d.isoformat() for d, c in date_counts.items() if c > MAX_PER_DAY)
    if full:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"More than {MAX_PER_DAY} stores on: {', '.join(full)}",
        )

    rows = replace_campaign_schedules(db, campaign.id, payload.schedules)
    db.commit()
    for row in rows:
        db.refresh(row)
    return rows


@router.delete("/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_schedule(
    schedule_id: int,
    db: Session = Depends(get_db),
):
    if not delete_schedule(db, schedule_id):
        raise HTTPException(status_code=404, detail="Schedule not found")
    db.commit()
