from datetime import datetime, timezone
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_campaign_or_404
from app.db.models.campaigns import Campaigns
from app.db.models.campaign_schedules import CampaignSchedules
from app.schemas.campaigns import (
    CampaignCreate,
    CampaignUpdate,
    CampaignResponse,
    CampaignPublishRequest,
    PublishTarget,
)

router = APIRouter(prefix="/campaigns", tags=["campaigns"])


@router.post("", response_model=CampaignResponse, status_code=status.HTTP_201_CREATED)
def create_campaign(
    payload: CampaignCreate,
    db: Session = Depends(get_db),
):
    campaign = Campaigns(**payload.model_dump())
    db.add(campaign)
    db.commit()
    db.refresh(campaign)
    return campaign


@router.get("", response_model=List[CampaignResponse])
def list_campaigns(
    active: Optional[bool] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
):
    query = db.query(Campaigns)
    if active is not None:
        query = query.filter(Campaigns.is_active == active)
    return query.order_by(Campaigns.start_date.desc()).offset(skip).limit(limit).all()


@router.get("/{campaign_id}", response_model=CampaignResponse)
def get_campaign(campaign: Campaigns = Depends(get_campaign_or_404)):
    return campaign


@router.put("/{campaign_id}", response_model=CampaignResponse)
def update_campaign(
    payload: CampaignUpdate,
    campaign: Campaigns = Depends(get_campaign_or_404),
    db: Session = Depends(get_db),
):
    update_data = payload.model_dump(exclude_unset=True)
    start = update_data.get("start_date", campaign.start_date)
    end = update_data.get("end_date", campaign.end_date)
    if end < start:
        raise HTTPException(status_code=422, detail="end_date must not be before start_date")

    for field, value in update_data.items():
        setattr(campaign, field, value)

    db.commit()
    db.refresh(campaign)
    return campaign


@router.patch("/{campaign_id}/publish", response_model=CampaignResponse)
def publish_campaign(
    payload: CampaignPublishRequest,
    campaign: Campaigns = Depends(get_campaign_or_404),
    db: Session = Depends(get_db),
):
    if payload.target == PublishTarget.SUPERVISORS:
        campaign.published_to_supervisors = payload.status
    else:
        campaign.published_to_store_managers = payload.status

    if payload.status:
        campaign.published_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(campaign)
    return campaign


@router.delete("/{campaign_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_campaign(
    campaign: Campaigns = Depends(get_campaign_or_404),
    db: Session = Depends(get_db),
):
    db.query(CampaignSchedules).filter(CampaignSchedules.campaign_id == campaign.id).delete()
    db.delete(campaign)
    db.commit()
