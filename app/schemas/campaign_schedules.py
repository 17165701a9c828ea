from pydantic import BaseModel
from datetime import date, datetime
from typing import List, Optional

from app.services.scheduling.types import FailureReason


class CampaignScheduleBase(BaseModel):
    store_id: int
    activity_date: date


class CampaignScheduleUpsert(CampaignScheduleBase):
    campaign_id: int


class CampaignScheduleBatch(BaseModel):
    campaign_id: int
    schedules: List[CampaignScheduleBase]


class CampaignScheduleResponse(CampaignScheduleBase):
    id: int
    campaign_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PlacedStoreResponse(CampaignScheduleBase):
    relaxed: bool


class UnplacedStoreResponse(BaseModel):
    store_id: int
    store_name: str
    reason: str
    reason_code: FailureReason
    strict_reason: Optional[str] = None


class AutoScheduleResponse(BaseModel):
    campaign_id: int
    success: bool
    error: Optional[str] = None
    candidate_dates: List[date]
    placed: List[PlacedStoreResponse]
    unplaced: List[UnplacedStoreResponse]
    summary: str


class AutoScheduleApplyRequest(BaseModel):
    confirm_partial: bool = False


class AutoScheduleApplyResponse(BaseModel):
    campaign_id: int
    saved: List[CampaignScheduleResponse]
    unplaced: List[UnplacedStoreResponse]
    summary: str
