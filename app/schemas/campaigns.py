from pydantic import BaseModel, model_validator
from datetime import date, datetime
from enum import Enum
from typing import Optional


class CampaignBase(BaseModel):
    name: str
    start_date: date
    end_date: date
    is_active: bool = True

    @model_validator(mode="after")
    def check_date_range(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class CampaignCreate(CampaignBase):
    pass


class CampaignUpdate(BaseModel):
    name: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: Optional[bool] = None

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        # omitted fields are left alone, but none of them may be cleared
        cleared = sorted(f for f in self.model_fields_set if getattr(self, f) is None)
        if cleared:
            raise ValueError(f"{', '.join(cleared)} cannot be null")
        return self


class PublishTarget(str, Enum):
    SUPERVISORS = "supervisors"
    STORE_MANAGERS = "store_managers"


class CampaignPublishRequest(BaseModel):
    target: PublishTarget
    status: bool


class CampaignResponse(CampaignBase):
    id: int
    published_to_supervisors: bool
    published_to_store_managers: bool
    published_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
