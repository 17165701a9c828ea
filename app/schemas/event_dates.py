from pydantic import BaseModel
from datetime import date, datetime
from typing import Optional
from app.db.models.event_dates import EventType


class EventDateBase(BaseModel):
    event_date: date
    description: Optional[str] = None
    event_type: EventType = EventType.HOLIDAY
    is_blocked: bool = False


class EventDateUpsert(EventDateBase):
    pass


class EventDateResponse(EventDateBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
