from pydantic import BaseModel, Field
from datetime import datetime
from typing import Annotated, Optional

IsoWeekday = Annotated[int, Field(ge=1, le=7)]  # 1=Monday ... 7=Sunday


class StoreActivitySettingBase(BaseModel):
    store_id: int
    allowed_days: Optional[list[IsoWeekday]] = None
    forbidden_days: Optional[list[IsoWeekday]] = None
    notes: Optional[str] = None


class StoreActivitySettingUpsert(StoreActivitySettingBase):
    pass


class StoreActivitySettingResponse(StoreActivitySettingBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
