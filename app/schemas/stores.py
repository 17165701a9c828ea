from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class StoreBase(BaseModel):
    store_code: str
    store_name: str
    short_name: Optional[str] = None
    supervisor_id: Optional[str] = None
    is_active: bool = True


class StoreCreate(StoreBase):
    pass


class StoreUpdate(BaseModel):
    store_code: Optional[str] = None
    store_name: Optional[str] = None
    short_name: Optional[str] = None
    supervisor_id: Optional[str] = None
    is_active: Optional[bool] = None


class StoreResponse(StoreBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
