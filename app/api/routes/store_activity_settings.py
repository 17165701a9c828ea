from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_store_or_404
from app.db.models.store_activity_settings import StoreActivitySettings
from app.schemas.store_activity_settings import (
    StoreActivitySettingUpsert,
    StoreActivitySettingResponse,
)

router = APIRouter(prefix="/store-activity-settings", tags=["store-activity-settings"])


@router.get("", response_model=List[StoreActivitySettingResponse])
def list_settings(db: Session = Depends(get_db)):
    return db.query(StoreActivitySettings).order_by(StoreActivitySettings.created_at).all()


@router.post("", response_model=StoreActivitySettingResponse)
def upsert_setting(
    payload: StoreActivitySettingUpsert,
    db: Session = Depends(get_db),
):
    """Create or replace the weekday settings of a store."""
    get_store_or_404(db, payload.store_id)

    overlap = set(payload.allowed_days or []) & set(payload.forbidden_days or [])
    if overlap:
        raise HTTPException(
            status_code=422,
            detail=f"Weekdays {sorted(overlap)} are both allowed and forbidden",
        )

    setting = db.query(StoreActivitySettings).filter(
        StoreActivitySettings.store_id == payload.store_id
    ).first()
    if not setting:
        setting = StoreActivitySettings(store_id=payload.store_id)
        db.add(setting)

    # empty lists mean "no restriction"
    setting.allowed_days = sorted(set(payload.allowed_days)) if payload.allowed_days else None
    setting.forbidden_days = sorted(set(payload.forbidden_days)) if payload.forbidden_days else None
    setting.notes = payload.notes or None

    db.commit()
    db.refresh(setting)
    return setting


@router.delete("/{setting_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_setting(
    setting_id: int,
    db: Session = Depends(get_db),
):
    setting = db.get(StoreActivitySettings, setting_id)
    if not setting:
        raise HTTPException(status_code=404, detail="Setting not found")
    db.delete(setting)
    db.commit()
