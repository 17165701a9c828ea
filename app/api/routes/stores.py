from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_store_or_404
from app.db.models.stores import Stores
from app.db.models.store_activity_settings import StoreActivitySettings
from app.db.models.campaign_schedules import CampaignSchedules
from app.schemas.stores import StoreCreate, StoreUpdate, StoreResponse

router = APIRouter(prefix="/stores", tags=["stores"])


@router.post("", response_model=StoreResponse, status_code=status.HTTP_201_CREATED)
def create_store(
    payload: StoreCreate,
    db: Session = Depends(get_db),
):
    existing = db.query(Stores).filter(Stores.store_code == payload.store_code).first()
    if existing:
        raise HTTPException(status_code=400, detail="Store code already exists")

    store = Stores(**payload.model_dump())
    db.add(store)
    db.commit()
    db.refresh(store)
    return store


@router.get("", response_model=List[StoreResponse])
def list_stores(
    active: Optional[bool] = None,
    supervisor_id: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
):
    query = db.query(Stores)
    if active is not None:
        query = query.filter(Stores.is_active == active)
    if supervisor_id:
        query = query.filter(Stores.supervisor_id == supervisor_id)
    return query.order_by(Stores.store_code).offset(skip).limit(limit).all()


@router.get("/{store_id}", response_model=StoreResponse)
def get_store(
    store_id: int,
    db: Session = Depends(get_db),
):
    return get_store_or_404(db, store_id)


@router.put("/{store_id}", response_model=StoreResponse)
def update_store(
    store_id: int,
    payload: StoreUpdate,
    db: Session = Depends(get_db),
):
    store = get_store_or_404(db, store_id)

    update_data = payload.model_dump(exclude_unset=True)
    if "store_code" in update_data and update_data["store_code"] != store.store_code:
        clash = db.query(Stores).filter(Stores.store_code == update_data["store_code"]).first()
        if clash:
            raise HTTPException(status_code=400, detail="Store code already exists")

    for field, value in update_data.items():
        setattr(store, field, value)

    db.commit()
    db.refresh(store)
    return store


@router.delete("/{store_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_store(
    store_id: int,
    db: Session = Depends(get_db),
):
    store = get_store_or_404(db, store_id)
    db.query(StoreActivitySettings).filter(StoreActivitySettings.store_id == store.id).delete()
    db.query(CampaignSchedules).filter(CampaignSchedules.store_id == store.id).delete()
    db.delete(store)
    db.commit()
