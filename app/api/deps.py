from typing import Generator
from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from app.db.database import SessionLocal
from app.db.models.campaigns import Campaigns
from app.db.models.stores import Stores


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_campaign_or_404(campaign_id: int, db: Session = Depends(get_db)) -> Campaigns:
    campaign = db.get(Campaigns, campaign_id)
    if not campaign:
        raise HTTPException(status_code=404, detail="Campaign not found")
    return campaign


def get_store_or_404(db: Session, store_id: int) -> Stores:
    store = db.get(Stores, store_id)
    if not store:
        raise HTTPException(status_code=404, detail="Store not found")
    return store
