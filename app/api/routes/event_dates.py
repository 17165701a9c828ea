from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.db.models.event_dates import EventDates
from app.schemas.event_dates import EventDateUpsert, EventDateResponse

router = APIRouter(prefix="/event-dates", tags=["event-dates"])


@router.get("", response_model=List[EventDateResponse])
def list_event_dates(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    blocked: Optional[bool] = None,
    db: Session = Depends(get_db),
):
    query = db.query(EventDates)
    if start_date:
        query = query.filter(EventDates.event_date >= start_date)
    if end_date:
        query = query.filter(EventDates.event_date <= end_date)
    if blocked is not None:
        query = query.filter(EventDates.is_blocked == blocked)
    return query.order_by(EventDates.event_date).all()


@router.post("", response_model=EventDateResponse)
def upsert_event_date(
    payload: EventDateUpsert,
    db: Session = Depends(get_db),
):
    """One event per calendar date; posting an existing date overwrites it."""
    event = db.query(EventDates).filter(EventDates.event_date == payload.event_date).first()
    if not event:
        event = EventDates(event_date=payload.event_date)
        db.add(event)

    event.description = payload.description or None
    event.event_type = payload.event_type
    event.is_blocked = payload.is_blocked

    db.commit()
    db.refresh(event)
    return event


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event_date(
    event_id: int,
    db: Session = Depends(get_db),
):
    event = db.get(EventDates, event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event date not found")
    db.delete(event)
    db.commit()
