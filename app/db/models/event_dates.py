from typing import Optional
from enum import Enum
from datetime import date, datetime
from sqlalchemy import Boolean, Date, DateTime, Enum as SQLEnum, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.database import Base


class EventType(str, Enum):
    HOLIDAY = "holiday"
    COMPANY_EVENT = "company_event"
    OTHER = "other"


class EventDates(Base):
    __tablename__ = "event_dates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    event_date: Mapped[date] = mapped_column(Date, unique=True, nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    event_type: Mapped[EventType] = mapped_column(
        SQLEnum(EventType, name="event_type_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=EventType.HOLIDAY,
    )
    is_blocked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
