from typing import Optional
from datetime import datetime
from sqlalchemy import DateTime, ForeignKey, Integer, JSON, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.database import Base


class StoreActivitySettings(Base):
    __tablename__ = "store_activity_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    store_id: Mapped[int] = mapped_column(Integer, ForeignKey("stores.id", ondelete="CASCADE"), unique=True, nullable=False, index=True)
    allowed_days: Mapped[Optional[list[int]]] = mapped_column(JSON, nullable=True)  # ISO 1-7
    forbidden_days: Mapped[Optional[list[int]]] = mapped_column(JSON, nullable=True)  # ISO 1-7
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
