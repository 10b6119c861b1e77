import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Integer,
    String,
    Text,
    Time,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


class AvailabilitySlotModel(Base):
    __tablename__ = 'farm_visit_availability'
    __table_args__ = (
        UniqueConstraint('seller_id', 'date', 'start_time', name='uq_farm_visit_slot_window'),
        CheckConstraint('max_visitors >= 0', name='ck_farm_visit_slot_max_visitors'),
        CheckConstraint(
            'current_bookings >= 0 AND current_bookings <= max_visitors',
            name='ck_farm_visit_slot_capacity',
        ),
        CheckConstraint('end_time > start_time', name='ck_farm_visit_slot_window'),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)  # UUID7
    seller_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False, index=True)
    start_time: Mapped[datetime.time] = mapped_column(Time, nullable=False)
    end_time: Mapped[datetime.time] = mapped_column(Time, nullable=False)
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    max_visitors: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    current_bookings: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    price_per_person: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    visit_type: Mapped[str] = mapped_column(String(20), nullable=False, default='farm')
    location_type: Mapped[str] = mapped_column(String(20), nullable=False, default='farm')
    activity_type: Mapped[str] = mapped_column(String(50), nullable=False, default='farm_tour')
    space_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    special_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
