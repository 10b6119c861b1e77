import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Integer, String, Text, Time, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


class VisitRequestModel(Base):
    __tablename__ = 'farm_visit_requests'
    __table_args__ = (
        CheckConstraint('number_of_visitors >= 1', name='ck_farm_visit_request_visitors'),
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected', 'completed', 'cancelled')",
            name='ck_farm_visit_request_status',
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)  # UUID7
    user_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    seller_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    availability_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid,
        ForeignKey('farm_visit_availability.id', ondelete='SET NULL'),
        nullable=True,
        index=True,
    )
    requested_date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    requested_time_start: Mapped[datetime.time] = mapped_column(Time, nullable=False)
    requested_time_end: Mapped[datetime.time] = mapped_column(Time, nullable=False)
    number_of_visitors: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    visitor_name: Mapped[str] = mapped_column(String(255), nullable=False)
    visitor_phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    visitor_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    purpose: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    special_requirements: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    message_to_farmer: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default='pending', index=True)
    admin_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rejection_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    reviewed_by: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    reviewed_at: Mapped[Optional[datetime.datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
