from typing import Optional

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class FarmProfileModel(Base):
    """Owned by the seller profile feature; this service only reads it."""

    __tablename__ = 'seller_farm_profiles'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    seller_id: Mapped[int] = mapped_column(Integer, nullable=False, unique=True, index=True)
    farm_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    farm_story: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    detailed_location: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    visit_booking_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    garden_visit_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    public_profile: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
