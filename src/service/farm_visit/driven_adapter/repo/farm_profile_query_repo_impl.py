from typing import Iterable, List, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.farm_visit.app.interface.i_farm_profile_query_repo import IFarmProfileQueryRepo
from src.service.farm_visit.domain.entity.farm_visit_profile_entity import FarmVisitProfile
from src.service.farm_visit.domain.enum.visit_type import VisitType
from src.service.farm_visit.driven_adapter.model.farm_profile_model import FarmProfileModel


class FarmProfileQueryRepoImpl(IFarmProfileQueryRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _to_entity(db_profile: FarmProfileModel) -> FarmVisitProfile:
        return FarmVisitProfile(
            seller_id=db_profile.seller_id,
            farm_name=db_profile.farm_name,
            farm_story=db_profile.farm_story,
            detailed_location=db_profile.detailed_location,
            visit_booking_enabled=db_profile.visit_booking_enabled,
            garden_visit_enabled=db_profile.garden_visit_enabled,
            public_profile=db_profile.public_profile,
        )

    @Logger.io
    async def get(self, *, seller_id: int) -> Optional[FarmVisitProfile]:
        result = await self.session.execute(
            select(FarmProfileModel).where(FarmProfileModel.seller_id == seller_id)
        )
        db_profile = result.scalar_one_or_none()
        return self._to_entity(db_profile) if db_profile else None

    @Logger.io
    async def get_many(self, *, seller_ids: Iterable[int]) -> dict[int, FarmVisitProfile]:
        ids = set(seller_ids)
        if not ids:
            return {}
        result = await self.session.execute(
            select(FarmProfileModel).where(FarmProfileModel.seller_id.in_(ids))
        )
        return {
            db_profile.seller_id: self._to_entity(db_profile)
            for db_profile in result.scalars().all()
        }

    @Logger.io
    async def list_public(
        self, *, visit_type: Optional[str] = None, location: Optional[str] = None
    ) -> List[FarmVisitProfile]:
        stmt = select(FarmProfileModel).where(FarmProfileModel.public_profile.is_(True))
        if visit_type == VisitType.FARM:
            stmt = stmt.where(FarmProfileModel.visit_booking_enabled.is_(True))
        elif visit_type == VisitType.GARDEN:
            stmt = stmt.where(FarmProfileModel.garden_visit_enabled.is_(True))
        else:
            stmt = stmt.where(
                or_(
                    FarmProfileModel.visit_booking_enabled.is_(True),
                    FarmProfileModel.garden_visit_enabled.is_(True),
                )
            )
        if location:
            stmt = stmt.where(FarmProfileModel.detailed_location.ilike(f'%{location}%'))
        result = await self.session.execute(stmt.order_by(FarmProfileModel.seller_id))
        return [self._to_entity(db_profile) for db_profile in result.scalars().all()]
