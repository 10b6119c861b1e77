from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.farm_visit.app.interface.i_visit_request_repo import IVisitRequestRepo
from src.service.farm_visit.domain.entity.visit_request_entity import VisitRequest
from src.service.farm_visit.domain.enum.visit_request_status import VisitRequestStatus
from src.service.farm_visit.domain.value_object.visit_request_filter import VisitRequestFilter
from src.service.farm_visit.driven_adapter.model.visit_request_model import VisitRequestModel


request_table = VisitRequestModel.__table__


class VisitRequestRepoImpl(IVisitRequestRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _to_entity(db_request: VisitRequestModel) -> VisitRequest:
        return VisitRequest(
            id=db_request.id,
            user_id=db_request.user_id,
            seller_id=db_request.seller_id,
            availability_id=db_request.availability_id,
            requested_date=db_request.requested_date,
            requested_time_start=db_request.requested_time_start,
            requested_time_end=db_request.requested_time_end,
            number_of_visitors=db_request.number_of_visitors,
            visitor_name=db_request.visitor_name,
            visitor_phone=db_request.visitor_phone,
            visitor_email=db_request.visitor_email,
            purpose=db_request.purpose,
            special_requirements=db_request.special_requirements,
            message_to_farmer=db_request.message_to_farmer,
            status=VisitRequestStatus(db_request.status),
            admin_notes=db_request.admin_notes,
            rejection_reason=db_request.rejection_reason,
            reviewed_by=db_request.reviewed_by,
            reviewed_at=db_request.reviewed_at,
            created_at=db_request.created_at,
            updated_at=db_request.updated_at,
        )

    @Logger.io
    async def create(self, *, request: VisitRequest) -> VisitRequest:
        db_request = VisitRequestModel(
            id=request.id,
            user_id=request.user_id,
            seller_id=request.seller_id,
            availability_id=request.availability_id,
            requested_date=request.requested_date,
            requested_time_start=request.requested_time_start,
            requested_time_end=request.requested_time_end,
            number_of_visitors=request.number_of_visitors,
            visitor_name=request.visitor_name,
            visitor_phone=request.visitor_phone,
            visitor_email=request.visitor_email,
            purpose=request.purpose,
            special_requirements=request.special_requirements,
            message_to_farmer=request.message_to_farmer,
            status=request.status.value,
            created_at=request.created_at,
            updated_at=request.updated_at,
        )
        self.session.add(db_request)
        await self.session.flush()
        await self.session.refresh(db_request)
        return self._to_entity(db_request)

    @Logger.io
    async def get(self, *, request_id: UUID) -> Optional[VisitRequest]:
        result = await self.session.execute(
            select(VisitRequestModel)
            .where(VisitRequestModel.id == request_id)
            .execution_options(populate_existing=True)
        )
        db_request = result.scalar_one_or_none()
        return self._to_entity(db_request) if db_request else None

    @Logger.io
    async def get_for_update(self, *, request_id: UUID) -> Optional[VisitRequest]:
        result = await self.session.execute(
            select(VisitRequestModel)
            .where(VisitRequestModel.id == request_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        db_request = result.scalar_one_or_none()
        return self._to_entity(db_request) if db_request else None

    @Logger.io
    async def save_transition(
        self, *, request: VisitRequest, expected_status: VisitRequestStatus
    ) -> bool:
        result = await self.session.execute(
            update(request_table)
            .where(
                request_table.c.id == request.id,
                request_table.c.status == expected_status.value,
            )
            .values(
                status=request.status.value,
                reviewed_by=request.reviewed_by,
                reviewed_at=request.reviewed_at,
                admin_notes=request.admin_notes,
                rejection_reason=request.rejection_reason,
                updated_at=request.updated_at,
            )
        )
        return result.rowcount == 1

    @Logger.io
    async def list(self, *, request_filter: VisitRequestFilter) -> List[VisitRequest]:
        stmt = select(VisitRequestModel)
        if request_filter.seller_id is not None:
            stmt = stmt.where(VisitRequestModel.seller_id == request_filter.seller_id)
        if request_filter.user_id is not None:
            stmt = stmt.where(VisitRequestModel.user_id == request_filter.user_id)
        if request_filter.status is not None:
            stmt = stmt.where(VisitRequestModel.status == request_filter.status.value)
        if request_filter.availability_id is not None:
            stmt = stmt.where(VisitRequestModel.availability_id == request_filter.availability_id)

        # UUID7 ids are time ordered, which breaks created_at ties
        stmt = stmt.order_by(VisitRequestModel.created_at.desc(), VisitRequestModel.id.desc())
        result = await self.session.execute(stmt.execution_options(populate_existing=True))
        return [self._to_entity(db_request) for db_request in result.scalars().all()]

    @Logger.io
    async def list_by_slot(
        self, *, slot_id: UUID, statuses: Optional[frozenset[VisitRequestStatus]] = None
    ) -> List[VisitRequest]:
        stmt = select(VisitRequestModel).where(VisitRequestModel.availability_id == slot_id)
        if statuses:
            stmt = stmt.where(VisitRequestModel.status.in_([s.value for s in statuses]))
        stmt = stmt.order_by(VisitRequestModel.created_at, VisitRequestModel.id)
        result = await self.session.execute(stmt.execution_options(populate_existing=True))
        return [self._to_entity(db_request) for db_request in result.scalars().all()]
