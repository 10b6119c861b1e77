import datetime
from typing import Any, List, Mapping, Optional
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.farm_visit.app.interface.i_slot_repo import ISlotRepo
from src.service.farm_visit.domain.entity.availability_slot_entity import AvailabilitySlot
from src.service.farm_visit.domain.enum.visit_request_status import ACTIVE_STATUSES
from src.service.farm_visit.domain.farm_visit_errors import (
    SlotConflictError,
    SlotInUseError,
    SlotNotFoundError,
)
from src.service.farm_visit.domain.value_object.slot_filter import SlotFilter
from src.service.farm_visit.driven_adapter.model.availability_slot_model import (
    AvailabilitySlotModel,
)
from src.service.farm_visit.driven_adapter.model.visit_request_model import VisitRequestModel


slot_table = AvailabilitySlotModel.__table__


def to_slot_entity(db_slot: Any) -> AvailabilitySlot:
    """Build the entity from an ORM object or a RETURNING row (both expose attributes)"""
    return AvailabilitySlot(
        id=db_slot.id,
        seller_id=db_slot.seller_id,
        date=db_slot.date,
        start_time=db_slot.start_time,
        end_time=db_slot.end_time,
        max_visitors=db_slot.max_visitors,
        current_bookings=db_slot.current_bookings,
        is_available=db_slot.is_available,
        price_per_person=db_slot.price_per_person,
        visit_type=db_slot.visit_type,
        location_type=db_slot.location_type,
        activity_type=db_slot.activity_type,
        space_description=db_slot.space_description,
        special_notes=db_slot.special_notes,
        created_at=db_slot.created_at,
        updated_at=db_slot.updated_at,
    )


class SlotRepoImpl(ISlotRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def create(self, *, slot: AvailabilitySlot) -> AvailabilitySlot:
        existing = await self.find_by_window(
            seller_id=slot.seller_id,
            date=slot.date,
            start_time=slot.start_time,
            end_time=None,
        )
        if existing:
            raise SlotConflictError()

        db_slot = AvailabilitySlotModel(
            id=slot.id,
            seller_id=slot.seller_id,
            date=slot.date,
            start_time=slot.start_time,
            end_time=slot.end_time,
            is_available=slot.is_available,
            max_visitors=slot.max_visitors,
            current_bookings=0,
            price_per_person=slot.price_per_person,
            visit_type=slot.visit_type,
            location_type=slot.location_type,
            activity_type=slot.activity_type,
            space_description=slot.space_description,
            special_notes=slot.special_notes,
            created_at=slot.created_at,
            updated_at=slot.updated_at,
        )
        self.session.add(db_slot)
        try:
            await self.session.flush()
        except IntegrityError as e:
            # Lost a race with a concurrent create of the same window
            raise SlotConflictError() from e
        await self.session.refresh(db_slot)
        return to_slot_entity(db_slot)

    @Logger.io
    async def get(self, *, slot_id: UUID) -> Optional[AvailabilitySlot]:
        result = await self.session.execute(
            select(AvailabilitySlotModel)
            .where(AvailabilitySlotModel.id == slot_id)
            .execution_options(populate_existing=True)
        )
        db_slot = result.scalar_one_or_none()
        return to_slot_entity(db_slot) if db_slot else None

    @Logger.io
    async def get_for_update(self, *, slot_id: UUID) -> Optional[AvailabilitySlot]:
        result = await self.session.execute(
            select(AvailabilitySlotModel)
            .where(AvailabilitySlotModel.id == slot_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        db_slot = result.scalar_one_or_none()
        return to_slot_entity(db_slot) if db_slot else None

    @Logger.io
    async def find_by_window(
        self,
        *,
        seller_id: int,
        date: datetime.date,
        start_time: datetime.time,
        end_time: Optional[datetime.time] = None,
    ) -> Optional[AvailabilitySlot]:
        stmt = select(AvailabilitySlotModel).where(
            AvailabilitySlotModel.seller_id == seller_id,
            AvailabilitySlotModel.date == date,
            AvailabilitySlotModel.start_time == start_time,
        )
        if end_time is not None:
            stmt = stmt.where(AvailabilitySlotModel.end_time == end_time)
        result = await self.session.execute(stmt.execution_options(populate_existing=True))
        db_slot = result.scalars().first()
        return to_slot_entity(db_slot) if db_slot else None

    @Logger.io
    async def update(self, *, slot_id: UUID, changes: Mapping[str, Any]) -> AvailabilitySlot:
        if 'current_bookings' in changes:
            raise DomainError('current_bookings cannot be updated')

        slot = await self.get_for_update(slot_id=slot_id)
        if not slot:
            raise SlotNotFoundError()
        updated = slot.apply_changes(changes)

        values = {field: getattr(updated, field) for field in changes}
        values['updated_at'] = updated.updated_at
        stmt = (
            update(slot_table)
            .where(
                slot_table.c.id == slot_id,
                # current_bookings may have moved since the read above
                slot_table.c.current_bookings <= updated.max_visitors,
            )
            .values(**values)
            .returning(*slot_table.c)
        )
        try:
            row = (await self.session.execute(stmt)).one_or_none()
        except IntegrityError as e:
            raise SlotConflictError() from e

        if row is None:
            raise DomainError('max_visitors cannot be lower than current bookings')
        return to_slot_entity(row)

    @Logger.io
    async def delete(self, *, slot_id: UUID) -> None:
        # Row lock serializes against submissions that attach new requests to this slot
        slot = await self.get_for_update(slot_id=slot_id)
        if not slot:
            raise SlotNotFoundError()

        active_count = await self.session.scalar(
            select(func.count())
            .select_from(VisitRequestModel)
            .where(
                VisitRequestModel.availability_id == slot_id,
                VisitRequestModel.status.in_([s.value for s in ACTIVE_STATUSES]),
            )
        )
        if active_count:
            raise SlotInUseError()

        # Terminal requests keep their date/time snapshot
        await self.session.execute(
            update(VisitRequestModel.__table__)
            .where(VisitRequestModel.__table__.c.availability_id == slot_id)
            .values(availability_id=None)
        )
        await self.session.execute(delete(slot_table).where(slot_table.c.id == slot_id))
        Logger.base.info(f'🗑️ [SLOT] Deleted slot {slot_id}')

    @Logger.io
    async def list(self, *, slot_filter: SlotFilter) -> List[AvailabilitySlot]:
        stmt = select(AvailabilitySlotModel)

        if slot_filter.seller_id is not None:
            stmt = stmt.where(AvailabilitySlotModel.seller_id == slot_filter.seller_id)

        if slot_filter.date is not None:
            stmt = stmt.where(AvailabilitySlotModel.date == slot_filter.date)
        else:
            if slot_filter.start_date is not None:
                stmt = stmt.where(AvailabilitySlotModel.date >= slot_filter.start_date)
            if slot_filter.end_date is not None:
                stmt = stmt.where(AvailabilitySlotModel.date <= slot_filter.end_date)

        if slot_filter.available_only:
            stmt = stmt.where(
                AvailabilitySlotModel.is_available.is_(True),
                AvailabilitySlotModel.current_bookings < AvailabilitySlotModel.max_visitors,
            )

        if slot_filter.visit_type:
            stmt = stmt.where(AvailabilitySlotModel.visit_type == slot_filter.visit_type)

        stmt = stmt.order_by(AvailabilitySlotModel.date, AvailabilitySlotModel.start_time)
        result = await self.session.execute(stmt.execution_options(populate_existing=True))
        return [to_slot_entity(db_slot) for db_slot in result.scalars().all()]
