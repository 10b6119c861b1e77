"""
Capacity Guard
The only code path that writes AvailabilitySlot.current_bookings.

Both operations are single conditional UPDATE statements on one slot row, so
concurrent approvals against the same slot serialize in the database and can
never push current_bookings past max_visitors. They run on the Unit of Work
session and commit together with the request status change.
"""

import time
from uuid import UUID

from sqlalchemy import case, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.farm_visit_metrics import metrics
from src.service.farm_visit.app.interface.i_capacity_guard import ICapacityGuard
from src.service.farm_visit.domain.entity.availability_slot_entity import AvailabilitySlot
from src.service.farm_visit.domain.farm_visit_errors import (
    CapacityExceededError,
    SlotUnavailableError,
)
from src.service.farm_visit.driven_adapter.model.availability_slot_model import (
    AvailabilitySlotModel,
)
from src.service.farm_visit.driven_adapter.repo.slot_repo_impl import to_slot_entity


slot_table = AvailabilitySlotModel.__table__


class CapacityGuardImpl(ICapacityGuard):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def reserve(self, *, slot_id: UUID, visitor_count: int) -> AvailabilitySlot:
        if visitor_count < 1:
            raise DomainError('visitor_count must be at least 1')

        started = time.perf_counter()
        stmt = (
            update(slot_table)
            .where(
                slot_table.c.id == slot_id,
                slot_table.c.is_available.is_(True),
                slot_table.c.current_bookings + visitor_count <= slot_table.c.max_visitors,
            )
            .values(current_bookings=slot_table.c.current_bookings + visitor_count)
            .returning(*slot_table.c)
        )
        row = (await self.session.execute(stmt)).one_or_none()
        if row is not None:
            metrics.record_capacity(
                operation='reserve', success=True, duration=time.perf_counter() - started
            )
            Logger.base.info(
                f'🎟️ [CAPACITY] Reserved {visitor_count} on slot {slot_id} '
                f'({row.current_bookings}/{row.max_visitors})'
            )
            return to_slot_entity(row)

        metrics.record_capacity(
            operation='reserve', success=False, duration=time.perf_counter() - started
        )
        # The update matched nothing: find out which condition failed
        is_available = await self.session.scalar(
            select(slot_table.c.is_available).where(slot_table.c.id == slot_id)
        )
        if is_available is None:
            raise SlotUnavailableError('The time slot for this request no longer exists')
        if not is_available:
            raise SlotUnavailableError()
        raise CapacityExceededError()

    @Logger.io
    async def release(self, *, slot_id: UUID, visitor_count: int) -> None:
        if visitor_count < 1:
            raise DomainError('visitor_count must be at least 1')

        started = time.perf_counter()
        result = await self.session.execute(
            update(slot_table)
            .where(slot_table.c.id == slot_id)
            .values(
                current_bookings=case(
                    (
                        slot_table.c.current_bookings >= visitor_count,
                        slot_table.c.current_bookings - visitor_count,
                    ),
                    else_=0,
                )
            )
        )
        metrics.record_capacity(
            operation='release', success=result.rowcount == 1, duration=time.perf_counter() - started
        )
        if result.rowcount == 0:
            Logger.base.warning(f'⚠️ [CAPACITY] Release on missing slot {slot_id} ignored')
        else:
            Logger.base.info(f'↩️ [CAPACITY] Released {visitor_count} on slot {slot_id}')
