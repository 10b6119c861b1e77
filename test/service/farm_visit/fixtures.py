"""
Shared test data and fakes for the farm visit service.
"""

import datetime
from typing import Any, List, Optional
from unittest.mock import AsyncMock

import attrs
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncEngine

from src.platform.database.orm_db_setting import Base, create_session, get_engine_manager
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.service.farm_visit.app.interface.i_notification_dispatcher import (
    INotificationDispatcher,
)
from src.service.farm_visit.domain.domain_event.visit_request_event import VisitRequestEvent
from src.service.farm_visit.domain.entity.availability_slot_entity import AvailabilitySlot
from src.service.farm_visit.domain.entity.visit_request_entity import VisitRequest
from src.service.farm_visit.domain.enum.user_role import UserRole
from src.service.farm_visit.domain.enum.visit_request_status import VisitRequestStatus
from src.service.farm_visit.domain.value_object.actor import Actor
import src.service.farm_visit.driven_adapter.model  # noqa: F401
from src.service.farm_visit.driven_adapter.model.farm_profile_model import FarmProfileModel


TODAY = datetime.date(2026, 10, 16)
NEXT_WEEK = TODAY + datetime.timedelta(days=7)
YESTERDAY = TODAY - datetime.timedelta(days=1)
MORNING = (datetime.time(10, 0), datetime.time(12, 0))
AFTERNOON = (datetime.time(14, 0), datetime.time(16, 0))

ADMIN = Actor(user_id=1, role=UserRole.ADMIN, email='admin@example.com')
SUPERADMIN = Actor(user_id=2, role=UserRole.SUPERADMIN, email='root@example.com')
SELLER = Actor(user_id=10, role=UserRole.SELLER, email='farmer.a@example.com')
OTHER_SELLER = Actor(user_id=11, role=UserRole.SELLER, email='farmer.b@example.com')
BUYER = Actor(user_id=20, role=UserRole.BUYER, email='buyer@example.com')
OTHER_BUYER = Actor(user_id=21, role=UserRole.BUYER, email='other.buyer@example.com')


class RecordingNotifier(INotificationDispatcher):
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.sent: List[tuple[VisitRequestEvent, VisitRequest]] = []

    async def notify(self, *, event: VisitRequestEvent, request: VisitRequest) -> None:
        if self.fail:
            raise ConnectionError('mail gateway down')
        self.sent.append((event, request))

    @property
    def events(self) -> List[VisitRequestEvent]:
        return [event for event, _ in self.sent]


class FakeUnitOfWork(AbstractUnitOfWork):
    """Unit of Work over AsyncMock repositories, recording commits"""

    def __init__(self) -> None:
        self.slot_repo = AsyncMock()
        self.visit_request_repo = AsyncMock()
        self.capacity_guard = AsyncMock()
        self.farm_profile_repo = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def _commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True


def make_slot(
    *,
    seller_id: int = SELLER.user_id,
    date: datetime.date = NEXT_WEEK,
    max_visitors: int = 5,
    current_bookings: int = 0,
    **overrides: Any,
) -> AvailabilitySlot:
    slot = AvailabilitySlot.create(
        seller_id=seller_id,
        date=date,
        start_time=overrides.pop('start_time', MORNING[0]),
        end_time=overrides.pop('end_time', MORNING[1]),
        max_visitors=max_visitors,
        **overrides,
    )
    return attrs.evolve(slot, current_bookings=current_bookings)


def make_request(
    *,
    slot: Optional[AvailabilitySlot] = None,
    requester: Optional[Actor] = BUYER,
    number_of_visitors: int = 2,
    status: VisitRequestStatus = VisitRequestStatus.PENDING,
) -> VisitRequest:
    request = VisitRequest.create(
        slot=slot or make_slot(),
        user_id=requester.user_id if requester else None,
        number_of_visitors=number_of_visitors,
        visitor_name='Mei Lin',
        visitor_phone='0912345678',
    )
    return attrs.evolve(request, status=status)


async def reset_schema() -> AsyncEngine:
    engine = get_engine_manager().get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    return engine


async def seed_profile(
    *,
    seller_id: int,
    farm_name: str = 'Sunny Hill Farm',
    detailed_location: str = 'Hualien County',
    visit_booking_enabled: bool = True,
    garden_visit_enabled: bool = False,
    public_profile: bool = True,
) -> None:
    """Insert or replace the farm profile of one seller"""
    session = create_session()
    try:
        await session.execute(
            delete(FarmProfileModel).where(FarmProfileModel.seller_id == seller_id)
        )
        session.add(
            FarmProfileModel(
                seller_id=seller_id,
                farm_name=farm_name,
                detailed_location=detailed_location,
                visit_booking_enabled=visit_booking_enabled,
                garden_visit_enabled=garden_visit_enabled,
                public_profile=public_profile,
            )
        )
        await session.commit()
    finally:
        await session.close()
