"""
Integration tests for SlotRepoImpl

Window uniqueness, listing filters and the delete guard against active requests.
"""

from collections.abc import Callable
import datetime

import pytest

from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.platform.exception.exceptions import DomainError
from src.service.farm_visit.domain.entity.availability_slot_entity import AvailabilitySlot
from src.service.farm_visit.domain.enum.visit_request_status import VisitRequestStatus
from src.service.farm_visit.domain.farm_visit_errors import SlotConflictError, SlotInUseError
from src.service.farm_visit.domain.value_object.slot_filter import SlotFilter
from test.service.farm_visit.fixtures import (
    AFTERNOON,
    MORNING,
    NEXT_WEEK,
    OTHER_SELLER,
    SELLER,
    make_request,
    make_slot,
)


UowFactory = Callable[[], SqlAlchemyUnitOfWork]


async def _store(uow_factory: UowFactory, *slots: AvailabilitySlot) -> None:
    async with uow_factory() as uow:
        for slot in slots:
            await uow.slot_repo.create(slot=slot)
        await uow.commit()


@pytest.mark.integration
class TestCreateSlot:
    async def test_round_trips_all_fields(self, uow_factory: UowFactory) -> None:
        slot = make_slot(
            visit_type='garden',
            price_per_person=200,
            space_description='Rooftop herb garden',
        )
        await _store(uow_factory, slot)

        async with uow_factory() as uow:
            stored = await uow.slot_repo.get(slot_id=slot.id)

        assert stored is not None
        assert stored.date == slot.date
        assert stored.start_time == slot.start_time
        assert stored.visit_type == 'garden'
        assert stored.price_per_person == 200
        assert stored.space_description == 'Rooftop herb garden'
        assert stored.current_bookings == 0

    async def test_same_seller_date_and_start_time_conflicts(self, uow_factory: UowFactory) -> None:
        await _store(uow_factory, make_slot())

        with pytest.raises(SlotConflictError):
            await _store(uow_factory, make_slot())

    async def test_other_seller_may_use_same_window(self, uow_factory: UowFactory) -> None:
        await _store(uow_factory, make_slot(), make_slot(seller_id=OTHER_SELLER.user_id))


@pytest.mark.integration
class TestListSlots:
    async def test_filters_and_orders_by_date_then_time(self, uow_factory: UowFactory) -> None:
        later = NEXT_WEEK + datetime.timedelta(days=1)
        afternoon = make_slot(start_time=AFTERNOON[0], end_time=AFTERNOON[1])
        morning = make_slot()
        next_day = make_slot(date=later)
        full = make_slot(
            date=later, start_time=AFTERNOON[0], end_time=AFTERNOON[1], max_visitors=0
        )
        garden = make_slot(seller_id=OTHER_SELLER.user_id, visit_type='garden')
        await _store(uow_factory, next_day, afternoon, garden, morning, full)

        async with uow_factory() as uow:
            mine = await uow.slot_repo.list(slot_filter=SlotFilter(seller_id=SELLER.user_id))
            open_only = await uow.slot_repo.list(
                slot_filter=SlotFilter(seller_id=SELLER.user_id, available_only=True)
            )
            on_date = await uow.slot_repo.list(slot_filter=SlotFilter(date=NEXT_WEEK))
            gardens = await uow.slot_repo.list(slot_filter=SlotFilter(visit_type='garden'))
            ranged = await uow.slot_repo.list(
                slot_filter=SlotFilter(start_date=later, end_date=later)
            )

        assert [s.id for s in mine] == [morning.id, afternoon.id, next_day.id, full.id]
        assert full.id not in [s.id for s in open_only]
        assert {s.id for s in on_date} == {morning.id, afternoon.id, garden.id}
        assert [s.id for s in gardens] == [garden.id]
        assert [s.id for s in ranged] == [next_day.id, full.id]


@pytest.mark.integration
class TestUpdateSlot:
    async def test_updates_owner_fields(self, uow_factory: UowFactory) -> None:
        slot = make_slot()
        await _store(uow_factory, slot)

        async with uow_factory() as uow:
            updated = await uow.slot_repo.update(
                slot_id=slot.id, changes={'max_visitors': 8, 'is_available': False}
            )
            await uow.commit()

        assert updated.max_visitors == 8
        assert updated.is_available is False

    async def test_capacity_below_bookings_is_rejected(self, uow_factory: UowFactory) -> None:
        slot = make_slot(max_visitors=5)
        await _store(uow_factory, slot)
        async with uow_factory() as uow:
            await uow.capacity_guard.reserve(slot_id=slot.id, visitor_count=4)
            await uow.commit()

        with pytest.raises(DomainError, match='lower than current bookings'):
            async with uow_factory() as uow:
                await uow.slot_repo.update(slot_id=slot.id, changes={'max_visitors': 3})

    async def test_moving_onto_taken_window_conflicts(self, uow_factory: UowFactory) -> None:
        morning = make_slot()
        afternoon = make_slot(start_time=AFTERNOON[0], end_time=AFTERNOON[1])
        await _store(uow_factory, morning, afternoon)

        with pytest.raises(SlotConflictError):
            async with uow_factory() as uow:
                await uow.slot_repo.update(
                    slot_id=afternoon.id,
                    changes={'start_time': MORNING[0], 'end_time': MORNING[1]},
                )


@pytest.mark.integration
class TestDeleteSlot:
    async def test_active_request_blocks_delete(self, uow_factory: UowFactory) -> None:
        slot = make_slot()
        await _store(uow_factory, slot)
        async with uow_factory() as uow:
            await uow.visit_request_repo.create(request=make_request(slot=slot))
            await uow.commit()

        with pytest.raises(SlotInUseError):
            async with uow_factory() as uow:
                await uow.slot_repo.delete(slot_id=slot.id)

    async def test_terminal_requests_survive_without_slot(self, uow_factory: UowFactory) -> None:
        slot = make_slot()
        await _store(uow_factory, slot)
        request = make_request(slot=slot, status=VisitRequestStatus.REJECTED)
        async with uow_factory() as uow:
            await uow.visit_request_repo.create(request=request)
            await uow.commit()

        async with uow_factory() as uow:
            await uow.slot_repo.delete(slot_id=slot.id)
            await uow.commit()

        async with uow_factory() as uow:
            assert await uow.slot_repo.get(slot_id=slot.id) is None
            kept = await uow.visit_request_repo.get(request_id=request.id)

        assert kept is not None
        assert kept.availability_id is None
        assert kept.requested_date == slot.date
