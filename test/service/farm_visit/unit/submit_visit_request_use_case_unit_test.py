from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import DomainError
from src.service.farm_visit.app.command.submit_visit_request_use_case import (
    SubmitVisitRequestUseCase,
)
from src.service.farm_visit.domain.access_policy import AccessPolicy
from src.service.farm_visit.domain.domain_event.visit_request_event import VisitRequestEvent
from src.service.farm_visit.domain.entity.farm_visit_profile_entity import FarmVisitProfile
from src.service.farm_visit.domain.entity.visit_request_entity import VisitRequest
from src.service.farm_visit.domain.enum.visit_request_status import VisitRequestStatus
from src.service.farm_visit.domain.farm_visit_errors import (
    CapacityExceededError,
    SlotExpiredError,
    SlotNotFoundError,
    SlotUnavailableError,
)
from test.service.farm_visit.fixtures import (
    BUYER,
    MORNING,
    NEXT_WEEK,
    SELLER,
    TODAY,
    YESTERDAY,
    FakeUnitOfWork,
    RecordingNotifier,
    make_slot,
)


PUBLIC_FARM = FarmVisitProfile(
    seller_id=SELLER.user_id, visit_booking_enabled=True, public_profile=True
)


def _passthrough_create(uow: FakeUnitOfWork) -> None:
    async def create(*, request: VisitRequest) -> VisitRequest:
        return request

    uow.visit_request_repo.create = AsyncMock(side_effect=create)


@pytest.fixture
def uow() -> FakeUnitOfWork:
    uow = FakeUnitOfWork()
    _passthrough_create(uow)
    uow.farm_profile_repo.get = AsyncMock(return_value=PUBLIC_FARM)
    return uow


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def use_case(uow: FakeUnitOfWork, notifier: RecordingNotifier) -> SubmitVisitRequestUseCase:
    return SubmitVisitRequestUseCase(
        uow_factory=lambda: uow,
        access_policy=AccessPolicy(),
        notifier=notifier,
        today=lambda: TODAY,
    )


@pytest.mark.unit
class TestSubmitVisitRequest:
    async def test_creates_pending_request_and_notifies(
        self, use_case: SubmitVisitRequestUseCase, uow: FakeUnitOfWork, notifier: RecordingNotifier
    ) -> None:
        slot = make_slot(max_visitors=5)
        uow.slot_repo.get_for_update = AsyncMock(return_value=slot)

        request = await use_case.execute(
            actor=BUYER,
            availability_id=slot.id,
            number_of_visitors=3,
            visitor_name='Mei Lin',
            visitor_phone='0912345678',
        )

        assert request.status == VisitRequestStatus.PENDING
        assert request.user_id == BUYER.user_id
        assert request.visitor_email == BUYER.email
        assert request.availability_id == slot.id
        assert uow.committed
        assert notifier.events == [VisitRequestEvent.SUBMITTED]
        uow.capacity_guard.reserve.assert_not_awaited()

    async def test_guest_request_has_no_user(
        self, use_case: SubmitVisitRequestUseCase, uow: FakeUnitOfWork
    ) -> None:
        slot = make_slot()
        uow.slot_repo.get_for_update = AsyncMock(return_value=slot)

        request = await use_case.execute(
            actor=None,
            availability_id=slot.id,
            visitor_name='Guest',
            visitor_phone='0900000000',
            visitor_email='guest@example.com',
        )

        assert request.user_id is None
        assert request.visitor_email == 'guest@example.com'

    async def test_resolves_slot_from_seller_and_time_window(
        self, use_case: SubmitVisitRequestUseCase, uow: FakeUnitOfWork
    ) -> None:
        slot = make_slot()
        uow.slot_repo.find_by_window = AsyncMock(return_value=slot)
        uow.slot_repo.get_for_update = AsyncMock(return_value=slot)

        request = await use_case.execute(
            actor=BUYER,
            seller_id=SELLER.user_id,
            requested_date=NEXT_WEEK,
            requested_time_start=MORNING[0],
            requested_time_end=MORNING[1],
            visitor_name='Mei Lin',
            visitor_phone='0912345678',
        )

        uow.slot_repo.find_by_window.assert_awaited_once_with(
            seller_id=SELLER.user_id,
            date=NEXT_WEEK,
            start_time=MORNING[0],
            end_time=MORNING[1],
        )
        assert request.availability_id == slot.id

    async def test_unknown_time_window_is_not_found(
        self, use_case: SubmitVisitRequestUseCase, uow: FakeUnitOfWork
    ) -> None:
        uow.slot_repo.find_by_window = AsyncMock(return_value=None)

        with pytest.raises(SlotNotFoundError, match='Selected time slot is not available'):
            await use_case.execute(
                actor=BUYER,
                seller_id=SELLER.user_id,
                requested_date=NEXT_WEEK,
                requested_time_start=MORNING[0],
                visitor_name='Mei Lin',
                visitor_phone='0912345678',
            )

    async def test_slot_reference_is_required(self, use_case: SubmitVisitRequestUseCase) -> None:
        with pytest.raises(DomainError, match='availability_id'):
            await use_case.execute(actor=BUYER, visitor_name='Mei Lin', visitor_phone='09')

    @pytest.mark.parametrize(
        'slot_kwargs, visitors, error',
        [
            ({'date': YESTERDAY}, 1, SlotExpiredError),
            ({'is_available': False}, 1, SlotUnavailableError),
            ({'max_visitors': 3}, 4, CapacityExceededError),
        ],
    )
    async def test_rejected_submissions_create_nothing(
        self,
        use_case: SubmitVisitRequestUseCase,
        uow: FakeUnitOfWork,
        notifier: RecordingNotifier,
        slot_kwargs: dict,
        visitors: int,
        error: type[Exception],
    ) -> None:
        slot = make_slot(**slot_kwargs)
        uow.slot_repo.get_for_update = AsyncMock(return_value=slot)

        with pytest.raises(error):
            await use_case.execute(
                actor=BUYER,
                availability_id=slot.id,
                number_of_visitors=visitors,
                visitor_name='Mei Lin',
                visitor_phone='0912345678',
            )

        uow.visit_request_repo.create.assert_not_awaited()
        assert not uow.committed
        assert notifier.sent == []

    @pytest.mark.parametrize(
        'profile',
        [
            None,
            FarmVisitProfile(seller_id=SELLER.user_id, visit_booking_enabled=True),
            FarmVisitProfile(seller_id=SELLER.user_id, public_profile=True),
        ],
        ids=['no_profile', 'private_farm', 'farm_visits_off'],
    )
    async def test_hidden_slot_is_not_found(
        self,
        use_case: SubmitVisitRequestUseCase,
        uow: FakeUnitOfWork,
        profile: FarmVisitProfile | None,
    ) -> None:
        slot = make_slot()
        uow.slot_repo.get_for_update = AsyncMock(return_value=slot)
        uow.farm_profile_repo.get = AsyncMock(return_value=profile)

        with pytest.raises(SlotNotFoundError):
            await use_case.execute(
                actor=BUYER,
                availability_id=slot.id,
                visitor_name='Mei Lin',
                visitor_phone='0912345678',
            )

        uow.farm_profile_repo.get.assert_awaited_once_with(seller_id=SELLER.user_id)
        uow.visit_request_repo.create.assert_not_awaited()

    async def test_owner_books_own_unpublished_slot(
        self, use_case: SubmitVisitRequestUseCase, uow: FakeUnitOfWork
    ) -> None:
        slot = make_slot()
        uow.slot_repo.get_for_update = AsyncMock(return_value=slot)
        uow.farm_profile_repo.get = AsyncMock(return_value=None)

        request = await use_case.execute(
            actor=SELLER,
            availability_id=slot.id,
            visitor_name='Walk-in',
            visitor_phone='0911111111',
        )

        assert request.status == VisitRequestStatus.PENDING
        uow.farm_profile_repo.get.assert_not_awaited()
