from typing import Callable, List, Optional

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.farm_visit.domain.access_policy import AccessPolicy
from src.service.farm_visit.domain.entity.visit_request_entity import VisitRequest
from src.service.farm_visit.domain.enum.user_role import UserRole
from src.service.farm_visit.domain.enum.visit_action import VisitAction
from src.service.farm_visit.domain.enum.visit_request_status import VisitRequestStatus
from src.service.farm_visit.domain.value_object.actor import Actor
from src.service.farm_visit.domain.value_object.resource_ref import ResourceRef
from src.service.farm_visit.domain.value_object.visit_request_filter import VisitRequestFilter


class ListVisitRequestsUseCase:
    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        access_policy: AccessPolicy,
    ) -> None:
        self.uow_factory = uow_factory
        self.access_policy = access_policy

    async def _list(self, request_filter: VisitRequestFilter) -> List[VisitRequest]:
        async with self.uow_factory() as uow:
            return await uow.visit_request_repo.list(request_filter=request_filter)

    @Logger.io
    async def list_for_seller(
        self,
        *,
        actor: Actor,
        seller_id: Optional[int] = None,
        status: Optional[VisitRequestStatus] = None,
    ) -> List[VisitRequest]:
        target = seller_id if seller_id is not None else actor.user_id
        self.access_policy.enforce(
            actor, VisitAction.VIEW_SELLER_REQUESTS, ResourceRef(seller_id=target)
        )
        return await self._list(VisitRequestFilter(seller_id=target, status=status))

    @Logger.io
    async def list_for_requester(
        self,
        *,
        actor: Actor,
        user_id: Optional[int] = None,
        status: Optional[VisitRequestStatus] = None,
    ) -> List[VisitRequest]:
        target = user_id if user_id is not None else actor.user_id
        self.access_policy.enforce(
            actor, VisitAction.VIEW_OWN_REQUESTS, ResourceRef(requester_id=target)
        )
        return await self._list(VisitRequestFilter(user_id=target, status=status))

    @Logger.io
    async def list_visit_requests(
        self,
        *,
        actor: Actor,
        seller_id: Optional[int] = None,
        user_id: Optional[int] = None,
        status: Optional[VisitRequestStatus] = None,
    ) -> List[VisitRequest]:
        """Resolve the view by role: admins see all, sellers their farm, buyers their own"""
        if actor.is_admin:
            self.access_policy.enforce(actor, VisitAction.VIEW_ALL_REQUESTS, ResourceRef())
            return await self._list(
                VisitRequestFilter(seller_id=seller_id, user_id=user_id, status=status)
            )
        if actor.role == UserRole.SELLER:
            return await self.list_for_seller(actor=actor, seller_id=seller_id, status=status)
        return await self.list_for_requester(actor=actor, user_id=user_id, status=status)
