"""
Unit of Work Pattern - one database session and transaction per use case

Architecture:
- UoW opens the session and owns its lifecycle
- UoW commits explicitly and rolls back anything uncommitted on exit
- Repositories and the capacity guard share the UoW session, so a status
  change and its capacity effect commit or roll back together
- Connection-level failures leave the UoW as StoreUnavailableError
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Any, Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.orm_db_setting import is_store_unavailable, to_store_unavailable


if TYPE_CHECKING:
    from src.service.farm_visit.app.interface.i_capacity_guard import ICapacityGuard
    from src.service.farm_visit.app.interface.i_farm_profile_query_repo import (
        IFarmProfileQueryRepo,
    )
    from src.service.farm_visit.app.interface.i_slot_repo import ISlotRepo
    from src.service.farm_visit.app.interface.i_visit_request_repo import IVisitRequestRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the Farm Visit Service

    Usage:
        async with uow:
            request = await uow.visit_request_repo.get_for_update(request_id=...)
            await uow.capacity_guard.reserve(slot_id=..., visitor_count=...)
            await uow.commit()
    """

    slot_repo: ISlotRepo
    visit_request_repo: IVisitRequestRepo
    capacity_guard: ICapacityGuard
    farm_profile_repo: IFarmProfileQueryRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.rollback()

    async def commit(self) -> None:
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work

    A fresh session is opened from ``session_factory`` on every ``async with``.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.farm_visit.driven_adapter.repo.farm_profile_query_repo_impl import (
            FarmProfileQueryRepoImpl,
        )
        from src.service.farm_visit.driven_adapter.repo.slot_repo_impl import SlotRepoImpl
        from src.service.farm_visit.driven_adapter.repo.visit_request_repo_impl import (
            VisitRequestRepoImpl,
        )
        from src.service.farm_visit.driven_adapter.state.capacity_guard_impl import (
            CapacityGuardImpl,
        )

        self.session = self.session_factory()

        # Create repositories with shared session
        self.slot_repo = SlotRepoImpl(session=self.session)
        self.visit_request_repo = VisitRequestRepoImpl(session=self.session)
        self.capacity_guard = CapacityGuardImpl(session=self.session)
        self.farm_profile_repo = FarmProfileQueryRepoImpl(session=self.session)

        return await super().__aenter__()

    async def __aexit__(self, exc_type: Any, exc: BaseException | None, tb: Any) -> None:
        try:
            await super().__aexit__(exc_type, exc, tb)
        except SQLAlchemyError as rollback_error:
            # Rollback on a dead connection; the original error is the one to report
            if exc is None:
                raise
            if is_store_unavailable(exc) or is_store_unavailable(rollback_error):
                raise to_store_unavailable(exc) from exc
        finally:
            if self.session is not None:
                await self.session.close()
                self.session = None

        if exc is not None and is_store_unavailable(exc):
            raise to_store_unavailable(exc) from exc

    async def _commit(self) -> None:
        assert self.session is not None, 'commit() outside of `async with uow`'
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
