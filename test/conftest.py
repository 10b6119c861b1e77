"""
Test Configuration and Fixtures

This module provides:
- Test environment setup (SQLite database file, log directory)
- Schema reset per test
- Unit of Work, notifier and ReservationService fixtures on the real database

Architecture:
- Unit tests (test/**/unit/): use FakeUnitOfWork with AsyncMock repositories
- Integration tests: real repositories and capacity guard on SQLite (aiosqlite)
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read at import time
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    db_dir = Path(tempfile.mkdtemp(prefix=f'farm_visit_{worker_id}_'))
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{db_dir / "farm_visit_test.db"}'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


_early_setup_test_environment()

from collections.abc import AsyncIterator, Callable  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine  # noqa: E402

from src.platform.database.orm_db_setting import (  # noqa: E402
    create_session,
    get_engine_manager,
)
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork  # noqa: E402
from src.service.farm_visit.app.reservation_service import ReservationService  # noqa: E402
from test.service.farm_visit.fixtures import (  # noqa: E402
    TODAY,
    RecordingNotifier,
    reset_schema,
)


@pytest.fixture
async def database() -> AsyncIterator[AsyncEngine]:
    """Fresh schema on the test database, engine disposed afterwards"""
    engine = await reset_schema()
    yield engine
    await get_engine_manager().dispose()


@pytest.fixture
def uow_factory(database: AsyncEngine) -> Callable[[], SqlAlchemyUnitOfWork]:
    return lambda: SqlAlchemyUnitOfWork(session_factory=create_session)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def service(
    uow_factory: Callable[[], SqlAlchemyUnitOfWork], notifier: RecordingNotifier
) -> ReservationService:
    return ReservationService(
        uow_factory=uow_factory,
        notifier=notifier,
        today=lambda: TODAY,
    )
