"""
Production FastAPI Application

Farm visit reservation API: slots, visit requests and the public farm listing.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import cleanup, container, setup
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import create_db_and_tables, get_engine_manager
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
import src.service.farm_visit.driven_adapter.model  # noqa: F401  (registers ORM tables)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Farm Visit] Starting up...')

    tracing = TracingConfig(service_name=settings.SERVICE_NAME)
    tracing.setup()
    Logger.base.info('📊 [Farm Visit] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    setup()
    Logger.base.info('🔌 [Farm Visit] Dependency injection wired')

    engine_manager = get_engine_manager()
    engine = engine_manager.get_engine()
    await create_db_and_tables(engine)
    tracing.instrument_sqlalchemy(engine=engine)
    Logger.base.info('🗄️  [Farm Visit] Database ready + instrumented')

    Logger.base.info('✅ [Farm Visit] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Farm Visit] Shutting down...')

    await engine_manager.dispose()
    Logger.base.info('🗄️  [Farm Visit] Database engine disposed')

    tracing.shutdown()
    Logger.base.info('📊 [Farm Visit] Tracing shutdown complete')

    container.unwire()
    cleanup()

    Logger.base.info('👋 [Farm Visit] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
