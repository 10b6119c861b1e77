"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import create_session
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.farm_visit.app.reservation_service import ReservationService
from src.service.farm_visit.domain.access_policy import AccessPolicy
from src.service.farm_visit.driven_adapter.notification.loguru_notification_dispatcher_impl import (
    LoguruNotificationDispatcherImpl,
)
from src.service.farm_visit.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # One Unit of Work (and one session) per call; the service holds the factory
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork, session_factory=providers.Object(create_session)
    )

    # Outbound notifications (logged; replace with a mail/SMS adapter in deployment)
    notification_dispatcher = providers.Singleton(LoguruNotificationDispatcherImpl)

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth)

    access_policy = providers.Singleton(AccessPolicy)

    # Reservation facade (stateless, can be Singleton)
    reservation_service = providers.Singleton(
        ReservationService,
        uow_factory=unit_of_work.provider,
        notifier=notification_dispatcher,
        access_policy=access_policy,
    )


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
