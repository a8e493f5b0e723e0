"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.state.keyed_lock import KeyedLock
from src.platform.time.local_clock import local_now
from src.service.lab_booking.domain.catalog import Catalog
from src.service.lab_booking.driven_adapter.repo.account_command_repo_impl import (
    AccountCommandRepoImpl,
)
from src.service.lab_booking.driven_adapter.repo.account_query_repo_impl import (
    AccountQueryRepoImpl,
)
from src.service.lab_booking.driven_adapter.repo.reservation_command_repo_impl import (
    ReservationCommandRepoImpl,
)
from src.service.lab_booking.driven_adapter.repo.reservation_query_repo_impl import (
    ReservationQueryRepoImpl,
)
from src.service.lab_booking.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from src.service.lab_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (one engine per event loop, see AsyncEngineManager)
    database = providers.Singleton(
        Database, database_url=config_service.provided.DATABASE_URL
    )

    # Static reference data and campus clock
    catalog = providers.Singleton(Catalog)
    clock = providers.Object(local_now)

    # In-process locks: one per (lab, seat, date, slot) and one writer lock per collection
    seat_lock = providers.Singleton(KeyedLock)
    collection_lock = providers.Singleton(KeyedLock)

    # Security
    password_hasher = providers.Singleton(
        BcryptPasswordHasher, rounds=config_service.provided.BCRYPT_ROUNDS
    )
    jwt_auth = providers.Singleton(JwtAuth)

    # Repositories (stateless - use session_factory per call)
    account_command_repo = providers.Singleton(
        AccountCommandRepoImpl,
        session_factory=database.provided.session,
        collection_lock=collection_lock,
    )
    account_query_repo = providers.Singleton(
        AccountQueryRepoImpl, session_factory=database.provided.session
    )
    reservation_command_repo = providers.Singleton(
        ReservationCommandRepoImpl,
        session_factory=database.provided.session,
        collection_lock=collection_lock,
    )
    reservation_query_repo = providers.Singleton(
        ReservationQueryRepoImpl, session_factory=database.provided.session
    )


container = Container()
