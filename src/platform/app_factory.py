"""
Shared FastAPI App Factory

Provides common app setup for production and test environments.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.platform.config.core_setting import settings
from src.platform.constant.route_constant import (
    ACCOUNT_PREFIX,
    CATALOG_PREFIX,
    RESERVATION_PREFIX,
    SESSION_PREFIX,
)
from src.platform.exception.exception_handlers import register_exception_handlers
from src.service.lab_booking.driving_adapter.http_controller.account_controller import (
    router as account_router,
)
from src.service.lab_booking.driving_adapter.http_controller.catalog_controller import (
    router as catalog_router,
)
from src.service.lab_booking.driving_adapter.http_controller.reservation_controller import (
    router as reservation_router,
)
from src.service.lab_booking.driving_adapter.http_controller.session_controller import (
    router as session_router,
)


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]],
    title_suffix: str = '',
    description: str = 'Computer lab seat reservations',
) -> FastAPI:
    """
    Create a configured FastAPI application.

    Args:
        lifespan: Async context manager for app lifespan (startup/shutdown)
        title_suffix: Optional suffix for app title (e.g., " (Test)")
        description: App description

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=f'{settings.PROJECT_NAME}{title_suffix}',
        description=description,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    # Register exception handlers
    register_exception_handlers(app)

    # Include routers
    app.include_router(account_router, prefix=ACCOUNT_PREFIX, tags=['account'])
    app.include_router(session_router, prefix=SESSION_PREFIX, tags=['session'])
    app.include_router(reservation_router, prefix=RESERVATION_PREFIX, tags=['reservation'])
    app.include_router(catalog_router, prefix=CATALOG_PREFIX, tags=['catalog'])

    _register_common_endpoints(app)

    return app


def _register_common_endpoints(app: FastAPI) -> None:
    @app.get('/health')
    async def health_check() -> dict[str, str]:
        """Health check endpoint for container orchestration."""
        return {'status': 'healthy', 'service': settings.SERVICE_NAME}
