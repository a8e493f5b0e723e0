"""
Production FastAPI Application

Lab seat reservation API plus the background completion sweeper.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from functools import partial

import anyio
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger
from src.service.lab_booking.driving_adapter.scheduler.completion_sweeper import (
    run_completion_sweeper,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Lab Booking] Starting up...')

    # Wire dependency injection for all modules
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Lab Booking] Dependency injection wired')

    database = container.database()
    await database.create_tables()

    async with anyio.create_task_group() as tg:
        interval = settings.COMPLETION_SWEEP_INTERVAL_SECONDS
        if interval > 0:
            tg.start_soon(partial(run_completion_sweeper, interval_seconds=interval))
        else:
            Logger.base.info('⏸️  [Lab Booking] Completion sweeper disabled')

        Logger.base.info('✅ [Lab Booking] Ready to serve requests')

        yield

        Logger.base.info('🛑 [Lab Booking] Shutting down...')
        tg.cancel_scope.cancel()

    await database.dispose()
    Logger.base.info('🗄️  [Lab Booking] Database engine disposed')

    # Unwire DI
    container.unwire()

    Logger.base.info('👋 [Lab Booking] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
