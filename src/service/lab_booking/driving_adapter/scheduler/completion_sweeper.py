"""
Completion sweeper

Background loop started from the app lifespan: every interval it marks
upcoming reservations whose slot has ended as completed.
"""

import anyio

from src.platform.config.di import container
from src.platform.logging.loguru_io import Logger
from src.service.lab_booking.app.command.complete_past_reservations_use_case import (
    CompletePastReservationsUseCase,
)


def build_sweep_use_case() -> CompletePastReservationsUseCase:
    return CompletePastReservationsUseCase(
        reservation_command_repo=container.reservation_command_repo(),
        clock=container.clock(),
    )


async def run_completion_sweeper(*, interval_seconds: float) -> None:
    Logger.base.info(f'🧹 [SWEEP] Completion sweeper running every {interval_seconds}s')
    while True:
        try:
            await build_sweep_use_case().execute()
        except Exception as e:
            # A failed pass is retried on the next tick
            Logger.base.exception(f'❌ [SWEEP] Completion sweep failed: {e}')
        await anyio.sleep(interval_seconds)
