from datetime import datetime
from typing import Callable, List, Optional

from src.platform.logging.loguru_io import Logger
from src.service.lab_booking.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.lab_booking.domain.entity.reservation_entity import Reservation


class CompletePastReservationsUseCase:
    """Upcoming reservations whose slot has ended become completed."""

    def __init__(
        self,
        *,
        reservation_command_repo: IReservationCommandRepo,
        clock: Callable[[], datetime],
    ) -> None:
        self.reservation_command_repo = reservation_command_repo
        self.clock = clock

    @Logger.io
    async def execute(self, *, now: Optional[datetime] = None) -> List[Reservation]:
        completed = await self.reservation_command_repo.complete_ended(now=now or self.clock())
        if completed:
            Logger.base.info(f'✅ [SWEEP] Completed {len(completed)} past reservation(s)')
        return completed
