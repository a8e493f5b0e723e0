from datetime import datetime, timedelta
from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.lab_booking.app.interface.i_account_query_repo import IAccountQueryRepo
from src.service.lab_booking.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.lab_booking.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.lab_booking.domain.entity.reservation_entity import (
    Reservation,
    ReservationStatus,
)


class RemoveNoShowUseCase:
    """
    Technician frees a seat whose student has not shown up.

    Allowed from the slot start until NO_SHOW_GRACE_MINUTES after it; outside
    that window the reservation stays upcoming and NotYetEligibleError is raised.
    """

    def __init__(
        self,
        *,
        account_query_repo: IAccountQueryRepo,
        reservation_command_repo: IReservationCommandRepo,
        reservation_query_repo: IReservationQueryRepo,
        clock: Callable[[], datetime],
        grace: timedelta = timedelta(minutes=settings.NO_SHOW_GRACE_MINUTES),
    ) -> None:
        self.account_query_repo = account_query_repo
        self.reservation_command_repo = reservation_command_repo
        self.reservation_query_repo = reservation_query_repo
        self.clock = clock
        self.grace = grace

    @classmethod
    @inject
    def depends(
        cls,
        account_query_repo: IAccountQueryRepo = Depends(Provide[Container.account_query_repo]),
        reservation_command_repo: IReservationCommandRepo = Depends(
            Provide[Container.reservation_command_repo]
        ),
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
        clock: Callable[[], datetime] = Depends(Provide[Container.clock]),
    ) -> Self:
        return cls(
            account_query_repo=account_query_repo,
            reservation_command_repo=reservation_command_repo,
            reservation_query_repo=reservation_query_repo,
            clock=clock,
        )

    @Logger.io
    async def execute(self, *, reservation_id: str, by_email: str) -> Reservation:
        actor = await self.account_query_repo.get_by_email(email=by_email)
        if actor is None or not actor.is_technician:
            raise ForbiddenError('Only lab technicians can remove no-shows')

        reservation = await self.reservation_query_repo.get_by_id(reservation_id=reservation_id)
        if reservation is None:
            raise NotFoundError(f'Reservation {reservation_id} not found')

        reservation.validate_no_show_window(now=self.clock(), grace=self.grace)
        removed = await self.reservation_command_repo.transition_status(
            reservation_id=reservation.id, to_status=ReservationStatus.CANCELLED
        )

        Logger.base.info(
            f'🚫 [NO-SHOW] {actor.email} removed {removed.lab} {removed.seat} '
            f'{removed.date} {removed.time_slot} ({removed.id})'
        )
        return removed
