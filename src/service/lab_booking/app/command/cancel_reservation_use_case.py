from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

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


class CancelReservationUseCase:
    """Owner or technician cancels an upcoming reservation; the seat frees up at once."""

    def __init__(
        self,
        *,
        account_query_repo: IAccountQueryRepo,
        reservation_command_repo: IReservationCommandRepo,
        reservation_query_repo: IReservationQueryRepo,
    ) -> None:
        self.account_query_repo = account_query_repo
        self.reservation_command_repo = reservation_command_repo
        self.reservation_query_repo = reservation_query_repo

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
    ) -> Self:
        return cls(
            account_query_repo=account_query_repo,
            reservation_command_repo=reservation_command_repo,
            reservation_query_repo=reservation_query_repo,
        )

    @Logger.io
    async def execute(self, *, reservation_id: str, by_email: str) -> Reservation:
        reservation = await self.reservation_query_repo.get_by_id(reservation_id=reservation_id)
        if reservation is None:
            raise NotFoundError(f'Reservation {reservation_id} not found')

        if not reservation.is_owned_by(by_email):
            actor = await self.account_query_repo.get_by_email(email=by_email)
            if actor is None or not actor.is_technician:
                raise ForbiddenError('Only the owner or a lab technician can cancel this reservation')

        # Domain check first for a clear message, the repo re-checks atomically
        reservation.cancel()
        cancelled = await self.reservation_command_repo.transition_status(
            reservation_id=reservation.id, to_status=ReservationStatus.CANCELLED
        )

        Logger.base.info(f'❌ [CANCEL] {by_email} cancelled reservation {cancelled.id}')
        return cancelled
