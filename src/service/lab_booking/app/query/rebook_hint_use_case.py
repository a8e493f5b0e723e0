from typing import Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.lab_booking.app.interface.i_account_query_repo import IAccountQueryRepo
from src.service.lab_booking.app.interface.i_reservation_query_repo import IReservationQueryRepo


@attrs.frozen
class RebookHint:
    lab: str
    seat: str
    building: str


class RebookHintUseCase:
    """Prefill for booking the same seat again. Pure read, nothing is reserved."""

    def __init__(
        self,
        *,
        account_query_repo: IAccountQueryRepo,
        reservation_query_repo: IReservationQueryRepo,
    ) -> None:
        self.account_query_repo = account_query_repo
        self.reservation_query_repo = reservation_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        account_query_repo: IAccountQueryRepo = Depends(Provide[Container.account_query_repo]),
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
    ) -> Self:
        return cls(account_query_repo=account_query_repo, reservation_query_repo=reservation_query_repo)

    @Logger.io
    async def execute(self, *, reservation_id: str, viewer_email: str) -> RebookHint:
        reservation = await self.reservation_query_repo.get_by_id(reservation_id=reservation_id)
        if reservation is None:
            raise NotFoundError(f'Reservation {reservation_id} not found')

        if not reservation.is_owned_by(viewer_email):
            viewer = await self.account_query_repo.get_by_email(email=viewer_email)
            if viewer is None or not viewer.is_technician:
                raise ForbiddenError('You can only rebook your own reservations')

        return RebookHint(lab=reservation.lab, seat=reservation.seat, building=reservation.building)
