from datetime import datetime
from typing import Callable, Dict, List, Optional, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.lab_booking.app.interface.i_account_query_repo import IAccountQueryRepo
from src.service.lab_booking.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.lab_booking.domain.entity.reservation_entity import (
    Reservation,
    ReservationStatus,
)


@attrs.frozen
class ReservationSummary:
    total: int
    counts: Dict[ReservationStatus, int]
    next_upcoming: Optional[Reservation] = None


class ListReservationsUseCase:
    def __init__(
        self,
        *,
        account_query_repo: IAccountQueryRepo,
        reservation_query_repo: IReservationQueryRepo,
        clock: Callable[[], datetime],
    ) -> None:
        self.account_query_repo = account_query_repo
        self.reservation_query_repo = reservation_query_repo
        self.clock = clock

    @classmethod
    @inject
    def depends(
        cls,
        account_query_repo: IAccountQueryRepo = Depends(Provide[Container.account_query_repo]),
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
        clock: Callable[[], datetime] = Depends(Provide[Container.clock]),
    ) -> Self:
        return cls(
            account_query_repo=account_query_repo,
            reservation_query_repo=reservation_query_repo,
            clock=clock,
        )

    @Logger.io
    async def list_for_user(self, *, email: str) -> List[Reservation]:
        """The user's own reservations, newest first."""
        return await self.reservation_query_repo.list_by_user_email(email=email)

    @Logger.io
    async def list_all(self, *, viewer_email: str) -> List[Reservation]:
        """Every reservation, for technicians. Anonymous bookings stay masked."""
        viewer = await self.account_query_repo.get_by_email(email=viewer_email)
        if viewer is None or not viewer.is_technician:
            raise ForbiddenError('Only lab technicians can view all reservations')

        reservations = await self.reservation_query_repo.list_all()
        return [reservation.visible_to(viewer.email) for reservation in reservations]

    @Logger.io
    async def summary(self, *, email: str) -> ReservationSummary:
        reservations = await self.reservation_query_repo.list_by_user_email(email=email)
        counts = {status: 0 for status in ReservationStatus}
        for reservation in reservations:
            counts[reservation.status] += 1

        now = self.clock()
        upcoming = [r for r in reservations if r.is_active and r.ends_at > now]
        next_upcoming = min(upcoming, key=lambda r: r.starts_at) if upcoming else None
        return ReservationSummary(
            total=len(reservations), counts=counts, next_upcoming=next_upcoming
        )
