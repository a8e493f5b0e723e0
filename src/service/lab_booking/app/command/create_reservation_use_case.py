from datetime import date, datetime
from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import (
    NotAuthenticatedError,
    SeatUnavailableError,
    ValidationError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.state.keyed_lock import KeyedLock
from src.service.lab_booking.app.interface.i_account_query_repo import IAccountQueryRepo
from src.service.lab_booking.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.lab_booking.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.lab_booking.app.query.seat_availability_use_case import booked_seats_for_slot
from src.service.lab_booking.domain.catalog import Catalog
from src.service.lab_booking.domain.entity.reservation_entity import Reservation
from src.service.lab_booking.domain.value_object.lab import Lab
from src.service.lab_booking.domain.value_object.seat_label import SeatLabel
from src.service.lab_booking.domain.value_object.time_slot import (
    TimeSlot,
    parse_booking_date,
)


def seat_lock_key(lab: Lab, seat: SeatLabel, on: date, slot: TimeSlot) -> tuple[str, str, str, str]:
    return (lab.code, seat.seat_id, on.isoformat(), slot.label)


def require_seat_on_grid(lab: Lab, seat: SeatLabel) -> None:
    if not lab.has_seat(seat):
        raise ValidationError(f'Seat {seat} does not exist in lab {lab.code}')


async def ensure_seat_free(
    reservation_query_repo: IReservationQueryRepo,
    *,
    lab: Lab,
    seat: SeatLabel,
    on: date,
    slot: TimeSlot,
) -> None:
    """Must run while holding the seat lock for (lab, seat, on, slot)."""
    if seat.seat_id in lab.baseline_occupied or seat.seat_id in lab.baseline_reserved:
        raise SeatUnavailableError(f'Seat {seat} in {lab.code} is not available')

    booked = await booked_seats_for_slot(reservation_query_repo, lab=lab, on=on, slot=slot)
    if seat.seat_id in booked:
        raise SeatUnavailableError(
            f'Seat {seat} in {lab.code} is already reserved for {on} {slot.label}'
        )


class CreateReservationUseCase:
    """
    Self-service booking of one seat for one 30-minute slot.

    Flow:
    1. Resolve the booking account (must exist)
    2. Validate lab, seat, date and slot
    3. Under the seat lock: check the seat is free, then write
    """

    def __init__(
        self,
        *,
        catalog: Catalog,
        account_query_repo: IAccountQueryRepo,
        reservation_command_repo: IReservationCommandRepo,
        reservation_query_repo: IReservationQueryRepo,
        seat_lock: KeyedLock,
        clock: Callable[[], datetime],
    ) -> None:
        self.catalog = catalog
        self.account_query_repo = account_query_repo
        self.reservation_command_repo = reservation_command_repo
        self.reservation_query_repo = reservation_query_repo
        self.seat_lock = seat_lock
        self.clock = clock

    @classmethod
    @inject
    def depends(
        cls,
        catalog: Catalog = Depends(Provide[Container.catalog]),
        account_query_repo: IAccountQueryRepo = Depends(Provide[Container.account_query_repo]),
        reservation_command_repo: IReservationCommandRepo = Depends(
            Provide[Container.reservation_command_repo]
        ),
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
        seat_lock: KeyedLock = Depends(Provide[Container.seat_lock]),
        clock: Callable[[], datetime] = Depends(Provide[Container.clock]),
    ) -> Self:
        return cls(
            catalog=catalog,
            account_query_repo=account_query_repo,
            reservation_command_repo=reservation_command_repo,
            reservation_query_repo=reservation_query_repo,
            seat_lock=seat_lock,
            clock=clock,
        )

    @Logger.io
    async def execute(
        self,
        *,
        user_email: str,
        lab: str,
        seat: str,
        date: str,
        time_slot: str,
        anonymous: bool = False,
    ) -> Reservation:
        account = await self.account_query_repo.get_by_email(email=user_email)
        if account is None:
            raise NotAuthenticatedError('Log in to reserve a seat')

        lab_ = self.catalog.require_lab(lab)
        seat_label = SeatLabel.parse(seat)
        require_seat_on_grid(lab_, seat_label)
        on = parse_booking_date(date)
        slot = TimeSlot.parse(time_slot)

        async with self.seat_lock.hold(key=seat_lock_key(lab_, seat_label, on, slot)):
            await ensure_seat_free(
                self.reservation_query_repo, lab=lab_, seat=seat_label, on=on, slot=slot
            )
            reservation = await self.reservation_command_repo.create(
                Reservation.create(
                    lab=lab_.code,
                    seat=seat_label.seat_id,
                    building=lab_.building,
                    date=on,
                    time_slot=slot,
                    user_email=account.email,
                    user_id=account.student_id,
                    owner_name=account.full_name,
                    anonymous=anonymous,
                    booked_on=self.clock().date(),
                )
            )

        Logger.base.info(
            f'🪑 [RESERVE] {reservation.user_email} booked {reservation.lab} {reservation.seat} '
            f'on {reservation.date} {reservation.time_slot} ({reservation.id})'
        )
        return reservation
