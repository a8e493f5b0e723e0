from datetime import datetime
from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import (
    ForbiddenError,
    InvalidSeatFormatError,
    InvalidStudentIdError,
    PastDateError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.state.keyed_lock import KeyedLock
from src.service.lab_booking.app.command.create_reservation_use_case import (
    ensure_seat_free,
    require_seat_on_grid,
    seat_lock_key,
)
from src.service.lab_booking.app.interface.i_account_query_repo import IAccountQueryRepo
from src.service.lab_booking.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.lab_booking.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.lab_booking.domain.catalog import Catalog
from src.service.lab_booking.domain.entity.account_entity import AccountEntity
from src.service.lab_booking.domain.entity.reservation_entity import (
    Reservation,
    walk_in_display_name,
    walk_in_email,
)
from src.service.lab_booking.domain.value_object.seat_label import SeatLabel
from src.service.lab_booking.domain.value_object.time_slot import (
    TimeSlot,
    parse_booking_date,
)


class CreateWalkInUseCase:
    """
    A technician books a seat for a student standing at the lab.

    The student does not need an account: registered students are booked under
    their own email and name, everyone else under a walk-in identity derived
    from the student ID.
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
        technician_email: str,
        student_id: str,
        lab: str,
        seat: str,
        date: str,
        time_slot: str,
    ) -> Reservation:
        technician = await self.account_query_repo.get_by_email(email=technician_email)
        if technician is None or not technician.is_technician:
            raise ForbiddenError('Only lab technicians can create walk-in reservations')

        student_id = AccountEntity.validate_student_id(student_id, error_cls=InvalidStudentIdError)
        lab_ = self.catalog.require_lab(lab)
        seat_label = SeatLabel.parse(seat, error_cls=InvalidSeatFormatError)
        require_seat_on_grid(lab_, seat_label)
        on = parse_booking_date(date)
        today = self.clock().date()
        if on < today:
            raise PastDateError(f'Walk-in date {on} is in the past (today is {today})')
        slot = TimeSlot.parse(time_slot)

        student = await self.account_query_repo.get_by_student_id(student_id=student_id)
        if student is not None:
            user_email, owner_name = student.email, student.full_name
        else:
            user_email, owner_name = walk_in_email(student_id), walk_in_display_name(student_id)

        async with self.seat_lock.hold(key=seat_lock_key(lab_, seat_label, on, slot)):
            await ensure_seat_free(
                self.reservation_query_repo, lab=lab_, seat=seat_label, on=on, slot=slot
            )
            reservation = await self.reservation_command_repo.create(
                Reservation.create_walk_in(
                    lab=lab_.code,
                    seat=seat_label.seat_id,
                    building=lab_.building,
                    date=on,
                    time_slot=slot,
                    student_id=student_id,
                    user_email=user_email,
                    owner_name=owner_name,
                    technician_email=technician.email,
                    booked_on=today,
                )
            )

        Logger.base.info(
            f'🚶 [WALK-IN] {technician.email} booked {reservation.lab} {reservation.seat} '
            f'on {reservation.date} {reservation.time_slot} for {student_id} ({reservation.id})'
        )
        return reservation
