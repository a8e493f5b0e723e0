from datetime import datetime
from typing import AsyncContextManager, Callable, List

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import (
    InvalidStateError,
    NotFoundError,
    SeatUnavailableError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.state.keyed_lock import KeyedLock
from src.service.lab_booking.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.lab_booking.domain.entity.reservation_entity import (
    Reservation,
    ReservationStatus,
)
from src.service.lab_booking.driven_adapter.model.reservation_model import ReservationModel
from src.service.lab_booking.driven_adapter.repo.reservation_query_repo_impl import (
    to_reservation_entity,
)
from src.service.lab_booking.driven_adapter.repo.writer_lock_key import RESERVATION_WRITER_KEY


class ReservationCommandRepoImpl(IReservationCommandRepo):
    def __init__(
        self,
        session_factory: Callable[..., AsyncContextManager[AsyncSession]],
        collection_lock: KeyedLock,
    ) -> None:
        self.session_factory = session_factory
        self.collection_lock = collection_lock

    @Logger.io
    async def create(self, reservation: Reservation) -> Reservation:
        async with self.collection_lock.hold(key=RESERVATION_WRITER_KEY):
            async with self.session_factory() as session:
                reservation_model = ReservationModel(
                    id=reservation.id,
                    lab=reservation.lab,
                    seat=reservation.seat,
                    building=reservation.building,
                    date=reservation.date,
                    time_slot=reservation.time_slot,
                    status=reservation.status.value,
                    booked_on=reservation.booked_on,
                    anonymous=reservation.anonymous,
                    user_email=reservation.user_email,
                    user_id=reservation.user_id,
                    owner_name=reservation.owner_name,
                    is_walk_in=reservation.is_walk_in,
                    created_by=reservation.created_by,
                )
                if reservation.created_at is not None:
                    reservation_model.created_at = reservation.created_at
                session.add(reservation_model)
                try:
                    await session.commit()
                except IntegrityError as e:
                    await session.rollback()
                    raise SeatUnavailableError(
                        f'Seat {reservation.seat} in {reservation.lab} is already reserved for '
                        f'{reservation.date} {reservation.time_slot}'
                    ) from e
                await session.refresh(reservation_model)

                return to_reservation_entity(reservation_model)

    @Logger.io
    async def transition_status(
        self, *, reservation_id: str, to_status: ReservationStatus
    ) -> Reservation:
        async with self.collection_lock.hold(key=RESERVATION_WRITER_KEY):
            async with self.session_factory() as session:
                # Conditional update: only an upcoming row may move
                result = await session.execute(
                    update(ReservationModel)
                    .where(
                        ReservationModel.id == reservation_id,
                        ReservationModel.status == ReservationStatus.UPCOMING.value,
                    )
                    .values(status=to_status.value)
                )
                await session.commit()

                current = await session.execute(
                    select(ReservationModel).where(ReservationModel.id == reservation_id)
                )
                reservation_model = current.scalar_one_or_none()
                if reservation_model is None:
                    raise NotFoundError(f'Reservation {reservation_id} not found')
                if result.rowcount == 0:
                    raise InvalidStateError(
                        f'Reservation {reservation_id} is already {reservation_model.status}'
                    )

                return to_reservation_entity(reservation_model)

    @Logger.io
    async def complete_ended(self, *, now: datetime) -> List[Reservation]:
        async with self.collection_lock.hold(key=RESERVATION_WRITER_KEY):
            async with self.session_factory() as session:
                candidates = await session.execute(
                    select(ReservationModel).where(
                        ReservationModel.status == ReservationStatus.UPCOMING.value,
                        ReservationModel.date <= now.date(),
                    )
                )
                # Slot labels are text, so the end-of-slot check happens on the entity
                due = [
                    reservation
                    for reservation in map(to_reservation_entity, candidates.scalars().all())
                    if reservation.is_due_for_completion(now)
                ]
                if not due:
                    return []

                await session.execute(
                    update(ReservationModel)
                    .where(
                        ReservationModel.id.in_([reservation.id for reservation in due]),
                        ReservationModel.status == ReservationStatus.UPCOMING.value,
                    )
                    .values(status=ReservationStatus.COMPLETED.value)
                )
                await session.commit()

                return [reservation.complete() for reservation in due]
