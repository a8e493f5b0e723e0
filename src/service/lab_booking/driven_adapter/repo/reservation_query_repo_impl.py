from datetime import date
from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.lab_booking.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.lab_booking.domain.entity.account_entity import normalize_email
from src.service.lab_booking.domain.entity.reservation_entity import (
    Reservation,
    ReservationStatus,
)
from src.service.lab_booking.driven_adapter.model.reservation_model import ReservationModel


def to_reservation_entity(reservation_model: ReservationModel) -> Reservation:
    return Reservation(
        id=reservation_model.id,
        lab=reservation_model.lab,
        seat=reservation_model.seat,
        building=reservation_model.building,
        date=reservation_model.date,
        time_slot=reservation_model.time_slot,
        user_email=reservation_model.user_email,
        status=ReservationStatus(reservation_model.status),
        booked_on=reservation_model.booked_on,
        anonymous=reservation_model.anonymous,
        user_id=reservation_model.user_id,
        owner_name=reservation_model.owner_name,
        is_walk_in=reservation_model.is_walk_in,
        created_by=reservation_model.created_by,
        created_at=reservation_model.created_at,
    )


class ReservationQueryRepoImpl(IReservationQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, *, reservation_id: str) -> Optional[Reservation]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(ReservationModel).where(ReservationModel.id == reservation_id)
            )
            reservation_model = result.scalar_one_or_none()
            if not reservation_model:
                return None
            return to_reservation_entity(reservation_model)

    @Logger.io
    async def list_by_user_email(self, *, email: str) -> List[Reservation]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(ReservationModel)
                .where(func.lower(ReservationModel.user_email) == normalize_email(email))
                .order_by(ReservationModel.seq.desc())
            )
            return [to_reservation_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def list_all(self) -> List[Reservation]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(ReservationModel).order_by(ReservationModel.seq.desc())
            )
            return [to_reservation_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def list_active_for_slot(
        self, *, lab: str, on: date, time_slot: str
    ) -> List[Reservation]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(ReservationModel)
                .where(
                    ReservationModel.lab == lab,
                    ReservationModel.date == on,
                    ReservationModel.time_slot == time_slot,
                    ReservationModel.status == ReservationStatus.UPCOMING.value,
                )
                .order_by(ReservationModel.seat)
            )
            return [to_reservation_entity(model) for model in result.scalars().all()]
