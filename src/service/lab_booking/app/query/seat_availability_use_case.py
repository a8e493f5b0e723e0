from datetime import date
from typing import Dict, List, Optional, Self, Set

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.lab_booking.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.lab_booking.domain.catalog import Catalog
from src.service.lab_booking.domain.entity.reservation_entity import Reservation
from src.service.lab_booking.domain.enum.seat_state import SeatState
from src.service.lab_booking.domain.seat_map import build_seat_states, count_seat_states
from src.service.lab_booking.domain.value_object.lab import Lab
from src.service.lab_booking.domain.value_object.time_slot import (
    TimeSlot,
    parse_booking_date,
)


@attrs.frozen
class SeatAvailability:
    lab: Lab
    date: date
    time_slot: TimeSlot
    seats: Dict[str, SeatState]
    counts: Dict[SeatState, int]


@attrs.frozen
class SeatOccupant:
    seat: str
    display_name: str
    anonymous: bool
    is_walk_in: bool


async def booked_seats_for_slot(
    reservation_query_repo: IReservationQueryRepo, *, lab: Lab, on: date, slot: TimeSlot
) -> Set[str]:
    active = await reservation_query_repo.list_active_for_slot(
        lab=lab.code, on=on, time_slot=slot.label
    )
    return {reservation.seat for reservation in active}


class SeatAvailabilityUseCase:
    """Seat map of one lab for one (date, slot), plus who holds the reserved seats."""

    def __init__(
        self,
        *,
        catalog: Catalog,
        reservation_query_repo: IReservationQueryRepo,
    ) -> None:
        self.catalog = catalog
        self.reservation_query_repo = reservation_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        catalog: Catalog = Depends(Provide[Container.catalog]),
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
    ) -> Self:
        return cls(catalog=catalog, reservation_query_repo=reservation_query_repo)

    @Logger.io
    async def availability(self, *, lab: str, date: str, time_slot: str) -> SeatAvailability:
        lab_ = self.catalog.require_lab(lab)
        on = parse_booking_date(date)
        slot = TimeSlot.parse(time_slot)

        booked = await booked_seats_for_slot(
            self.reservation_query_repo, lab=lab_, on=on, slot=slot
        )
        seats = build_seat_states(lab_, booked)
        return SeatAvailability(
            lab=lab_, date=on, time_slot=slot, seats=seats, counts=count_seat_states(seats)
        )

    @Logger.io
    async def occupants(
        self, *, lab: str, date: str, time_slot: str, viewer_email: Optional[str]
    ) -> List[SeatOccupant]:
        lab_ = self.catalog.require_lab(lab)
        on = parse_booking_date(date)
        slot = TimeSlot.parse(time_slot)

        active: List[Reservation] = await self.reservation_query_repo.list_active_for_slot(
            lab=lab_.code, on=on, time_slot=slot.label
        )
        occupants = []
        for reservation in active:
            visible = reservation.visible_to(viewer_email)
            occupants.append(
                SeatOccupant(
                    seat=visible.seat,
                    display_name=visible.display_name,
                    anonymous=visible.anonymous,
                    is_walk_in=visible.is_walk_in,
                )
            )
        return occupants
