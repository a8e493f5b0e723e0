from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

from src.service.lab_booking.domain.entity.reservation_entity import (
    Reservation,
    ReservationStatus,
)


class IReservationCommandRepo(ABC):
    """Reservation write operations"""

    @abstractmethod
    async def create(self, reservation: Reservation) -> Reservation:
        """
        Raises:
            SeatUnavailableError: another upcoming reservation holds the same seat and slot
        """
        pass

    @abstractmethod
    async def transition_status(
        self, *, reservation_id: str, to_status: ReservationStatus
    ) -> Reservation:
        """Move an upcoming reservation to a terminal status.

        Raises:
            NotFoundError: no reservation with this id
            InvalidStateError: reservation is no longer upcoming
        """
        pass

    @abstractmethod
    async def complete_ended(self, *, now: datetime) -> List[Reservation]:
        """Mark every upcoming reservation whose slot ended at or before now as completed."""
        pass
