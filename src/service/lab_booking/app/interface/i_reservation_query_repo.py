from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from src.service.lab_booking.domain.entity.reservation_entity import Reservation


class IReservationQueryRepo(ABC):
    """Reservation read operations"""

    @abstractmethod
    async def get_by_id(self, *, reservation_id: str) -> Optional[Reservation]:
        pass

    @abstractmethod
    async def list_by_user_email(self, *, email: str) -> List[Reservation]:
        """Newest first"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Reservation]:
        """Newest first"""
        pass

    @abstractmethod
    async def list_active_for_slot(
        self, *, lab: str, on: date, time_slot: str
    ) -> List[Reservation]:
        """Upcoming reservations of one lab for one (date, slot)"""
        pass
