from abc import ABC, abstractmethod
from typing import Optional

from src.service.lab_booking.domain.entity.account_entity import AccountEntity


class IAccountQueryRepo(ABC):
    """Account read operations; email lookups are case-insensitive"""

    @abstractmethod
    async def get_by_email(self, *, email: str) -> Optional[AccountEntity]:
        pass

    @abstractmethod
    async def get_by_student_id(self, *, student_id: str) -> Optional[AccountEntity]:
        pass

    @abstractmethod
    async def exists_by_email(self, *, email: str) -> bool:
        pass
