from abc import ABC, abstractmethod
from typing import Any, Dict

from src.service.lab_booking.domain.entity.account_entity import AccountEntity


class IAccountCommandRepo(ABC):
    """Account write operations"""

    @abstractmethod
    async def create(self, account: AccountEntity) -> AccountEntity:
        """
        Raises:
            DuplicateEmailError / DuplicateStudentIdError: identity already taken
        """
        pass

    @abstractmethod
    async def update_profile(self, *, student_id: str, changes: Dict[str, Any]) -> AccountEntity:
        """Write only the given profile columns.

        Raises:
            NotFoundError: no account with this student ID
        """
        pass

    @abstractmethod
    async def update_password(self, *, student_id: str, hashed_password: str) -> AccountEntity:
        """Write only the password hash; profile columns are left alone."""
        pass

    @abstractmethod
    async def delete_with_reservations(self, *, email: str) -> int:
        """Delete the account and every reservation booked under its email in one
        transaction. Returns the number of reservations removed."""
        pass
