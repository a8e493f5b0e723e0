"""
Account Query Use Cases
"""

from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.lab_booking.app.interface.i_account_query_repo import IAccountQueryRepo
from src.service.lab_booking.app.interface.i_password_hasher import IPasswordHasher
from src.service.lab_booking.domain.entity.account_entity import AccountEntity


async def find_account(
    account_query_repo: IAccountQueryRepo, identifier: str
) -> Optional[AccountEntity]:
    """Look an account up by email when the identifier has an '@', else by student ID."""
    if '@' in (identifier or ''):
        return await account_query_repo.get_by_email(email=identifier)
    return await account_query_repo.get_by_student_id(student_id=identifier)


class AccountQueryUseCase:
    def __init__(
        self,
        *,
        account_query_repo: IAccountQueryRepo,
        password_hasher: IPasswordHasher,
    ) -> None:
        self.account_query_repo = account_query_repo
        self.password_hasher = password_hasher

    @classmethod
    @inject
    def depends(
        cls,
        account_query_repo: IAccountQueryRepo = Depends(Provide[Container.account_query_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    ) -> Self:
        return cls(account_query_repo=account_query_repo, password_hasher=password_hasher)

    @Logger.io
    async def authenticate(self, *, email: str, password: str) -> Optional[AccountEntity]:
        """Returns None on unknown email or wrong password; callers decide how to report it."""
        account = await self.account_query_repo.get_by_email(email=email)
        if account is None:
            return None
        if not account.check_password(password, self.password_hasher):
            return None
        return account

    @Logger.io
    async def get_account(self, *, identifier: str) -> AccountEntity:
        account = await find_account(self.account_query_repo, identifier)
        if account is None:
            raise NotFoundError(f'Account {identifier} not found')
        return account
