from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.lab_booking.app.interface.i_account_command_repo import IAccountCommandRepo
from src.service.lab_booking.app.interface.i_account_query_repo import IAccountQueryRepo
from src.service.lab_booking.app.interface.i_password_hasher import IPasswordHasher
from src.service.lab_booking.domain.entity.account_entity import AccountEntity


class UpdatePasswordUseCase:
    def __init__(
        self,
        *,
        account_command_repo: IAccountCommandRepo,
        account_query_repo: IAccountQueryRepo,
        password_hasher: IPasswordHasher,
    ) -> None:
        self.account_command_repo = account_command_repo
        self.account_query_repo = account_query_repo
        self.password_hasher = password_hasher

    @classmethod
    @inject
    def depends(
        cls,
        account_command_repo: IAccountCommandRepo = Depends(
            Provide[Container.account_command_repo]
        ),
        account_query_repo: IAccountQueryRepo = Depends(Provide[Container.account_query_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    ) -> Self:
        return cls(
            account_command_repo=account_command_repo,
            account_query_repo=account_query_repo,
            password_hasher=password_hasher,
        )

    @Logger.io
    async def execute(self, *, email: str, new_password: str) -> AccountEntity:
        account = await self.account_query_repo.get_by_email(email=email)
        if account is None:
            raise NotFoundError(f'Account {email} not found')

        rehashed = account.with_password(new_password, self.password_hasher)
        updated = await self.account_command_repo.update_password(
            student_id=account.student_id, hashed_password=rehashed.hashed_password
        )
        Logger.base.info(f'🔑 [ACCOUNT] Password changed for {updated.email}')
        return updated
