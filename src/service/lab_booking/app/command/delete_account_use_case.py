from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.lab_booking.app.interface.i_account_command_repo import IAccountCommandRepo
from src.service.lab_booking.app.interface.i_account_query_repo import IAccountQueryRepo


class DeleteAccountUseCase:
    """Delete an account together with every reservation booked under its email."""

    def __init__(
        self,
        *,
        account_command_repo: IAccountCommandRepo,
        account_query_repo: IAccountQueryRepo,
    ) -> None:
        self.account_command_repo = account_command_repo
        self.account_query_repo = account_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        account_command_repo: IAccountCommandRepo = Depends(
            Provide[Container.account_command_repo]
        ),
        account_query_repo: IAccountQueryRepo = Depends(Provide[Container.account_query_repo]),
    ) -> Self:
        return cls(account_command_repo=account_command_repo, account_query_repo=account_query_repo)

    @Logger.io
    async def execute(self, *, email: str) -> int:
        if not await self.account_query_repo.exists_by_email(email=email):
            raise NotFoundError(f'Account {email} not found')

        removed = await self.account_command_repo.delete_with_reservations(email=email)
        Logger.base.info(f'🗑️  [ACCOUNT] Deleted {email} and {removed} reservation(s)')
        return removed
