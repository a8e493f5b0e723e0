from typing import Any, Dict, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.lab_booking.app.interface.i_account_command_repo import IAccountCommandRepo
from src.service.lab_booking.app.interface.i_account_query_repo import IAccountQueryRepo
from src.service.lab_booking.app.query.account_query_use_case import find_account
from src.service.lab_booking.domain.entity.account_entity import AccountEntity


class UpdateProfileUseCase:
    """Partial profile update. Only first/last name, college and bio may change."""

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
    async def execute(self, *, identifier: str, fields: Dict[str, Any]) -> AccountEntity:
        """
        Args:
            identifier: student ID or email of the account
            fields: profile fields to change; identity fields are rejected
        """
        account = await find_account(self.account_query_repo, identifier)
        if account is None:
            raise NotFoundError(f'Account {identifier} not found')

        changes = account.profile_changes(**fields)
        if not changes:
            return account
        return await self.account_command_repo.update_profile(
            student_id=account.student_id, changes=changes
        )
