from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.lab_booking.app.interface.i_account_command_repo import IAccountCommandRepo
from src.service.lab_booking.app.interface.i_password_hasher import IPasswordHasher
from src.service.lab_booking.domain.entity.account_entity import AccountEntity


class RegisterAccountUseCase:
    """
    Register a student or technician account.

    Input is validated and the password hashed before anything is written; the
    repository rejects a taken email or student ID, so a failed attempt leaves
    the account table unchanged.
    """

    def __init__(
        self,
        *,
        account_command_repo: IAccountCommandRepo,
        password_hasher: IPasswordHasher,
    ) -> None:
        self.account_command_repo = account_command_repo
        self.password_hasher = password_hasher

    @classmethod
    @inject
    def depends(
        cls,
        account_command_repo: IAccountCommandRepo = Depends(
            Provide[Container.account_command_repo]
        ),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    ) -> Self:
        return cls(account_command_repo=account_command_repo, password_hasher=password_hasher)

    @Logger.io
    async def execute(
        self,
        *,
        first_name: str,
        last_name: str,
        student_id: str,
        email: str,
        college: str,
        account_type: str,
        password: str,
    ) -> AccountEntity:
        account = AccountEntity.create(
            first_name=first_name,
            last_name=last_name,
            student_id=student_id,
            email=email,
            college=college,
            account_type=account_type,
            password=password,
            password_hasher=self.password_hasher,
        )
        created = await self.account_command_repo.create(account)

        Logger.base.info(
            f'👤 [ACCOUNT] Registered {created.account_type} {created.student_id} ({created.email})'
        )
        return created
