from typing import AsyncContextManager, Callable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.lab_booking.app.interface.i_account_query_repo import IAccountQueryRepo
from src.service.lab_booking.domain.entity.account_entity import (
    AccountEntity,
    AccountType,
    normalize_email,
)
from src.service.lab_booking.domain.value_object.college import College
from src.service.lab_booking.driven_adapter.model.account_model import AccountModel


def to_account_entity(account_model: AccountModel) -> AccountEntity:
    return AccountEntity(
        student_id=account_model.student_id,
        first_name=account_model.first_name,
        last_name=account_model.last_name,
        email=account_model.email,
        college=College(account_model.college),
        account_type=AccountType(account_model.account_type),
        hashed_password=account_model.hashed_password,
        bio=account_model.bio or '',
        created_at=account_model.created_at,
    )


class AccountQueryRepoImpl(IAccountQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def get_by_email(self, *, email: str) -> Optional[AccountEntity]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(AccountModel).where(AccountModel.email == normalize_email(email))
            )
            account_model = result.scalar_one_or_none()
            if not account_model:
                return None
            return to_account_entity(account_model)

    @Logger.io
    async def get_by_student_id(self, *, student_id: str) -> Optional[AccountEntity]:
        async with self.session_factory() as session:
            account_model = await session.get(AccountModel, (student_id or '').strip())
            if not account_model:
                return None
            return to_account_entity(account_model)

    @Logger.io
    async def exists_by_email(self, *, email: str) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                select(AccountModel.student_id).where(AccountModel.email == normalize_email(email))
            )
            return result.scalar_one_or_none() is not None
