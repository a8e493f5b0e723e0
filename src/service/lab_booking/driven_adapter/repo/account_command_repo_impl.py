from typing import Any, AsyncContextManager, Callable, Dict

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import (
    DuplicateEmailError,
    DuplicateStudentIdError,
    NotFoundError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.state.keyed_lock import KeyedLock
from src.service.lab_booking.app.interface.i_account_command_repo import IAccountCommandRepo
from src.service.lab_booking.domain.entity.account_entity import (
    MUTABLE_PROFILE_FIELDS,
    AccountEntity,
    normalize_email,
)
from src.service.lab_booking.driven_adapter.model.account_model import AccountModel
from src.service.lab_booking.driven_adapter.model.reservation_model import ReservationModel
from src.service.lab_booking.driven_adapter.repo.account_query_repo_impl import (
    to_account_entity,
)
from src.service.lab_booking.driven_adapter.repo.writer_lock_key import (
    ACCOUNT_WRITER_KEY,
    RESERVATION_WRITER_KEY,
)


class AccountCommandRepoImpl(IAccountCommandRepo):
    def __init__(
        self,
        session_factory: Callable[..., AsyncContextManager[AsyncSession]],
        collection_lock: KeyedLock,
    ) -> None:
        self.session_factory = session_factory
        self.collection_lock = collection_lock

    @Logger.io
    async def create(self, account: AccountEntity) -> AccountEntity:
        async with self.collection_lock.hold(key=ACCOUNT_WRITER_KEY):
            async with self.session_factory() as session:
                email_taken = await session.execute(
                    select(AccountModel.student_id).where(AccountModel.email == account.email)
                )
                if email_taken.scalar_one_or_none() is not None:
                    raise DuplicateEmailError(f'Email {account.email} is already registered')
                if await session.get(AccountModel, account.student_id) is not None:
                    raise DuplicateStudentIdError(
                        f'Student ID {account.student_id} is already registered'
                    )

                account_model = AccountModel(
                    student_id=account.student_id,
                    email=account.email,
                    first_name=account.first_name,
                    last_name=account.last_name,
                    college=str(account.college),
                    account_type=str(account.account_type),
                    hashed_password=account.hashed_password,
                    bio=account.bio,
                )
                if account.created_at is not None:
                    account_model.created_at = account.created_at
                session.add(account_model)
                try:
                    await session.commit()
                except IntegrityError as e:
                    await session.rollback()
                    if 'email' in str(e.orig).lower():
                        raise DuplicateEmailError(f'Email {account.email} is already registered') from e
                    raise DuplicateStudentIdError(
                        f'Student ID {account.student_id} is already registered'
                    ) from e
                await session.refresh(account_model)

                return to_account_entity(account_model)

    @Logger.io
    async def update_profile(self, *, student_id: str, changes: Dict[str, Any]) -> AccountEntity:
        # student_id / email / account_type never change after registration
        values = {
            column: str(value) if column == 'college' else value
            for column, value in changes.items()
            if column in MUTABLE_PROFILE_FIELDS
        }
        return await self._update_columns(student_id=student_id, values=values)

    @Logger.io
    async def update_password(self, *, student_id: str, hashed_password: str) -> AccountEntity:
        return await self._update_columns(
            student_id=student_id, values={'hashed_password': hashed_password}
        )

    async def _update_columns(self, *, student_id: str, values: Dict[str, Any]) -> AccountEntity:
        async with self.collection_lock.hold(key=ACCOUNT_WRITER_KEY):
            async with self.session_factory() as session:
                if values:
                    # Only the named columns are written
                    await session.execute(
                        update(AccountModel)
                        .where(AccountModel.student_id == student_id)
                        .values(**values)
                    )
                    await session.commit()

                account_model = await session.get(AccountModel, student_id, populate_existing=True)
                if account_model is None:
                    raise NotFoundError(f'Account {student_id} not found')
                return to_account_entity(account_model)

    @Logger.io
    async def delete_with_reservations(self, *, email: str) -> int:
        email = normalize_email(email)
        async with (
            self.collection_lock.hold(key=ACCOUNT_WRITER_KEY),
            self.collection_lock.hold(key=RESERVATION_WRITER_KEY),
        ):
            async with self.session_factory() as session:
                async with session.begin():
                    deleted_reservations = await session.execute(
                        delete(ReservationModel).where(
                            func.lower(ReservationModel.user_email) == email
                        )
                    )
                    deleted_account = await session.execute(
                        delete(AccountModel).where(AccountModel.email == email)
                    )
                    if deleted_account.rowcount == 0:
                        # Raising inside begin() rolls the reservation delete back too
                        raise NotFoundError(f'Account {email} not found')

                return deleted_reservations.rowcount
