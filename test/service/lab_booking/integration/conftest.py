from datetime import datetime
from typing import Any, Awaitable, Callable

import pytest

from src.platform.config.di import container
from src.platform.state.keyed_lock import KeyedLock
from src.service.lab_booking.app.command.register_account_use_case import (
    RegisterAccountUseCase,
)
from src.service.lab_booking.domain.entity.account_entity import AccountEntity


@pytest.fixture
def register_account() -> Callable[..., Awaitable[AccountEntity]]:
    """Register an account through the real repository and bcrypt hasher"""
    use_case = RegisterAccountUseCase(
        account_command_repo=container.account_command_repo(),
        password_hasher=container.password_hasher(),
    )

    async def _register(**overrides: Any) -> AccountEntity:
        fields: dict[str, Any] = {
            'first_name': 'Ana',
            'last_name': 'Reyes',
            'student_id': '12345678',
            'email': 'a@dlsu.edu.ph',
            'college': 'CCS',
            'account_type': 'student',
            'password': 'password1',
        }
        fields.update(overrides)
        return await use_case.execute(**fields)

    return _register


@pytest.fixture
def use_case_deps() -> dict[str, Any]:
    """Constructor arguments shared by the reservation use cases"""
    return {
        'catalog': container.catalog(),
        'account_query_repo': container.account_query_repo(),
        'reservation_command_repo': container.reservation_command_repo(),
        'reservation_query_repo': container.reservation_query_repo(),
        'seat_lock': KeyedLock(),
        'clock': lambda: datetime(2025, 3, 1, 9, 5),
    }
