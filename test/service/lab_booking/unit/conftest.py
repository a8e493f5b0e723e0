from datetime import date, datetime
from typing import Any, Callable
from unittest.mock import AsyncMock

from pydantic import SecretStr
import pytest

from src.service.lab_booking.app.interface.i_account_query_repo import IAccountQueryRepo
from src.service.lab_booking.app.interface.i_password_hasher import IPasswordHasher
from src.service.lab_booking.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.lab_booking.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.lab_booking.domain.catalog import Catalog
from src.service.lab_booking.domain.entity.account_entity import AccountEntity, AccountType
from src.service.lab_booking.domain.entity.reservation_entity import (
    Reservation,
    ReservationStatus,
)
from src.service.lab_booking.domain.value_object.college import College


# Saturday 1 March 2025, 09:05 campus time
FIXED_NOW = datetime(2025, 3, 1, 9, 5)

STUDENT_EMAIL = 'a@dlsu.edu.ph'
OTHER_STUDENT_EMAIL = 'b@dlsu.edu.ph'
TECHNICIAN_EMAIL = 'tech@dlsu.edu.ph'


class PlainPasswordHasher(IPasswordHasher):
    """Reversible stand-in so unit tests stay fast"""

    def hash_password(self, *, plain_password: SecretStr) -> str:
        return f'plain${plain_password.get_secret_value()}'

    def verify_password(self, *, plain_password: SecretStr, hashed_password: str) -> bool:
        return hashed_password == f'plain${plain_password.get_secret_value()}'


@pytest.fixture
def password_hasher() -> IPasswordHasher:
    return PlainPasswordHasher()


@pytest.fixture
def catalog() -> Catalog:
    return Catalog()


@pytest.fixture
def clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def make_account(password_hasher: IPasswordHasher) -> Callable[..., AccountEntity]:
    def _make(**overrides: Any) -> AccountEntity:
        fields: dict[str, Any] = {
            'student_id': '12345678',
            'first_name': 'Ana',
            'last_name': 'Reyes',
            'email': STUDENT_EMAIL,
            'college': College.CCS,
            'account_type': AccountType.STUDENT,
            'hashed_password': password_hasher.hash_password(
                plain_password=SecretStr('password1')
            ),
        }
        fields.update(overrides)
        return AccountEntity(**fields)

    return _make


@pytest.fixture
def student(make_account: Callable[..., AccountEntity]) -> AccountEntity:
    return make_account()


@pytest.fixture
def technician(make_account: Callable[..., AccountEntity]) -> AccountEntity:
    return make_account(
        student_id='87654321',
        first_name='Tomas',
        last_name='Cruz',
        email=TECHNICIAN_EMAIL,
        account_type=AccountType.TECHNICIAN,
    )


@pytest.fixture
def make_reservation() -> Callable[..., Reservation]:
    def _make(**overrides: Any) -> Reservation:
        fields: dict[str, Any] = {
            'id': '01950a3c-0000-7000-8000-000000000001',
            'lab': 'GK101A',
            'seat': 'A1',
            'building': 'Gokongwei Hall',
            'date': date(2025, 3, 1),
            'time_slot': '09:00 - 09:30',
            'user_email': STUDENT_EMAIL,
            'status': ReservationStatus.UPCOMING,
            'booked_on': date(2025, 2, 28),
            'anonymous': False,
            'user_id': '12345678',
            'owner_name': 'Ana Reyes',
        }
        fields.update(overrides)
        return Reservation(**fields)

    return _make


@pytest.fixture
def account_query_repo() -> AsyncMock:
    repo = AsyncMock(spec=IAccountQueryRepo)
    repo.get_by_email.return_value = None
    repo.get_by_student_id.return_value = None
    return repo


@pytest.fixture
def reservation_query_repo() -> AsyncMock:
    repo = AsyncMock(spec=IReservationQueryRepo)
    repo.get_by_id.return_value = None
    repo.list_active_for_slot.return_value = []
    return repo


@pytest.fixture
def reservation_command_repo() -> AsyncMock:
    repo = AsyncMock(spec=IReservationCommandRepo)
    # Echo the reservation back the way the real repository does
    repo.create.side_effect = lambda reservation: reservation
    return repo
