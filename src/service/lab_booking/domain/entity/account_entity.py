from datetime import datetime, timezone
from enum import StrEnum
import re
from typing import TYPE_CHECKING, Any, Optional

import attrs
from pydantic import SecretStr

from src.platform.exception.exceptions import InvalidStudentIdError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.lab_booking.domain.value_object.college import College


if TYPE_CHECKING:
    from src.service.lab_booking.app.interface.i_password_hasher import IPasswordHasher


class AccountType(StrEnum):
    STUDENT = 'student'
    TECHNICIAN = 'technician'


STUDENT_ID_PATTERN = re.compile(r'^[0-9]{8}$')
EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_BYTES = 72  # bcrypt only looks at the first 72 bytes
MAX_NAME_LENGTH = 100
MAX_BIO_LENGTH = 500

MUTABLE_PROFILE_FIELDS = frozenset({'first_name', 'last_name', 'college', 'bio'})
IMMUTABLE_ACCOUNT_FIELDS = frozenset({'student_id', 'email', 'account_type'})


def normalize_email(email: Optional[str]) -> str:
    return (email or '').strip().lower()


@attrs.define
class AccountEntity:
    student_id: str
    first_name: str
    last_name: str
    email: str
    college: College
    account_type: AccountType = AccountType.STUDENT
    hashed_password: str = attrs.field(default='', repr=False)  # Hide from repr for security
    bio: str = ''
    created_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f'{self.first_name} {self.last_name}'

    @property
    def is_technician(self) -> bool:
        return self.account_type == AccountType.TECHNICIAN

    # === Validation (pure, raises ValidationError) ===

    @staticmethod
    def validate_student_id(
        student_id: Optional[str], *, error_cls: type[ValidationError] = ValidationError
    ) -> str:
        value = (student_id or '').strip()
        if not STUDENT_ID_PATTERN.match(value):
            raise error_cls('Student ID must be exactly 8 digits')
        return value

    @staticmethod
    def validate_password(password: Optional[str]) -> str:
        value = password or ''
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters')
        if len(value.encode('utf-8')) > MAX_PASSWORD_BYTES:
            raise ValidationError(f'Password must be at most {MAX_PASSWORD_BYTES} bytes')
        return value

    @staticmethod
    def validate_email(email: Optional[str]) -> str:
        value = normalize_email(email)
        if not EMAIL_PATTERN.match(value):
            raise ValidationError(f'Invalid email address: {email!r}')
        return value

    @staticmethod
    def validate_name(value: Optional[str], *, field: str) -> str:
        name = (value or '').strip()
        if not name:
            raise ValidationError(f'{field} is required')
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError(f'{field} must be at most {MAX_NAME_LENGTH} characters')
        return name

    @staticmethod
    def validate_college(college: Optional[str]) -> College:
        try:
            return College((college or '').strip().upper())
        except ValueError:
            valid = ', '.join(c.value for c in College)
            raise ValidationError(f'Invalid college: {college!r}. Must be one of: {valid}')

    @staticmethod
    def validate_account_type(account_type: Optional[str]) -> AccountType:
        try:
            return AccountType((account_type or '').strip().lower())
        except ValueError:
            valid = ', '.join(t.value for t in AccountType)
            raise ValidationError(f'Invalid account type: {account_type!r}. Must be one of: {valid}')

    @staticmethod
    def validate_bio(bio: Optional[str]) -> str:
        value = (bio or '').strip()
        if len(value) > MAX_BIO_LENGTH:
            raise ValidationError(f'Bio must be at most {MAX_BIO_LENGTH} characters')
        return value

    # === Factories / transitions ===

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        first_name: str,
        last_name: str,
        student_id: str,
        email: str,
        college: str,
        account_type: str,
        password: str,
        password_hasher: 'IPasswordHasher',
    ) -> 'AccountEntity':
        account = cls(
            student_id=cls.validate_student_id(student_id, error_cls=InvalidStudentIdError),
            first_name=cls.validate_name(first_name, field='First name'),
            last_name=cls.validate_name(last_name, field='Last name'),
            email=cls.validate_email(email),
            college=cls.validate_college(college),
            account_type=cls.validate_account_type(account_type),
            created_at=datetime.now(timezone.utc),
        )
        account.hashed_password = password_hasher.hash_password(
            plain_password=SecretStr(cls.validate_password(password))
        )
        return account

    @Logger.io
    def profile_changes(self, **fields: Any) -> dict[str, Any]:
        """Validated column values for a partial profile update; identity fields stay as created."""
        immutable = IMMUTABLE_ACCOUNT_FIELDS & fields.keys()
        if immutable:
            raise ValidationError(f'Cannot change {", ".join(sorted(immutable))} after registration')
        unknown = fields.keys() - MUTABLE_PROFILE_FIELDS
        if unknown:
            raise ValidationError(f'Unknown profile fields: {", ".join(sorted(unknown))}')

        changes: dict[str, Any] = {}
        if 'first_name' in fields:
            changes['first_name'] = self.validate_name(fields['first_name'], field='First name')
        if 'last_name' in fields:
            changes['last_name'] = self.validate_name(fields['last_name'], field='Last name')
        if 'college' in fields:
            changes['college'] = self.validate_college(fields['college'])
        if 'bio' in fields:
            changes['bio'] = self.validate_bio(fields['bio'])
        return changes

    def with_password(self, new_password: str, password_hasher: 'IPasswordHasher') -> 'AccountEntity':
        hashed = password_hasher.hash_password(
            plain_password=SecretStr(self.validate_password(new_password))
        )
        return attrs.evolve(self, hashed_password=hashed)

    def check_password(self, password: str, password_hasher: 'IPasswordHasher') -> bool:
        if not self.hashed_password:
            return False
        return password_hasher.verify_password(
            plain_password=SecretStr(password or ''), hashed_password=self.hashed_password
        )
