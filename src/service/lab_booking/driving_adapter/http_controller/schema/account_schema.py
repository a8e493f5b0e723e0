from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, SecretStr

from src.service.lab_booking.domain.entity.account_entity import AccountEntity


class CreateAccountRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'first_name': 'Juan',
                'last_name': 'Dela Cruz',
                'student_id': '12345678',
                'email': 'juan_delacruz@dlsu.edu.ph',
                'college': 'CCS',
                'account_type': 'student',
                'password': 'password1',
            }
        }
    )

    first_name: str
    last_name: str
    student_id: str
    email: str
    college: str
    account_type: str = 'student'
    password: SecretStr


class LoginRequest(BaseModel):
    email: str
    password: SecretStr


class UpdatePasswordRequest(BaseModel):
    new_password: SecretStr


class UpdateProfileRequest(BaseModel):
    """Unknown keys are kept so identity fields can be rejected with a clear error"""

    model_config = ConfigDict(extra='allow')

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    college: Optional[str] = None
    bio: Optional[str] = None

    def changed_fields(self) -> dict:
        return self.model_dump(exclude_unset=True)


class AccountResponse(BaseModel):
    student_id: str
    first_name: str
    last_name: str
    email: str
    college: str
    college_name: str
    account_type: str
    bio: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, account: AccountEntity) -> 'AccountResponse':
        return cls(
            student_id=account.student_id,
            first_name=account.first_name,
            last_name=account.last_name,
            email=account.email,
            college=account.college.value,
            college_name=account.college.display_name,
            account_type=account.account_type.value,
            bio=account.bio,
            created_at=account.created_at,
        )


class DeleteAccountResponse(BaseModel):
    email: str
    reservations_removed: int
