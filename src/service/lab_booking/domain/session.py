"""
Session rules

SessionUser is what the browser session carries: the account without its
password hash. Page access decides, per page, whether the current visitor may
see it or where they get sent instead.
"""

from enum import StrEnum
from typing import Any, Dict, Optional

import attrs

from src.service.lab_booking.domain.entity.account_entity import AccountEntity, AccountType


@attrs.frozen
class SessionUser:
    student_id: str
    email: str
    first_name: str
    last_name: str
    college: str
    account_type: AccountType

    @classmethod
    def from_account(cls, account: AccountEntity) -> 'SessionUser':
        return cls(
            student_id=account.student_id,
            email=account.email,
            first_name=account.first_name,
            last_name=account.last_name,
            college=str(account.college),
            account_type=account.account_type,
        )

    @property
    def full_name(self) -> str:
        return f'{self.first_name} {self.last_name}'

    @property
    def is_technician(self) -> bool:
        return self.account_type == AccountType.TECHNICIAN

    def to_claims(self) -> Dict[str, Any]:
        return {
            'sub': self.email,
            'student_id': self.student_id,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'college': self.college,
            'account_type': str(self.account_type),
        }

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> 'SessionUser':
        return cls(
            student_id=claims['student_id'],
            email=claims['sub'],
            first_name=claims['first_name'],
            last_name=claims['last_name'],
            college=claims['college'],
            account_type=AccountType(claims['account_type']),
        )


class Page(StrEnum):
    HOME = 'home'
    LABS = 'labs'
    LAB_DETAIL = 'lab_detail'
    LOGIN = 'login'
    REGISTER = 'register'
    RESERVE = 'reserve'
    MY_RESERVATIONS = 'my_reservations'
    PROFILE = 'profile'
    WALK_IN = 'walk_in'
    ALL_RESERVATIONS = 'all_reservations'


class PageAccess(StrEnum):
    PUBLIC = 'public'
    GUEST_ONLY = 'guest_only'
    AUTHENTICATED = 'authenticated'
    TECHNICIAN = 'technician'


PAGE_ACCESS: Dict[Page, PageAccess] = {
    Page.HOME: PageAccess.PUBLIC,
    Page.LABS: PageAccess.PUBLIC,
    Page.LAB_DETAIL: PageAccess.PUBLIC,
    Page.LOGIN: PageAccess.GUEST_ONLY,
    Page.REGISTER: PageAccess.GUEST_ONLY,
    Page.RESERVE: PageAccess.AUTHENTICATED,
    Page.MY_RESERVATIONS: PageAccess.AUTHENTICATED,
    Page.PROFILE: PageAccess.AUTHENTICATED,
    Page.WALK_IN: PageAccess.TECHNICIAN,
    Page.ALL_RESERVATIONS: PageAccess.TECHNICIAN,
}


@attrs.frozen
class PageAccessDecision:
    page: Page
    allowed: bool
    redirect_to: Optional[Page] = None


def resolve_page_access(page: Page, session_user: Optional[SessionUser]) -> PageAccessDecision:
    access = PAGE_ACCESS[page]

    if access == PageAccess.PUBLIC:
        return PageAccessDecision(page=page, allowed=True)
    if access == PageAccess.GUEST_ONLY:
        if session_user is None:
            return PageAccessDecision(page=page, allowed=True)
        return PageAccessDecision(page=page, allowed=False, redirect_to=Page.HOME)

    # Everything below needs a session
    if session_user is None:
        return PageAccessDecision(page=page, allowed=False, redirect_to=Page.LOGIN)
    if access == PageAccess.TECHNICIAN and not session_user.is_technician:
        return PageAccessDecision(page=page, allowed=False, redirect_to=Page.HOME)
    return PageAccessDecision(page=page, allowed=True)
