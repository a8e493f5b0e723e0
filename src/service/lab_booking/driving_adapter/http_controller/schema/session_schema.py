from typing import Optional

from pydantic import BaseModel

from src.service.lab_booking.domain.session import PageAccessDecision, SessionUser


class SessionUserResponse(BaseModel):
    student_id: str
    email: str
    first_name: str
    last_name: str
    college: str
    account_type: str

    @classmethod
    def from_session_user(cls, session_user: SessionUser) -> 'SessionUserResponse':
        return cls(
            student_id=session_user.student_id,
            email=session_user.email,
            first_name=session_user.first_name,
            last_name=session_user.last_name,
            college=session_user.college,
            account_type=session_user.account_type.value,
        )


class PageAccessResponse(BaseModel):
    page: str
    allowed: bool
    redirect_to: Optional[str] = None

    @classmethod
    def from_decision(cls, decision: PageAccessDecision) -> 'PageAccessResponse':
        return cls(
            page=decision.page.value,
            allowed=decision.allowed,
            redirect_to=decision.redirect_to.value if decision.redirect_to else None,
        )


class LogoutResponse(BaseModel):
    message: str = 'Logged out'
