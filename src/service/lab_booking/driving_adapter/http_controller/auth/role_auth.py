from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends, Request

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotAuthenticatedError
from src.service.lab_booking.domain.session import SessionUser
from src.service.lab_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


@inject
async def get_optional_session_user(
    request: Request,
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> Optional[SessionUser]:
    """Guests get None; a present but broken cookie is treated as no session."""
    token = request.cookies.get(jwt_auth.cookie_name)
    if not token:
        return None
    try:
        return jwt_auth.get_session_user(token)
    except NotAuthenticatedError:
        return None


@inject
async def get_current_session_user(
    request: Request,
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> SessionUser:
    return jwt_auth.get_session_user(request.cookies.get(jwt_auth.cookie_name))


async def require_technician(
    session_user: SessionUser = Depends(get_current_session_user),
) -> SessionUser:
    if not session_user.is_technician:
        raise ForbiddenError('Only lab technicians can perform this action')
    return session_user
