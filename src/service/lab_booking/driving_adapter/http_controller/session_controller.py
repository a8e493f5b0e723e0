from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Response

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.lab_booking.domain.session import Page, SessionUser, resolve_page_access
from src.service.lab_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from src.service.lab_booking.driving_adapter.http_controller.auth.role_auth import (
    get_current_session_user,
    get_optional_session_user,
)
from src.service.lab_booking.driving_adapter.http_controller.schema.session_schema import (
    LogoutResponse,
    PageAccessResponse,
    SessionUserResponse,
)


router = APIRouter()


@router.get('', response_model=SessionUserResponse)
@Logger.io
async def get_session(
    session_user: SessionUser = Depends(get_current_session_user),
) -> SessionUserResponse:
    return SessionUserResponse.from_session_user(session_user)


@router.post('/logout', response_model=LogoutResponse)
@Logger.io
@inject
async def logout(
    response: Response,
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> LogoutResponse:
    jwt_auth.end_session(response)
    return LogoutResponse()


@router.get('/access/{page}', response_model=PageAccessResponse)
@Logger.io
async def get_page_access(
    page: Page,
    session_user: Optional[SessionUser] = Depends(get_optional_session_user),
) -> PageAccessResponse:
    return PageAccessResponse.from_decision(resolve_page_access(page, session_user))
