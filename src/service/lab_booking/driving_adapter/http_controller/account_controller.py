from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Response, status

from src.platform.config.di import Container
from src.platform.exception.exceptions import LoginError
from src.platform.logging.loguru_io import Logger
from src.service.lab_booking.app.command.delete_account_use_case import DeleteAccountUseCase
from src.service.lab_booking.app.command.register_account_use_case import (
    RegisterAccountUseCase,
)
from src.service.lab_booking.app.command.update_password_use_case import UpdatePasswordUseCase
from src.service.lab_booking.app.command.update_profile_use_case import UpdateProfileUseCase
from src.service.lab_booking.app.query.account_query_use_case import AccountQueryUseCase
from src.service.lab_booking.domain.session import SessionUser
from src.service.lab_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from src.service.lab_booking.driving_adapter.http_controller.auth.role_auth import (
    get_current_session_user,
)
from src.service.lab_booking.driving_adapter.http_controller.schema.account_schema import (
    AccountResponse,
    CreateAccountRequest,
    DeleteAccountResponse,
    LoginRequest,
    UpdatePasswordRequest,
    UpdateProfileRequest,
)


router = APIRouter()


@router.post('', response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
@inject
async def register(
    response: Response,
    request: CreateAccountRequest,
    use_case: RegisterAccountUseCase = Depends(RegisterAccountUseCase.depends),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> AccountResponse:
    account = await use_case.execute(
        first_name=request.first_name,
        last_name=request.last_name,
        student_id=request.student_id,
        email=request.email,
        college=request.college,
        account_type=request.account_type,
        password=request.password.get_secret_value(),
    )
    # Registration logs the new user straight in
    jwt_auth.start_session(response, SessionUser.from_account(account))
    return AccountResponse.from_entity(account)


@router.post('/login', response_model=AccountResponse)
@Logger.io
@inject
async def login(
    response: Response,
    request: LoginRequest,
    use_case: AccountQueryUseCase = Depends(AccountQueryUseCase.depends),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> AccountResponse:
    account = await use_case.authenticate(
        email=request.email, password=request.password.get_secret_value()
    )
    if account is None:
        raise LoginError('Invalid email or password')

    jwt_auth.start_session(response, SessionUser.from_account(account))
    return AccountResponse.from_entity(account)


@router.get('/me', response_model=AccountResponse)
@Logger.io
async def get_me(
    session_user: SessionUser = Depends(get_current_session_user),
    use_case: AccountQueryUseCase = Depends(AccountQueryUseCase.depends),
) -> AccountResponse:
    account = await use_case.get_account(identifier=session_user.email)
    return AccountResponse.from_entity(account)


@router.patch('/me', response_model=AccountResponse)
@Logger.io
@inject
async def update_profile(
    response: Response,
    request: UpdateProfileRequest,
    session_user: SessionUser = Depends(get_current_session_user),
    use_case: UpdateProfileUseCase = Depends(UpdateProfileUseCase.depends),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> AccountResponse:
    account = await use_case.execute(
        identifier=session_user.student_id, fields=request.changed_fields()
    )
    # Names and college live in the session too
    jwt_auth.start_session(response, SessionUser.from_account(account))
    return AccountResponse.from_entity(account)


@router.put('/me/password', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def update_password(
    request: UpdatePasswordRequest,
    session_user: SessionUser = Depends(get_current_session_user),
    use_case: UpdatePasswordUseCase = Depends(UpdatePasswordUseCase.depends),
) -> None:
    await use_case.execute(
        email=session_user.email, new_password=request.new_password.get_secret_value()
    )


@router.delete('/me', response_model=DeleteAccountResponse)
@Logger.io
@inject
async def delete_account(
    response: Response,
    session_user: SessionUser = Depends(get_current_session_user),
    use_case: DeleteAccountUseCase = Depends(DeleteAccountUseCase.depends),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> DeleteAccountResponse:
    removed = await use_case.execute(email=session_user.email)
    jwt_auth.end_session(response)
    return DeleteAccountResponse(email=session_user.email, reservations_removed=removed)
