from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.lab_booking.app.command.cancel_reservation_use_case import (
    CancelReservationUseCase,
)
from src.service.lab_booking.app.command.create_reservation_use_case import (
    CreateReservationUseCase,
)
from src.service.lab_booking.app.command.create_walk_in_use_case import CreateWalkInUseCase
from src.service.lab_booking.app.command.remove_no_show_use_case import RemoveNoShowUseCase
from src.service.lab_booking.app.query.list_reservations_use_case import ListReservationsUseCase
from src.service.lab_booking.app.query.rebook_hint_use_case import RebookHintUseCase
from src.service.lab_booking.app.query.seat_availability_use_case import SeatAvailabilityUseCase
from src.service.lab_booking.domain.session import SessionUser
from src.service.lab_booking.driving_adapter.http_controller.auth.role_auth import (
    get_current_session_user,
    get_optional_session_user,
    require_technician,
)
from src.service.lab_booking.driving_adapter.http_controller.schema.reservation_schema import (
    RebookHintResponse,
    ReservationCreateRequest,
    ReservationListResponse,
    ReservationResponse,
    ReservationSummaryResponse,
    SeatAvailabilityResponse,
    SeatOccupantResponse,
    WalkInCreateRequest,
)


router = APIRouter()


@router.get('/availability', response_model=SeatAvailabilityResponse)
@Logger.io
async def get_availability(
    lab: str,
    date: str,
    time_slot: str,
    use_case: SeatAvailabilityUseCase = Depends(SeatAvailabilityUseCase.depends),
) -> SeatAvailabilityResponse:
    availability = await use_case.availability(lab=lab, date=date, time_slot=time_slot)
    return SeatAvailabilityResponse.from_availability(availability)


@router.get('/occupants', response_model=List[SeatOccupantResponse])
@Logger.io
async def get_occupants(
    lab: str,
    date: str,
    time_slot: str,
    session_user: Optional[SessionUser] = Depends(get_optional_session_user),
    use_case: SeatAvailabilityUseCase = Depends(SeatAvailabilityUseCase.depends),
) -> List[SeatOccupantResponse]:
    occupants = await use_case.occupants(
        lab=lab,
        date=date,
        time_slot=time_slot,
        viewer_email=session_user.email if session_user else None,
    )
    return [SeatOccupantResponse.from_occupant(occupant) for occupant in occupants]


@router.get('/summary', response_model=ReservationSummaryResponse)
@Logger.io
async def get_summary(
    session_user: SessionUser = Depends(get_current_session_user),
    use_case: ListReservationsUseCase = Depends(ListReservationsUseCase.depends),
) -> ReservationSummaryResponse:
    summary = await use_case.summary(email=session_user.email)
    return ReservationSummaryResponse.from_summary(summary)


@router.get('', response_model=ReservationListResponse)
@Logger.io
async def list_reservations(
    scope: Literal['self', 'all'] = 'self',
    session_user: SessionUser = Depends(get_current_session_user),
    use_case: ListReservationsUseCase = Depends(ListReservationsUseCase.depends),
) -> ReservationListResponse:
    if scope == 'all':
        reservations = await use_case.list_all(viewer_email=session_user.email)
    else:
        reservations = await use_case.list_for_user(email=session_user.email)
    return ReservationListResponse(
        scope=scope,
        reservations=[ReservationResponse.from_entity(r) for r in reservations],
    )


@router.post('', response_model=ReservationResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_reservation(
    request: ReservationCreateRequest,
    session_user: SessionUser = Depends(get_current_session_user),
    use_case: CreateReservationUseCase = Depends(CreateReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.execute(
        user_email=session_user.email,
        lab=request.lab,
        seat=request.seat,
        date=request.date,
        time_slot=request.time_slot,
        anonymous=request.anonymous,
    )
    return ReservationResponse.from_entity(reservation)


@router.post('/walk-in', response_model=ReservationResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_walk_in(
    request: WalkInCreateRequest,
    session_user: SessionUser = Depends(require_technician),
    use_case: CreateWalkInUseCase = Depends(CreateWalkInUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.execute(
        technician_email=session_user.email,
        student_id=request.student_id,
        lab=request.lab,
        seat=request.seat,
        date=request.date,
        time_slot=request.time_slot,
    )
    return ReservationResponse.from_entity(reservation)


@router.patch('/{reservation_id}/cancel', response_model=ReservationResponse)
@Logger.io
async def cancel_reservation(
    reservation_id: str,
    session_user: SessionUser = Depends(get_current_session_user),
    use_case: CancelReservationUseCase = Depends(CancelReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.execute(reservation_id=reservation_id, by_email=session_user.email)
    return ReservationResponse.from_entity(reservation.visible_to(session_user.email))


@router.patch('/{reservation_id}/no-show', response_model=ReservationResponse)
@Logger.io
async def remove_no_show(
    reservation_id: str,
    session_user: SessionUser = Depends(require_technician),
    use_case: RemoveNoShowUseCase = Depends(RemoveNoShowUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.execute(reservation_id=reservation_id, by_email=session_user.email)
    return ReservationResponse.from_entity(reservation.visible_to(session_user.email))


@router.get('/{reservation_id}/rebook', response_model=RebookHintResponse)
@Logger.io
async def get_rebook_hint(
    reservation_id: str,
    session_user: SessionUser = Depends(get_current_session_user),
    use_case: RebookHintUseCase = Depends(RebookHintUseCase.depends),
) -> RebookHintResponse:
    hint = await use_case.execute(reservation_id=reservation_id, viewer_email=session_user.email)
    return RebookHintResponse.from_hint(hint)
