from datetime import date, datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict

from src.service.lab_booking.app.query.list_reservations_use_case import ReservationSummary
from src.service.lab_booking.app.query.rebook_hint_use_case import RebookHint
from src.service.lab_booking.app.query.seat_availability_use_case import (
    SeatAvailability,
    SeatOccupant,
)
from src.service.lab_booking.domain.entity.reservation_entity import Reservation


class ReservationCreateRequest(BaseModel):
    """Seat, date and slot stay plain strings so malformed values get a domain error code"""

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'lab': 'GK101A',
                'seat': 'A1',
                'date': '2025-03-01',
                'time_slot': '09:00 - 09:30',
                'anonymous': False,
            }
        }
    )

    lab: str
    seat: str
    date: str
    time_slot: str
    anonymous: bool = False


class WalkInCreateRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'student_id': '12345678',
                'lab': 'GK101A',
                'seat': 'C7',
                'date': '2025-03-01',
                'time_slot': '13:00',
            }
        }
    )

    student_id: str
    lab: str
    seat: str
    date: str
    time_slot: str


class ReservationResponse(BaseModel):
    id: str
    lab: str
    seat: str
    building: str
    date: date
    time_slot: str
    status: str
    booked_on: Optional[date] = None
    anonymous: bool
    user_email: Optional[str] = None
    user_id: Optional[str] = None
    owner_name: Optional[str] = None
    is_walk_in: bool
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, reservation: Reservation) -> 'ReservationResponse':
        return cls(
            id=reservation.id,
            lab=reservation.lab,
            seat=reservation.seat,
            building=reservation.building,
            date=reservation.date,
            time_slot=reservation.time_slot,
            status=reservation.status.value,
            booked_on=reservation.booked_on,
            anonymous=reservation.anonymous,
            user_email=reservation.user_email,
            user_id=reservation.user_id,
            owner_name=reservation.owner_name,
            is_walk_in=reservation.is_walk_in,
            created_by=reservation.created_by,
            created_at=reservation.created_at,
        )


class SeatAvailabilityResponse(BaseModel):
    lab: str
    date: date
    time_slot: str
    seats: Dict[str, Literal['available', 'occupied', 'reserved']]
    available: int
    occupied: int
    reserved: int

    @classmethod
    def from_availability(cls, availability: SeatAvailability) -> 'SeatAvailabilityResponse':
        counts = {state.value: count for state, count in availability.counts.items()}
        return cls(
            lab=availability.lab.code,
            date=availability.date,
            time_slot=availability.time_slot.label,
            seats={seat: state.value for seat, state in availability.seats.items()},
            available=counts['available'],
            occupied=counts['occupied'],
            reserved=counts['reserved'],
        )


class SeatOccupantResponse(BaseModel):
    seat: str
    display_name: str
    anonymous: bool
    is_walk_in: bool

    @classmethod
    def from_occupant(cls, occupant: SeatOccupant) -> 'SeatOccupantResponse':
        return cls(
            seat=occupant.seat,
            display_name=occupant.display_name,
            anonymous=occupant.anonymous,
            is_walk_in=occupant.is_walk_in,
        )


class RebookHintResponse(BaseModel):
    lab: str
    seat: str
    building: str

    @classmethod
    def from_hint(cls, hint: RebookHint) -> 'RebookHintResponse':
        return cls(lab=hint.lab, seat=hint.seat, building=hint.building)


class ReservationSummaryResponse(BaseModel):
    total: int
    upcoming: int
    completed: int
    cancelled: int
    next_upcoming: Optional[ReservationResponse] = None

    @classmethod
    def from_summary(cls, summary: ReservationSummary) -> 'ReservationSummaryResponse':
        counts = {status.value: count for status, count in summary.counts.items()}
        return cls(
            total=summary.total,
            upcoming=counts['upcoming'],
            completed=counts['completed'],
            cancelled=counts['cancelled'],
            next_upcoming=(
                ReservationResponse.from_entity(summary.next_upcoming)
                if summary.next_upcoming
                else None
            ),
        )


class ReservationListResponse(BaseModel):
    scope: Literal['self', 'all']
    reservations: List[ReservationResponse]
