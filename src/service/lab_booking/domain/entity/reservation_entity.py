from datetime import date, datetime, timedelta, timezone
from enum import StrEnum
from typing import Optional

import attrs
import uuid_utils

from src.platform.exception.exceptions import InvalidStateError, NotYetEligibleError
from src.platform.logging.loguru_io import Logger
from src.service.lab_booking.domain.value_object.time_slot import TimeSlot


class ReservationStatus(StrEnum):
    UPCOMING = 'upcoming'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'


WALK_IN_EMAIL_DOMAIN = 'walk-in.local'
ANONYMOUS_DISPLAY_NAME = 'Anonymous'


def walk_in_email(student_id: str) -> str:
    return f'{student_id}@{WALK_IN_EMAIL_DOMAIN}'


def walk_in_display_name(student_id: str) -> str:
    return f'Walk-in Student {student_id}'


@attrs.define
class Reservation:
    id: str
    lab: str
    seat: str
    building: str
    date: date
    time_slot: str
    user_email: Optional[str]
    status: ReservationStatus = ReservationStatus.UPCOMING
    booked_on: Optional[date] = None
    anonymous: bool = False
    user_id: Optional[str] = None
    owner_name: Optional[str] = None
    is_walk_in: bool = False
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        lab: str,
        seat: str,
        building: str,
        date: date,
        time_slot: TimeSlot,
        user_email: str,
        user_id: str,
        owner_name: str,
        anonymous: bool,
        booked_on: date,
    ) -> 'Reservation':
        return cls(
            id=str(uuid_utils.uuid7()),
            lab=lab,
            seat=seat,
            building=building,
            date=date,
            time_slot=time_slot.label,
            user_email=user_email,
            status=ReservationStatus.UPCOMING,
            booked_on=booked_on,
            anonymous=anonymous,
            user_id=user_id,
            owner_name=owner_name,
            is_walk_in=False,
            created_at=datetime.now(timezone.utc),
        )

    @classmethod
    @Logger.io
    def create_walk_in(
        cls,
        *,
        lab: str,
        seat: str,
        building: str,
        date: date,
        time_slot: TimeSlot,
        student_id: str,
        user_email: str,
        owner_name: str,
        technician_email: str,
        booked_on: date,
    ) -> 'Reservation':
        """Walk-ins are booked by a technician on a student's behalf and are never anonymous."""
        return cls(
            id=str(uuid_utils.uuid7()),
            lab=lab,
            seat=seat,
            building=building,
            date=date,
            time_slot=time_slot.label,
            user_email=user_email,
            status=ReservationStatus.UPCOMING,
            booked_on=booked_on,
            anonymous=False,
            user_id=student_id,
            owner_name=owner_name,
            is_walk_in=True,
            created_by=technician_email,
            created_at=datetime.now(timezone.utc),
        )

    @property
    def slot(self) -> TimeSlot:
        return TimeSlot.parse(self.time_slot)

    @property
    def starts_at(self) -> datetime:
        return self.slot.starts_at(self.date)

    @property
    def ends_at(self) -> datetime:
        return self.slot.ends_at(self.date)

    @property
    def is_active(self) -> bool:
        return self.status == ReservationStatus.UPCOMING

    def is_owned_by(self, email: Optional[str]) -> bool:
        if not email or not self.user_email:
            return False
        return self.user_email.lower() == email.strip().lower()

    def _require_upcoming(self, action: str) -> None:
        if self.status != ReservationStatus.UPCOMING:
            raise InvalidStateError(f'Cannot {action} a {self.status} reservation')

    @Logger.io
    def cancel(self) -> 'Reservation':
        self._require_upcoming('cancel')
        return attrs.evolve(self, status=ReservationStatus.CANCELLED)

    @Logger.io
    def complete(self) -> 'Reservation':
        self._require_upcoming('complete')
        return attrs.evolve(self, status=ReservationStatus.COMPLETED)

    @Logger.io
    def validate_no_show_window(self, *, now: datetime, grace: timedelta) -> None:
        """
        A no-show can only be cleared once the slot has started and while the
        grace period after its start is still running.

        Raises:
            InvalidStateError: reservation is not upcoming
            NotYetEligibleError: now is outside [slot start, slot start + grace]
        """
        self._require_upcoming('remove as no-show')
        window_start = self.starts_at
        window_end = window_start + grace
        if now < window_start:
            raise NotYetEligibleError(
                f'Reservation {self.id} starts at {window_start:%Y-%m-%d %H:%M}; '
                'no-shows can only be removed after the slot starts'
            )
        if now > window_end:
            raise NotYetEligibleError(
                f'No-show window for reservation {self.id} closed at {window_end:%Y-%m-%d %H:%M}'
            )

    def is_due_for_completion(self, now: datetime) -> bool:
        return self.is_active and self.ends_at <= now

    def visible_to(self, viewer_email: Optional[str]) -> 'Reservation':
        """Anonymous bookings hide who made them from everyone except the owner."""
        if not self.anonymous or self.is_owned_by(viewer_email):
            return self
        return attrs.evolve(self, user_email=None, user_id=None, owner_name=None)

    @property
    def display_name(self) -> str:
        if self.owner_name:
            return self.owner_name
        return ANONYMOUS_DISPLAY_NAME
