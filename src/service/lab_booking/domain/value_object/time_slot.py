"""
Time Slot Value Object

Bookings are made in fixed 30-minute windows between 07:30 and 21:00.
A slot is stored by its display label ("09:00 - 09:30"); input may also give
the start time alone ("09:00").
"""

from datetime import date, datetime, time, timedelta
import re
from typing import Tuple

import attrs

from src.platform.exception.exceptions import ValidationError


SLOT_LENGTH = timedelta(minutes=30)
FIRST_SLOT_START = time(7, 30)
LAST_SLOT_END = time(21, 0)

_TIME_PATTERN = r'([01]?[0-9]|2[0-3]):([0-5][0-9])'
_SLOT_PATTERN = re.compile(rf'^{_TIME_PATTERN}(?:\s*-\s*{_TIME_PATTERN})?$')


@attrs.frozen(order=True)
class TimeSlot:
    start: time

    @property
    def end(self) -> time:
        return (datetime.combine(date.min, self.start) + SLOT_LENGTH).time()

    @property
    def label(self) -> str:
        return f'{self.start:%H:%M} - {self.end:%H:%M}'

    def starts_at(self, on: date) -> datetime:
        return datetime.combine(on, self.start)

    def ends_at(self, on: date) -> datetime:
        return self.starts_at(on) + SLOT_LENGTH

    @classmethod
    def parse(cls, value: str) -> 'TimeSlot':
        match = _SLOT_PATTERN.match((value or '').strip())
        if not match:
            raise ValidationError(f'Invalid time slot: {value!r}')

        start_hour, start_minute, end_hour, end_minute = match.groups()
        slot = cls(start=time(int(start_hour), int(start_minute)))
        if slot not in ALL_TIME_SLOTS:
            raise ValidationError(f'Time slot {value!r} is not a bookable 30-minute slot')
        if end_hour is not None and time(int(end_hour), int(end_minute)) != slot.end:
            raise ValidationError(f'Time slot {value!r} must span exactly 30 minutes')
        return slot

    def __str__(self) -> str:
        return self.label


def _enumerate_slots() -> Tuple[TimeSlot, ...]:
    slots = []
    cursor = datetime.combine(date.min, FIRST_SLOT_START)
    last_end = datetime.combine(date.min, LAST_SLOT_END)
    while cursor + SLOT_LENGTH <= last_end:
        slots.append(TimeSlot(start=cursor.time()))
        cursor += SLOT_LENGTH
    return tuple(slots)


ALL_TIME_SLOTS: Tuple[TimeSlot, ...] = _enumerate_slots()


def parse_booking_date(value: date | str) -> date:
    """Accept a date or an ISO "YYYY-MM-DD" string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat((value or '').strip())
    except ValueError as e:
        raise ValidationError(f'Invalid date: {value!r}. Expected YYYY-MM-DD') from e
