"""
Seat Label Value Object

A seat is addressed by its row letter and column number, e.g. "C7".
"""

import re

import attrs

from src.platform.exception.exceptions import ValidationError


SEAT_LABEL_PATTERN = re.compile(r'^([A-Z])([0-9]{1,2})$')


@attrs.frozen
class SeatLabel:
    row: str
    column: int

    @property
    def seat_id(self) -> str:
        return f'{self.row}{self.column}'

    @classmethod
    def parse(
        cls, value: str, *, error_cls: type[ValidationError] = ValidationError
    ) -> 'SeatLabel':
        """Parse "c7" / "C07" into SeatLabel(row='C', column=7)."""
        match = SEAT_LABEL_PATTERN.match((value or '').strip().upper())
        if not match:
            raise error_cls(f'Invalid seat format: {value!r}. Expected a row letter and 1-2 digits (e.g. C7)')
        return cls(row=match.group(1), column=int(match.group(2)))

    def __str__(self) -> str:
        return self.seat_id
