"""
Lab Value Object

Static description of a computer lab: where it is, how its seat grid is laid
out, and which seats are pre-seeded as busy.
"""

from typing import FrozenSet, List, Tuple

import attrs

from src.service.lab_booking.domain.value_object.seat_label import SeatLabel


@attrs.frozen
class Lab:
    code: str
    building: str
    building_key: str
    rows: Tuple[str, ...] = attrs.field(converter=tuple)
    columns: int
    operating_hours: str
    gaps: FrozenSet[str] = attrs.field(factory=frozenset, converter=frozenset)
    baseline_occupied: FrozenSet[str] = attrs.field(factory=frozenset, converter=frozenset)
    baseline_reserved: FrozenSet[str] = attrs.field(factory=frozenset, converter=frozenset)

    def __attrs_post_init__(self) -> None:
        seats = set(self.all_seats())
        for name in ('baseline_occupied', 'baseline_reserved'):
            stray = getattr(self, name) - seats
            if stray:
                raise ValueError(f'{self.code}: {name} seats not on grid: {sorted(stray)}')
        if self.baseline_occupied & self.baseline_reserved:
            raise ValueError(f'{self.code}: seat listed as both occupied and reserved')

    @property
    def total_seats(self) -> int:
        return len(self.rows) * self.columns - len(self.gaps)

    def seat_grid(self) -> List[List[str]]:
        """Seat ids row by row, layout gaps left out."""
        return [
            [seat for column in range(1, self.columns + 1) if (seat := f'{row}{column}') not in self.gaps]
            for row in self.rows
        ]

    def all_seats(self) -> List[str]:
        return [seat for row in self.seat_grid() for seat in row]

    def has_seat(self, seat: SeatLabel) -> bool:
        return (
            seat.row in self.rows
            and 1 <= seat.column <= self.columns
            and seat.seat_id not in self.gaps
        )
