"""
Seat Map

Partition of a lab's seats into available / occupied / reserved for one
(date, slot). Baseline occupancy from the catalog wins over bookings.
"""

from collections import Counter
from typing import Dict, Iterable

from src.service.lab_booking.domain.enum.seat_state import SeatState
from src.service.lab_booking.domain.value_object.lab import Lab


def build_seat_states(lab: Lab, booked_seats: Iterable[str]) -> Dict[str, SeatState]:
    booked = set(booked_seats)
    states: Dict[str, SeatState] = {}
    for seat in lab.all_seats():
        if seat in lab.baseline_occupied:
            states[seat] = SeatState.OCCUPIED
        elif seat in lab.baseline_reserved or seat in booked:
            states[seat] = SeatState.RESERVED
        else:
            states[seat] = SeatState.AVAILABLE
    return states


def count_seat_states(states: Dict[str, SeatState]) -> Dict[SeatState, int]:
    counts = Counter(states.values())
    return {state: counts.get(state, 0) for state in SeatState}
