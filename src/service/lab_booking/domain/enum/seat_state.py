from enum import StrEnum


class SeatState(StrEnum):
    AVAILABLE = 'available'
    OCCUPIED = 'occupied'
    RESERVED = 'reserved'
