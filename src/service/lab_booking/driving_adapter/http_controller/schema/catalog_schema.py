from typing import List

from pydantic import BaseModel

from src.service.lab_booking.domain.value_object.college import College
from src.service.lab_booking.domain.value_object.lab import Lab
from src.service.lab_booking.domain.value_object.time_slot import TimeSlot


class LabResponse(BaseModel):
    code: str
    building: str
    building_key: str
    operating_hours: str
    rows: List[str]
    columns: int
    total_seats: int
    seat_grid: List[List[str]]

    @classmethod
    def from_lab(cls, lab: Lab) -> 'LabResponse':
        return cls(
            code=lab.code,
            building=lab.building,
            building_key=lab.building_key,
            operating_hours=lab.operating_hours,
            rows=list(lab.rows),
            columns=lab.columns,
            total_seats=lab.total_seats,
            seat_grid=lab.seat_grid(),
        )


class TimeSlotResponse(BaseModel):
    label: str
    start: str
    end: str

    @classmethod
    def from_slot(cls, slot: TimeSlot) -> 'TimeSlotResponse':
        return cls(label=slot.label, start=f'{slot.start:%H:%M}', end=f'{slot.end:%H:%M}')


class CollegeResponse(BaseModel):
    code: str
    name: str

    @classmethod
    def from_college(cls, college: College) -> 'CollegeResponse':
        return cls(code=college.value, name=college.display_name)


class BuildingResponse(BaseModel):
    key: str
    name: str
    labs: List[str]
