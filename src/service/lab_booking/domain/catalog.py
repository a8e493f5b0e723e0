"""
Lab Catalog (static reference data)

Labs, seat-grid geometry, buildings, time slots and colleges. Everything here
is read-only for the lifetime of the process.
"""

from typing import Dict, List, Optional, Tuple

from src.platform.exception.exceptions import NotFoundError
from src.service.lab_booking.domain.value_object.college import College
from src.service.lab_booking.domain.value_object.lab import Lab
from src.service.lab_booking.domain.value_object.time_slot import ALL_TIME_SLOTS, TimeSlot


BUILDINGS: Dict[str, str] = {
    'gokongwei': 'Gokongwei Hall',
    'andrew': 'Br. Andrew Gonzalez Hall',
    'lasalle': 'St. La Salle Hall',
    'velasco': 'Velasco Hall',
}

DEFAULT_LAB_CODE = 'GK101A'

_STANDARD_HOURS = 'Mon-Sat, 7:30 AM - 9:00 PM'

LABS: Tuple[Lab, ...] = (
    Lab(
        code='GK101A',
        building=BUILDINGS['gokongwei'],
        building_key='gokongwei',
        rows='ABCDEF',
        columns=8,
        operating_hours=_STANDARD_HOURS,
        baseline_occupied={'B3', 'D6'},
        baseline_reserved={'C2', 'F8'},
    ),
    Lab(
        code='GK102B',
        building=BUILDINGS['gokongwei'],
        building_key='gokongwei',
        rows='ABCDE',
        columns=6,
        operating_hours=_STANDARD_HOURS,
        gaps={'E5', 'E6'},  # instructor station
        baseline_occupied={'A4'},
    ),
    Lab(
        code='GK304B',
        building=BUILDINGS['gokongwei'],
        building_key='gokongwei',
        rows='ABCD',
        columns=10,
        operating_hours=_STANDARD_HOURS,
        gaps={'A5', 'B5', 'C5', 'D5'},  # center aisle
        baseline_occupied={'B2'},
        baseline_reserved={'D9'},
    ),
    Lab(
        code='AG1904',
        building=BUILDINGS['andrew'],
        building_key='andrew',
        rows='ABCDE',
        columns=8,
        operating_hours='Mon-Fri, 8:00 AM - 8:00 PM',
        baseline_occupied={'E1'},
    ),
    Lab(
        code='LS212',
        building=BUILDINGS['lasalle'],
        building_key='lasalle',
        rows='ABCD',
        columns=6,
        operating_hours='Mon-Fri, 9:00 AM - 6:00 PM',
        baseline_reserved={'A1'},
    ),
    Lab(
        code='V103',
        building=BUILDINGS['velasco'],
        building_key='velasco',
        rows='ABCDEF',
        columns=7,
        operating_hours=_STANDARD_HOURS,
        gaps={'F6', 'F7'},
        baseline_occupied={'C4'},
        baseline_reserved={'A7'},
    ),
)


class Catalog:
    def __init__(self, labs: Tuple[Lab, ...] = LABS, default_lab_code: str = DEFAULT_LAB_CODE) -> None:
        self._labs: Dict[str, Lab] = {lab.code: lab for lab in labs}
        if default_lab_code not in self._labs:
            raise ValueError(f'Default lab {default_lab_code} is not in the catalog')
        self._default_lab_code = default_lab_code

    @property
    def default_lab(self) -> Lab:
        return self._labs[self._default_lab_code]

    def list_labs(self) -> List[Lab]:
        return list(self._labs.values())

    def find_lab(self, code: Optional[str]) -> Optional[Lab]:
        return self._labs.get((code or '').strip().upper())

    def get_lab_or_default(self, code: Optional[str]) -> Lab:
        """Lookup used by browsing pages: unknown codes show the default lab."""
        return self.find_lab(code) or self.default_lab

    def require_lab(self, code: Optional[str]) -> Lab:
        lab = self.find_lab(code)
        if lab is None:
            raise NotFoundError(f'Lab {code!r} not found')
        return lab

    def buildings(self) -> Dict[str, str]:
        return dict(BUILDINGS)

    def labs_in_building(self, building_key: str) -> List[Lab]:
        return [lab for lab in self._labs.values() if lab.building_key == building_key]

    @staticmethod
    def list_time_slots() -> List[TimeSlot]:
        return list(ALL_TIME_SLOTS)

    @staticmethod
    def list_colleges() -> List[College]:
        return list(College)

    @staticmethod
    def is_valid_college(code: Optional[str]) -> bool:
        return (code or '') in College.__members__
