import pytest

from src.platform.exception.exceptions import NotFoundError
from src.service.lab_booking.domain.catalog import DEFAULT_LAB_CODE, Catalog
from src.service.lab_booking.domain.value_object.lab import Lab
from src.service.lab_booking.domain.value_object.seat_label import SeatLabel


pytestmark = pytest.mark.unit


class TestCatalog:
    def test_find_lab_is_case_insensitive(self, catalog: Catalog):
        lab = catalog.find_lab('gk304b')

        assert lab is not None
        assert lab.code == 'GK304B'

    def test_unknown_lab_falls_back_to_default_for_browsing(self, catalog: Catalog):
        assert catalog.find_lab('NOPE') is None
        assert catalog.get_lab_or_default('NOPE').code == DEFAULT_LAB_CODE
        assert catalog.get_lab_or_default(None).code == DEFAULT_LAB_CODE

    def test_require_lab_raises_for_unknown_code(self, catalog: Catalog):
        with pytest.raises(NotFoundError):
            catalog.require_lab('NOPE')

    def test_labs_grouped_by_building(self, catalog: Catalog):
        codes = [lab.code for lab in catalog.labs_in_building('gokongwei')]

        assert codes == ['GK101A', 'GK102B', 'GK304B']
        assert set(catalog.buildings()) == {'gokongwei', 'andrew', 'lasalle', 'velasco'}

    def test_colleges_and_slots(self, catalog: Catalog):
        assert [c.value for c in catalog.list_colleges()] == [
            'CCS',
            'GCOE',
            'COS',
            'CLA',
            'RVRCOB',
            'BAGCED',
            'SOE',
        ]
        assert catalog.is_valid_college('CCS')
        assert not catalog.is_valid_college('XYZ')
        assert len(catalog.list_time_slots()) == 27


class TestLabGrid:
    def test_gaps_are_left_out_of_the_grid(self, catalog: Catalog):
        lab = catalog.require_lab('GK304B')

        grid = lab.seat_grid()
        assert len(grid) == 4
        assert grid[0] == ['A1', 'A2', 'A3', 'A4', 'A6', 'A7', 'A8', 'A9', 'A10']
        assert lab.total_seats == 36
        assert len(lab.all_seats()) == lab.total_seats

    @pytest.mark.parametrize(
        'seat,on_grid',
        [('A1', True), ('F8', True), ('G1', False), ('A9', False), ('A0', False)],
    )
    def test_has_seat(self, catalog: Catalog, seat, on_grid):
        lab = catalog.require_lab('GK101A')

        assert lab.has_seat(SeatLabel.parse(seat)) is on_grid

    def test_gap_is_not_a_seat(self, catalog: Catalog):
        lab = catalog.require_lab('GK102B')

        assert not lab.has_seat(SeatLabel.parse('E5'))
        assert lab.has_seat(SeatLabel.parse('E4'))

    def test_baseline_seats_must_be_on_grid(self):
        with pytest.raises(ValueError):
            Lab(
                code='X1',
                building='Nowhere',
                building_key='nowhere',
                rows='AB',
                columns=2,
                operating_hours='',
                baseline_occupied={'C1'},
            )
