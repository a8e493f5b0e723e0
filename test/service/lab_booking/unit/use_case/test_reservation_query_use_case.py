from datetime import date, datetime

import pytest

from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.service.lab_booking.app.command.complete_past_reservations_use_case import (
    CompletePastReservationsUseCase,
)
from src.service.lab_booking.app.query.list_reservations_use_case import (
    ListReservationsUseCase,
)
from src.service.lab_booking.app.query.rebook_hint_use_case import RebookHintUseCase
from src.service.lab_booking.app.query.seat_availability_use_case import (
    SeatAvailabilityUseCase,
)
from src.service.lab_booking.domain.entity.reservation_entity import ReservationStatus
from src.service.lab_booking.domain.enum.seat_state import SeatState


pytestmark = pytest.mark.unit


class TestSeatAvailability:
    @pytest.fixture
    def use_case(self, catalog, reservation_query_repo):
        return SeatAvailabilityUseCase(catalog=catalog, reservation_query_repo=reservation_query_repo)

    async def test_partition_with_one_booking(
        self, use_case, reservation_query_repo, make_reservation
    ):
        """
        Given: GK101A (48 seats, B3/D6 occupied and C2/F8 reserved at baseline)
        When: A1 is booked for the slot
        Then: 43 available, 2 occupied, 3 reserved
        """
        reservation_query_repo.list_active_for_slot.return_value = [make_reservation()]

        availability = await use_case.availability(
            lab='GK101A', date='2025-03-01', time_slot='09:00'
        )

        assert availability.seats['A1'] == SeatState.RESERVED
        assert availability.seats['B3'] == SeatState.OCCUPIED
        assert availability.counts == {
            SeatState.AVAILABLE: 43,
            SeatState.OCCUPIED: 2,
            SeatState.RESERVED: 3,
        }
        assert availability.date == date(2025, 3, 1)
        assert availability.time_slot.label == '09:00 - 09:30'

    async def test_unknown_lab(self, use_case):
        with pytest.raises(NotFoundError):
            await use_case.availability(lab='nope', date='2025-03-01', time_slot='09:00')

    async def test_anonymous_occupant_is_masked_for_others(
        self, use_case, reservation_query_repo, make_reservation, student
    ):
        reservation_query_repo.list_active_for_slot.return_value = [
            make_reservation(anonymous=True)
        ]

        for_others = await use_case.occupants(
            lab='GK101A', date='2025-03-01', time_slot='09:00', viewer_email='tech@dlsu.edu.ph'
        )
        for_owner = await use_case.occupants(
            lab='GK101A', date='2025-03-01', time_slot='09:00', viewer_email=student.email
        )

        assert for_others[0].display_name == 'Anonymous'
        assert for_owner[0].display_name == 'Ana Reyes'


class TestListReservations:
    @pytest.fixture
    def use_case(self, account_query_repo, reservation_query_repo, clock):
        return ListReservationsUseCase(
            account_query_repo=account_query_repo,
            reservation_query_repo=reservation_query_repo,
            clock=clock,
        )

    async def test_summary_counts_and_next_upcoming(
        self, use_case, reservation_query_repo, make_reservation, student
    ):
        """
        Given: now is 2025-03-01 09:05
        When: the student has a running slot, a later slot, a past and a cancelled booking
        Then: the running slot (ends 09:30) is the next upcoming one
        """
        running = make_reservation(id='r1')
        later = make_reservation(id='r2', time_slot='14:00 - 14:30')
        past = make_reservation(id='r3', date=date(2025, 2, 20), status=ReservationStatus.COMPLETED)
        cancelled = make_reservation(id='r4', status=ReservationStatus.CANCELLED)
        reservation_query_repo.list_by_user_email.return_value = [later, running, past, cancelled]

        summary = await use_case.summary(email=student.email)

        assert summary.total == 4
        assert summary.counts == {
            ReservationStatus.UPCOMING: 2,
            ReservationStatus.COMPLETED: 1,
            ReservationStatus.CANCELLED: 1,
        }
        assert summary.next_upcoming.id == 'r1'

    async def test_summary_without_active_bookings(self, use_case, student):
        summary = await use_case.summary(email=student.email)

        assert summary.total == 0
        assert summary.next_upcoming is None

    async def test_list_all_is_for_technicians(
        self, use_case, account_query_repo, reservation_query_repo, make_reservation, technician
    ):
        account_query_repo.get_by_email.return_value = technician
        reservation_query_repo.list_all.return_value = [make_reservation(anonymous=True)]

        reservations = await use_case.list_all(viewer_email=technician.email)

        assert reservations[0].user_email is None
        assert reservations[0].owner_name is None
        assert reservations[0].seat == 'A1'

    async def test_list_all_forbidden_for_students(self, use_case, account_query_repo, student):
        account_query_repo.get_by_email.return_value = student

        with pytest.raises(ForbiddenError):
            await use_case.list_all(viewer_email=student.email)


class TestRebookHint:
    @pytest.fixture
    def use_case(self, account_query_repo, reservation_query_repo):
        return RebookHintUseCase(
            account_query_repo=account_query_repo, reservation_query_repo=reservation_query_repo
        )

    async def test_owner_gets_lab_and_seat(
        self, use_case, reservation_query_repo, make_reservation, student
    ):
        reservation_query_repo.get_by_id.return_value = make_reservation(
            status=ReservationStatus.CANCELLED
        )

        hint = await use_case.execute(reservation_id='r1', viewer_email=student.email)

        assert (hint.lab, hint.seat, hint.building) == ('GK101A', 'A1', 'Gokongwei Hall')

    async def test_stranger_is_forbidden(
        self, use_case, reservation_query_repo, make_reservation
    ):
        reservation_query_repo.get_by_id.return_value = make_reservation()

        with pytest.raises(ForbiddenError):
            await use_case.execute(reservation_id='r1', viewer_email='b@dlsu.edu.ph')


class TestCompletePastReservations:
    async def test_uses_clock_when_no_time_given(self, reservation_command_repo, clock):
        reservation_command_repo.complete_ended.return_value = []
        use_case = CompletePastReservationsUseCase(
            reservation_command_repo=reservation_command_repo, clock=clock
        )

        assert await use_case.execute() == []
        reservation_command_repo.complete_ended.assert_awaited_once_with(now=clock())

    async def test_explicit_time_wins(self, reservation_command_repo, clock, make_reservation):
        done = make_reservation(status=ReservationStatus.COMPLETED)
        reservation_command_repo.complete_ended.return_value = [done]
        use_case = CompletePastReservationsUseCase(
            reservation_command_repo=reservation_command_repo, clock=clock
        )

        now = datetime(2025, 3, 2, 0, 0)
        assert await use_case.execute(now=now) == [done]
        reservation_command_repo.complete_ended.assert_awaited_once_with(now=now)
