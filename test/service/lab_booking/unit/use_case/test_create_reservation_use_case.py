from datetime import date

import pytest

from src.platform.exception.exceptions import (
    NotAuthenticatedError,
    NotFoundError,
    SeatUnavailableError,
    ValidationError,
)
from src.platform.state.keyed_lock import KeyedLock
from src.service.lab_booking.app.command.create_reservation_use_case import (
    CreateReservationUseCase,
)
from src.service.lab_booking.domain.entity.reservation_entity import ReservationStatus


pytestmark = pytest.mark.unit


@pytest.fixture
def use_case(
    catalog, account_query_repo, reservation_command_repo, reservation_query_repo, clock
) -> CreateReservationUseCase:
    return CreateReservationUseCase(
        catalog=catalog,
        account_query_repo=account_query_repo,
        reservation_command_repo=reservation_command_repo,
        reservation_query_repo=reservation_query_repo,
        seat_lock=KeyedLock(),
        clock=clock,
    )


class TestCreateReservation:
    async def test_book_a_free_seat(self, use_case, account_query_repo, student):
        """
        Given: a registered student and a free seat
        When: the student books GK101A A1 on 2025-03-01 09:00
        Then: an upcoming reservation carrying the student's identity is written
        """
        account_query_repo.get_by_email.return_value = student

        reservation = await use_case.execute(
            user_email=student.email,
            lab='gk101a',
            seat='a1',
            date='2025-03-01',
            time_slot='09:00',
        )

        assert reservation.status == ReservationStatus.UPCOMING
        assert reservation.lab == 'GK101A'
        assert reservation.seat == 'A1'
        assert reservation.building == 'Gokongwei Hall'
        assert reservation.date == date(2025, 3, 1)
        assert reservation.time_slot == '09:00 - 09:30'
        assert reservation.user_email == student.email
        assert reservation.user_id == student.student_id
        assert reservation.owner_name == 'Ana Reyes'
        assert reservation.booked_on == date(2025, 3, 1)
        assert reservation.is_walk_in is False

    async def test_past_dates_are_accepted_for_self_service(
        self, use_case, account_query_repo, student
    ):
        account_query_repo.get_by_email.return_value = student

        reservation = await use_case.execute(
            user_email=student.email,
            lab='GK101A',
            seat='A1',
            date='2024-01-15',
            time_slot='09:00',
        )

        assert reservation.date == date(2024, 1, 15)

    async def test_unknown_account_is_not_authenticated(self, use_case, reservation_command_repo):
        with pytest.raises(NotAuthenticatedError):
            await use_case.execute(
                user_email='ghost@dlsu.edu.ph',
                lab='GK101A',
                seat='A1',
                date='2025-03-01',
                time_slot='09:00',
            )
        reservation_command_repo.create.assert_not_called()

    async def test_unknown_lab(self, use_case, account_query_repo, student):
        account_query_repo.get_by_email.return_value = student

        with pytest.raises(NotFoundError):
            await use_case.execute(
                user_email=student.email,
                lab='XX999',
                seat='A1',
                date='2025-03-01',
                time_slot='09:00',
            )

    @pytest.mark.parametrize(
        'seat,booking_date,time_slot',
        [
            ('Z1', '2025-03-01', '09:00'),
            ('A9', '2025-03-01', '09:00'),
            ('seat', '2025-03-01', '09:00'),
            ('A1', '2025-13-01', '09:00'),
            ('A1', '2025-03-01', '06:00'),
        ],
    )
    async def test_invalid_seat_date_or_slot(
        self,
        use_case,
        account_query_repo,
        reservation_command_repo,
        student,
        seat,
        booking_date,
        time_slot,
    ):
        account_query_repo.get_by_email.return_value = student

        with pytest.raises(ValidationError):
            await use_case.execute(
                user_email=student.email,
                lab='GK101A',
                seat=seat,
                date=booking_date,
                time_slot=time_slot,
            )
        reservation_command_repo.create.assert_not_called()

    @pytest.mark.parametrize('seat', ['B3', 'C2'])
    async def test_baseline_busy_seat_is_unavailable(
        self, use_case, account_query_repo, student, seat
    ):
        account_query_repo.get_by_email.return_value = student

        with pytest.raises(SeatUnavailableError):
            await use_case.execute(
                user_email=student.email,
                lab='GK101A',
                seat=seat,
                date='2025-03-01',
                time_slot='09:00',
            )

    async def test_seat_already_booked(
        self,
        use_case,
        account_query_repo,
        reservation_query_repo,
        reservation_command_repo,
        student,
        make_reservation,
    ):
        """
        Given: A1 already has an upcoming reservation for the slot
        When: another student tries to book it
        Then: SeatUnavailableError and nothing is written
        """
        account_query_repo.get_by_email.return_value = student
        reservation_query_repo.list_active_for_slot.return_value = [
            make_reservation(user_email='b@dlsu.edu.ph')
        ]

        with pytest.raises(SeatUnavailableError):
            await use_case.execute(
                user_email=student.email,
                lab='GK101A',
                seat='A1',
                date='2025-03-01',
                time_slot='09:00 - 09:30',
            )
        reservation_command_repo.create.assert_not_called()
        reservation_query_repo.list_active_for_slot.assert_awaited_once_with(
            lab='GK101A', on=date(2025, 3, 1), time_slot='09:00 - 09:30'
        )
