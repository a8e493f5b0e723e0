from datetime import datetime, timedelta

from dependency_injector import providers
from fastapi.testclient import TestClient
import pytest

from src.platform.config.di import container
from src.platform.constant.route_constant import (
    ACCOUNT_LOGIN,
    ACCOUNT_ME,
    ACCOUNT_PASSWORD,
    ACCOUNT_PREFIX,
    CATALOG_BUILDINGS,
    CATALOG_COLLEGES,
    CATALOG_LAB,
    CATALOG_LABS,
    CATALOG_TIME_SLOTS,
    RESERVATION_AVAILABILITY,
    RESERVATION_CANCEL,
    RESERVATION_NO_SHOW,
    RESERVATION_OCCUPANTS,
    RESERVATION_PREFIX,
    RESERVATION_REBOOK,
    RESERVATION_SUMMARY,
    RESERVATION_WALK_IN,
    SESSION_LOGOUT,
    SESSION_PAGE_ACCESS,
    SESSION_PREFIX,
)
from src.platform.time.local_clock import local_today


STUDENT = {
    'first_name': 'Ana',
    'last_name': 'Reyes',
    'student_id': '12345678',
    'email': 'a@dlsu.edu.ph',
    'college': 'CCS',
    'account_type': 'student',
    'password': 'password1',
}
OTHER_STUDENT = {
    **STUDENT,
    'first_name': 'Ben',
    'last_name': 'Santos',
    'student_id': '22222222',
    'email': 'b@dlsu.edu.ph',
}
TECHNICIAN = {
    **STUDENT,
    'first_name': 'Tomas',
    'last_name': 'Cruz',
    'student_id': '87654321',
    'email': 'tech@dlsu.edu.ph',
    'account_type': 'technician',
}

A1_BOOKING = {'lab': 'GK101A', 'seat': 'A1', 'date': '2025-03-01', 'time_slot': '09:00'}


def register(client: TestClient, account: dict) -> None:
    response = client.post(ACCOUNT_PREFIX, json=account)
    assert response.status_code == 201, response.text


def login(client: TestClient, account: dict) -> None:
    response = client.post(
        ACCOUNT_LOGIN, json={'email': account['email'], 'password': account['password']}
    )
    assert response.status_code == 200, response.text


@pytest.mark.integration
class TestAccountApi:
    def test_register_logs_the_new_user_in(self, client: TestClient):
        register(client, STUDENT)

        response = client.get(SESSION_PREFIX)

        assert response.status_code == 200
        body = response.json()
        assert body['email'] == 'a@dlsu.edu.ph'
        assert body['account_type'] == 'student'
        assert 'password' not in body
        assert 'hashed_password' not in body

    def test_register_duplicates(self, client: TestClient):
        register(client, STUDENT)

        same_email = client.post(ACCOUNT_PREFIX, json={**STUDENT, 'student_id': '99999999'})
        same_id = client.post(ACCOUNT_PREFIX, json={**STUDENT, 'email': 'c@dlsu.edu.ph'})

        assert same_email.status_code == 409
        assert same_email.json()['code'] == 'duplicate_email'
        assert same_id.status_code == 409
        assert same_id.json()['code'] == 'duplicate_student_id'

    def test_register_with_bad_student_id(self, client: TestClient):
        response = client.post(ACCOUNT_PREFIX, json={**STUDENT, 'student_id': '1234'})

        assert response.status_code == 400
        assert response.json()['code'] == 'invalid_student_id'

    def test_login_failures_do_not_say_which_part_was_wrong(self, client: TestClient):
        register(client, STUDENT)
        client.post(SESSION_LOGOUT)

        wrong_password = client.post(
            ACCOUNT_LOGIN, json={'email': STUDENT['email'], 'password': 'password2'}
        )
        unknown_email = client.post(
            ACCOUNT_LOGIN, json={'email': 'ghost@dlsu.edu.ph', 'password': 'password1'}
        )

        assert wrong_password.status_code == 401
        assert unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json()

    def test_profile_update_and_immutable_fields(self, client: TestClient):
        register(client, STUDENT)

        updated = client.patch(ACCOUNT_ME, json={'bio': 'Night owl', 'college': 'COS'})
        rejected = client.patch(ACCOUNT_ME, json={'student_id': '99999999'})

        assert updated.status_code == 200
        assert updated.json()['bio'] == 'Night owl'
        assert updated.json()['college'] == 'COS'
        assert updated.json()['first_name'] == 'Ana'
        assert rejected.status_code == 400
        assert client.get(ACCOUNT_ME).json()['student_id'] == '12345678'

    def test_password_change(self, client: TestClient):
        register(client, STUDENT)

        response = client.put(ACCOUNT_PASSWORD, json={'new_password': 'new-password'})
        client.post(SESSION_LOGOUT)

        assert response.status_code == 204
        assert (
            client.post(
                ACCOUNT_LOGIN, json={'email': STUDENT['email'], 'password': 'password1'}
            ).status_code
            == 401
        )
        login(client, {**STUDENT, 'password': 'new-password'})

    def test_delete_account_removes_reservations_and_session(self, client: TestClient):
        register(client, STUDENT)
        client.post(RESERVATION_PREFIX, json=A1_BOOKING)

        response = client.delete(ACCOUNT_ME)

        assert response.status_code == 200
        assert response.json() == {'email': 'a@dlsu.edu.ph', 'reservations_removed': 1}
        assert client.get(SESSION_PREFIX).status_code == 401
        availability = client.get(
            RESERVATION_AVAILABILITY,
            params={'lab': 'GK101A', 'date': '2025-03-01', 'time_slot': '09:00'},
        )
        assert availability.json()['seats']['A1'] == 'available'


@pytest.mark.integration
class TestSessionApi:
    def test_logout_clears_the_session(self, client: TestClient):
        register(client, STUDENT)

        assert client.post(SESSION_LOGOUT).status_code == 200
        response = client.get(SESSION_PREFIX)

        assert response.status_code == 401
        assert response.json()['code'] == 'not_authenticated'

    def test_page_access(self, client: TestClient):
        guest_reserve = client.get(SESSION_PAGE_ACCESS.format(page='reserve')).json()
        assert guest_reserve == {'page': 'reserve', 'allowed': False, 'redirect_to': 'login'}

        register(client, STUDENT)
        assert client.get(SESSION_PAGE_ACCESS.format(page='reserve')).json()['allowed'] is True
        assert client.get(SESSION_PAGE_ACCESS.format(page='login')).json() == {
            'page': 'login',
            'allowed': False,
            'redirect_to': 'home',
        }
        assert client.get(SESSION_PAGE_ACCESS.format(page='walk_in')).json()['allowed'] is False

@pytest.mark.integration
class TestCatalogApi:
    def test_labs_and_default_fallback(self, client: TestClient):
        labs = client.get(CATALOG_LABS).json()
        fallback = client.get(CATALOG_LAB.format(code='nope')).json()
        gk102b = client.get(CATALOG_LAB.format(code='gk102b')).json()

        assert 'GK101A' in [lab['code'] for lab in labs]
        assert fallback['code'] == 'GK101A'
        assert gk102b['code'] == 'GK102B'
        assert 'E5' not in gk102b['seat_grid'][-1]

    def test_reference_lists(self, client: TestClient):
        slots = client.get(CATALOG_TIME_SLOTS).json()
        colleges = client.get(CATALOG_COLLEGES).json()
        buildings = client.get(CATALOG_BUILDINGS).json()

        assert slots[0]['label'] == '07:30 - 08:00'
        assert slots[-1]['label'] == '20:30 - 21:00'
        assert 'CCS' in [college['code'] for college in colleges]
        assert {'key', 'name', 'labs'} <= set(buildings[0])


@pytest.mark.integration
class TestReservationApi:
    def test_booking_scenario(self, client: TestClient):
        """
        Given: student 12345678 is logged in
        When: they book an off-grid seat, then A1, then a second student tries A1,
              then the first student cancels and the second retries
        Then: 400, 201, 409, cancelled, 201
        """
        register(client, STUDENT)

        off_grid = client.post(RESERVATION_PREFIX, json={**A1_BOOKING, 'seat': 'Z1'})
        assert off_grid.status_code == 400
        assert off_grid.json()['code'] == 'validation_error'

        booked = client.post(RESERVATION_PREFIX, json=A1_BOOKING)
        assert booked.status_code == 201
        reservation = booked.json()
        assert reservation['status'] == 'upcoming'
        assert reservation['time_slot'] == '09:00 - 09:30'
        assert reservation['owner_name'] == 'Ana Reyes'

        register(client, OTHER_STUDENT)
        taken = client.post(RESERVATION_PREFIX, json=A1_BOOKING)
        assert taken.status_code == 409
        assert taken.json()['code'] == 'seat_unavailable'

        forbidden = client.patch(RESERVATION_CANCEL.format(reservation_id=reservation['id']))
        assert forbidden.status_code == 403

        login(client, STUDENT)
        cancelled = client.patch(RESERVATION_CANCEL.format(reservation_id=reservation['id']))
        assert cancelled.status_code == 200
        assert cancelled.json()['status'] == 'cancelled'
        again = client.patch(RESERVATION_CANCEL.format(reservation_id=reservation['id']))
        assert again.status_code == 409
        assert again.json()['code'] == 'invalid_state'

        hint = client.get(RESERVATION_REBOOK.format(reservation_id=reservation['id']))
        assert hint.json() == {'lab': 'GK101A', 'seat': 'A1', 'building': 'Gokongwei Hall'}

        login(client, OTHER_STUDENT)
        assert client.post(RESERVATION_PREFIX, json=A1_BOOKING).status_code == 201

    def test_booking_requires_a_session(self, client: TestClient):
        response = client.post(RESERVATION_PREFIX, json=A1_BOOKING)

        assert response.status_code == 401

    def test_availability_counts(self, client: TestClient):
        register(client, STUDENT)
        client.post(RESERVATION_PREFIX, json=A1_BOOKING)

        response = client.get(
            RESERVATION_AVAILABILITY,
            params={'lab': 'GK101A', 'date': '2025-03-01', 'time_slot': '09:00 - 09:30'},
        )

        body = response.json()
        assert response.status_code == 200
        assert (body['available'], body['occupied'], body['reserved']) == (43, 2, 3)
        assert body['seats']['A1'] == 'reserved'
        assert body['seats']['B3'] == 'occupied'

    def test_anonymous_booking_is_masked(self, client: TestClient):
        register(client, STUDENT)
        client.post(RESERVATION_PREFIX, json={**A1_BOOKING, 'anonymous': True})
        params = {'lab': 'GK101A', 'date': '2025-03-01', 'time_slot': '09:00'}

        own_view = client.get(RESERVATION_OCCUPANTS, params=params).json()
        register(client, TECHNICIAN)
        technician_view = client.get(RESERVATION_OCCUPANTS, params=params).json()
        everything = client.get(RESERVATION_PREFIX, params={'scope': 'all'}).json()

        assert own_view[0]['display_name'] == 'Ana Reyes'
        assert technician_view[0]['display_name'] == 'Anonymous'
        assert everything['reservations'][0]['user_email'] is None

    def test_list_and_summary(self, client: TestClient):
        register(client, STUDENT)
        client.post(RESERVATION_PREFIX, json=A1_BOOKING)
        client.post(RESERVATION_PREFIX, json={**A1_BOOKING, 'seat': 'A2'})

        mine = client.get(RESERVATION_PREFIX).json()
        summary = client.get(RESERVATION_SUMMARY).json()
        all_scope = client.get(RESERVATION_PREFIX, params={'scope': 'all'})

        assert mine['scope'] == 'self'
        assert [r['seat'] for r in mine['reservations']] == ['A2', 'A1']
        assert summary['total'] == 2
        assert summary['upcoming'] == 2
        assert all_scope.status_code == 403

    def test_walk_in(self, client: TestClient):
        tomorrow = (local_today() + timedelta(days=1)).isoformat()
        walk_in = {
            'student_id': '11223344',
            'lab': 'GK101A',
            'seat': 'C7',
            'date': tomorrow,
            'time_slot': '13:00',
        }
        register(client, STUDENT)
        assert client.post(RESERVATION_WALK_IN, json=walk_in).status_code == 403

        register(client, TECHNICIAN)
        created = client.post(RESERVATION_WALK_IN, json=walk_in)
        bad_id = client.post(RESERVATION_WALK_IN, json={**walk_in, 'student_id': '1122'})
        bad_seat = client.post(RESERVATION_WALK_IN, json={**walk_in, 'seat': '7C'})
        yesterday = (local_today() - timedelta(days=1)).isoformat()
        past = client.post(RESERVATION_WALK_IN, json={**walk_in, 'date': yesterday})

        assert created.status_code == 201
        assert created.json()['is_walk_in'] is True
        assert created.json()['user_email'] == '11223344@walk-in.local'
        assert created.json()['created_by'] == 'tech@dlsu.edu.ph'
        assert bad_id.json()['code'] == 'invalid_student_id'
        assert bad_seat.json()['code'] == 'invalid_seat_format'
        assert past.json()['code'] == 'past_date'

    def test_no_show_window(self, client: TestClient):
        register(client, STUDENT)
        reservation = client.post(RESERVATION_PREFIX, json=A1_BOOKING).json()
        register(client, TECHNICIAN)
        path = RESERVATION_NO_SHOW.format(reservation_id=reservation['id'])

        with container.clock.override(providers.Object(lambda: datetime(2025, 3, 1, 8, 55))):
            too_early = client.patch(path)
        with container.clock.override(providers.Object(lambda: datetime(2025, 3, 1, 9, 5))):
            removed = client.patch(path)

        assert too_early.status_code == 409
        assert too_early.json()['code'] == 'not_yet_eligible'
        assert removed.status_code == 200
        assert removed.json()['status'] == 'cancelled'
