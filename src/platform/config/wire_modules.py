"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.lab_booking.app.command import (
    cancel_reservation_use_case,
    create_reservation_use_case,
    create_walk_in_use_case,
    delete_account_use_case,
    register_account_use_case,
    remove_no_show_use_case,
    update_password_use_case,
    update_profile_use_case,
)
from src.service.lab_booking.app.query import (
    account_query_use_case,
    list_reservations_use_case,
    rebook_hint_use_case,
    seat_availability_use_case,
)
from src.service.lab_booking.driving_adapter.http_controller import (
    account_controller,
    catalog_controller,
    session_controller,
)
from src.service.lab_booking.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    register_account_use_case,
    update_password_use_case,
    update_profile_use_case,
    delete_account_use_case,
    create_reservation_use_case,
    create_walk_in_use_case,
    cancel_reservation_use_case,
    remove_no_show_use_case,
    account_query_use_case,
    seat_availability_use_case,
    list_reservations_use_case,
    rebook_hint_use_case,
    account_controller,
    session_controller,
    catalog_controller,
    role_auth,
]
