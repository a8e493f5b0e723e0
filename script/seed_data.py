#!/usr/bin/env python3
"""
Database Seed Script
Populate demo accounts into the database

Features:
1. Create Accounts - one technician and two students
2. Create Reservation - one upcoming booking for the first student tomorrow

Notes:
- Run `python script/reset_database.py` first for a clean slate
- Existing accounts are skipped, so the script can be re-run
"""

import asyncio
from dataclasses import dataclass
from datetime import timedelta

from src.platform.config.di import container
from src.platform.exception.exceptions import ConflictError
from src.platform.time.local_clock import local_today
from src.service.lab_booking.app.command.create_reservation_use_case import (
    CreateReservationUseCase,
)
from src.service.lab_booking.app.command.register_account_use_case import (
    RegisterAccountUseCase,
)
from src.service.lab_booking.domain.entity.account_entity import AccountType

DEFAULT_PASSWORD = 'password1'


@dataclass
class AccountConfig:
    """Account seed configuration"""
    student_id: str
    email: str
    first_name: str
    last_name: str
    college: str
    account_type: AccountType


# Demo accounts to create
DEMO_ACCOUNTS = [
    AccountConfig(
        student_id='10000001',
        email='tech@dlsu.edu.ph',
        first_name='Lab',
        last_name='Technician',
        college='CCS',
        account_type=AccountType.TECHNICIAN,
    ),
    AccountConfig(
        student_id='12345678',
        email='juan_delacruz@dlsu.edu.ph',
        first_name='Juan',
        last_name='Dela Cruz',
        college='CCS',
        account_type=AccountType.STUDENT,
    ),
    AccountConfig(
        student_id='12345679',
        email='maria_santos@dlsu.edu.ph',
        first_name='Maria',
        last_name='Santos',
        college='COS',
        account_type=AccountType.STUDENT,
    ),
]


async def create_accounts() -> None:
    print(f'👥 Creating {len(DEMO_ACCOUNTS)} accounts...')

    use_case = RegisterAccountUseCase(
        account_command_repo=container.account_command_repo(),
        password_hasher=container.password_hasher(),
    )

    for config in DEMO_ACCOUNTS:
        try:
            account = await use_case.execute(
                first_name=config.first_name,
                last_name=config.last_name,
                student_id=config.student_id,
                email=config.email,
                college=config.college,
                account_type=config.account_type.value,
                password=DEFAULT_PASSWORD,
            )
        except ConflictError as e:
            print(f'   ⏭️  Skipped {config.email}: {e}')
            continue
        print(f'   ✅ Created {account.account_type}: ID={account.student_id}, Email={account.email}')

    print(f'   📧 Credentials: {DEFAULT_PASSWORD}')


async def create_reservation() -> None:
    print('🪑 Creating demo reservation...')

    use_case = CreateReservationUseCase(
        catalog=container.catalog(),
        account_query_repo=container.account_query_repo(),
        reservation_command_repo=container.reservation_command_repo(),
        reservation_query_repo=container.reservation_query_repo(),
        seat_lock=container.seat_lock(),
        clock=container.clock(),
    )
    tomorrow = (local_today() + timedelta(days=1)).isoformat()

    try:
        reservation = await use_case.execute(
            user_email=DEMO_ACCOUNTS[1].email,
            lab='GK101A',
            seat='A1',
            date=tomorrow,
            time_slot='09:00',
        )
    except ConflictError as e:
        print(f'   ⏭️  Skipped: {e}')
        return
    print(
        f'   ✅ Created reservation: ID={reservation.id}, '
        f'{reservation.lab} {reservation.seat} {reservation.date} {reservation.time_slot}'
    )


async def main():
    print('🌱 Starting data seeding...')
    print('=' * 50)

    database = container.database()
    try:
        await database.create_tables()
        await create_accounts()
        print()
        await create_reservation()

        print()
        print('=' * 50)
        print('🌱 Data seeding completed!')
        print('📋 Demo accounts:')
        for config in DEMO_ACCOUNTS:
            print(f'   {config.account_type.value}: {config.email} / {DEFAULT_PASSWORD}')

    except Exception as e:
        print(f'❌ Seeding failed: {e}')
        exit(1)

    finally:
        await database.dispose()


if __name__ == '__main__':
    asyncio.run(main())
