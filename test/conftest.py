"""
Test Configuration and Fixtures

This module provides:
- A throwaway SQLite database per test session, emptied before every integration test
- Fast bcrypt rounds and a disabled completion sweeper
- The FastAPI TestClient fixture

Architecture:
- Unit tests (test/**/unit/): mark with @pytest.mark.unit, use AsyncMock repositories
- Integration tests: use the real SQLite database through the DI container
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read at import time, so DATABASE_URL etc. must be set first
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    db_dir = Path(tempfile.mkdtemp(prefix=f'lab_booking_{worker_id}_'))
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{db_dir / "lab_booking_test.db"}'

    # Cheap hashes and no background sweeper while testing
    os.environ['BCRYPT_ROUNDS'] = '4'
    os.environ['COMPLETION_SWEEP_INTERVAL_SECONDS'] = '0'

    # Create test log directory
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from collections.abc import Generator  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.engine import make_url  # noqa: E402

from src.platform.config.core_setting import settings  # noqa: E402
from src.platform.config.di import container  # noqa: E402
from src.platform.database.orm_db_setting import Base  # noqa: E402
import src.service.lab_booking.driven_adapter.model  # noqa: E402,F401


# =============================================================================
# Pytest Hooks
# =============================================================================
def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers:
            item.fixturenames.insert(0, 'clean_database')


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
def _sync_database_url() -> str:
    # Same file, plain sqlite3 driver so cleanup does not need an event loop
    return str(make_url(settings.DATABASE_URL).set(drivername='sqlite'))


@pytest.fixture(scope='function')
def clean_database() -> Generator[None, None, None]:
    engine = create_engine(_sync_database_url())
    try:
        Base.metadata.drop_all(engine)
        Base.metadata.create_all(engine)
    finally:
        engine.dispose()

    # Fresh engine, locks and repositories for every test
    container.reset_singletons()
    yield
    container.reset_singletons()


# =============================================================================
# HTTP Client
# =============================================================================
@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    from src.main import app

    with TestClient(app) as test_client:
        yield test_client
