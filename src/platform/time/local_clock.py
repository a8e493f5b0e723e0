"""
Campus-local wall clock.

Reservation dates and slots are entered in campus time, so every comparison
against "now" happens on naive datetimes in the configured TIMEZONE.
"""

from datetime import date, datetime
from functools import lru_cache
import zoneinfo

from src.platform.config.core_setting import settings


@lru_cache(maxsize=1)
def campus_zone() -> zoneinfo.ZoneInfo:
    return zoneinfo.ZoneInfo(settings.TIMEZONE)


def local_now() -> datetime:
    return datetime.now(campus_zone()).replace(tzinfo=None)


def local_today() -> date:
    return local_now().date()
