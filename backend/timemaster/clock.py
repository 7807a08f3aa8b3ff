"""Server clock in the configured timezone.

Every "today" and "now" in the service comes from here, so record timestamps
and day boundaries always agree: the first ten characters of a stamped
timestamp are the calendar date in ``settings.TIMEZONE``.
"""
from datetime import date, datetime

import pytz

from timemaster.config import settings


def server_tz():
    return pytz.timezone(settings.TIMEZONE)


def now() -> datetime:
    """Timezone-aware current instant in the server timezone."""
    return datetime.now(pytz.utc).astimezone(server_tz())


def today() -> date:
    return now().date()


def timestamp() -> str:
    """ISO-8601 timestamp with millisecond precision, e.g. 2026-10-19T08:30:00.123+00:00."""
    return now().isoformat(timespec="milliseconds")
