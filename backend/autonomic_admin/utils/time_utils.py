"""Wall-clock helpers.

All timestamps are naive UTC datetimes, matching what the DateTime columns
store on SQLite and Postgres.
"""
from datetime import datetime, timedelta, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Current time as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def has_elapsed(since: datetime, seconds: float, now: datetime) -> bool:
    """True if ``since + seconds`` is strictly before ``now``."""
    return since + timedelta(seconds=seconds) < now
