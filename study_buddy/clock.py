from datetime import date, datetime, timezone, tzinfo
from functools import lru_cache
from typing import Protocol
from zoneinfo import ZoneInfo

from study_buddy.config import get_settings


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock in the given zone (UTC by default).

    The zone decides where one study day ends and the next begins.
    """

    def __init__(self, tz: tzinfo = timezone.utc):
        self.tz = tz

    def now(self) -> datetime:
        return datetime.now(self.tz)


@lru_cache(maxsize=1)
def make_clock() -> SystemClock:
    return SystemClock(ZoneInfo(get_settings().timezone))


def today(clock: Clock) -> date:
    """Calendar day of the clock's own zone."""
    return clock.now().date()
