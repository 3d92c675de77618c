"""Timezone-aware clock for the tracked user."""

from datetime import datetime
from typing import Protocol
from zoneinfo import ZoneInfo

from ..config import load_zone


class IClock(Protocol):
    """Source of timezone-aware instants."""

    def now(self) -> datetime:
        """Current instant in the configured timezone."""
        ...


class TimeZoneClock:
    """Wall clock localized to the user's timezone."""

    def __init__(self, timezone: str | ZoneInfo):
        self._tz = timezone if isinstance(timezone, ZoneInfo) else load_zone(timezone)

    @property
    def timezone(self) -> ZoneInfo:
        return self._tz

    def now(self) -> datetime:
        return datetime.now(self._tz)

    def current_time(self) -> str:
        """User's local time as HH:MM:SS."""
        return self.now().strftime("%H:%M:%S")
