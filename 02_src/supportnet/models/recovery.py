"""Recovery-tracking data models."""

from dataclasses import dataclass
from datetime import datetime
from typing import NamedTuple
from zoneinfo import ZoneInfo


@dataclass(frozen=True)
class QuietWindow:
    """
    Hours of the local day during which check-ins may be sent.

    Inclusive start, exclusive end. When start_hour > end_hour the window
    wraps past midnight. Hours outside the window are quiet.
    """

    start_hour: int
    end_hour: int

    def __post_init__(self):
        for hour in (self.start_hour, self.end_hour):
            if not 0 <= hour <= 23:
                raise ValueError(f"Hour must be between 0 and 23, got {hour}")

    @property
    def wraps(self) -> bool:
        return self.start_hour > self.end_hour


@dataclass(frozen=True)
class SobrietyAnchor:
    """Fixed instant from which recovery is measured."""

    epoch: datetime
    timezone: ZoneInfo

    def __post_init__(self):
        if self.epoch.tzinfo is None:
            raise ValueError("Sobriety epoch must be timezone-aware")


class SobrietyDuration(NamedTuple):
    """Elapsed recovery time as whole days plus residual hours."""

    days: int
    hours: int

    def describe(self) -> str:
        """Human-readable form, e.g. '1 day and 5 hours'."""
        return (
            f"{self.days} day{'' if self.days == 1 else 's'} and "
            f"{self.hours} hour{'' if self.hours == 1 else 's'}"
        )
