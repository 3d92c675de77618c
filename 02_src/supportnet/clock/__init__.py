"""Clock module."""

from .clock import IClock, TimeZoneClock
from .quiet_hours import QuietHoursGate, is_blocked, is_contact_permitted, time_until_permitted
from .sobriety import SobrietyClock, elapsed

__all__ = [
    "IClock",
    "TimeZoneClock",
    "QuietHoursGate",
    "is_blocked",
    "is_contact_permitted",
    "time_until_permitted",
    "SobrietyClock",
    "elapsed",
]
