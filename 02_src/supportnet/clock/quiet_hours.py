"""Quiet-hours gate deciding when the user may be contacted."""

from datetime import datetime, timedelta, timezone

from ..models import QuietWindow


def is_contact_permitted(hour: int, window: QuietWindow) -> bool:
    """Check whether a local hour-of-day falls inside the contact window."""
    if window.start_hour <= window.end_hour:
        # start == end lands here and is never permitted
        return window.start_hour <= hour < window.end_hour
    return hour >= window.start_hour or hour < window.end_hour


def is_blocked(instant: datetime, window: QuietWindow) -> bool:
    """Return True if `instant` is outside the contact window."""
    return not is_contact_permitted(instant.hour, window)


def time_until_permitted(instant: datetime, window: QuietWindow) -> timedelta | None:
    """
    How long contact must be deferred from `instant`.

    Returns:
        timedelta(0) if contact is permitted now, the time until the window
        next opens otherwise, or None for a zero-width window that never opens.
    """
    if not is_blocked(instant, window):
        return timedelta(0)
    if window.start_hour == window.end_hour:
        return None

    opens = instant.replace(hour=window.start_hour, minute=0, second=0, microsecond=0)
    if opens <= instant:
        opens += timedelta(days=1)
    return opens.astimezone(timezone.utc) - instant.astimezone(timezone.utc)


class QuietHoursGate:
    """Contact gate bound to a configured window."""

    def __init__(self, window: QuietWindow):
        self._window = window

    @property
    def window(self) -> QuietWindow:
        return self._window

    def is_blocked(self, instant: datetime) -> bool:
        return is_blocked(instant, self._window)

    def time_until_permitted(self, instant: datetime) -> timedelta | None:
        return time_until_permitted(instant, self._window)
