"""Elapsed recovery time relative to the sobriety anchor."""

from datetime import datetime, timedelta, timezone

from ..models import SobrietyAnchor, SobrietyDuration

SECONDS_IN_HOUR = 3600
SECONDS_IN_DAY = 86400


def elapsed(anchor: SobrietyAnchor, reference: datetime) -> SobrietyDuration:
    """
    Compute elapsed recovery time from the anchor to `reference`.

    The difference is taken on absolute instants, so DST shifts in the
    anchor's timezone do not add or remove hours. Days are floored: an
    anchor in the future yields negative days with non-negative residual
    hours, e.g. 36 hours before the anchor is (-2, 12).
    """
    epoch = anchor.epoch.astimezone(anchor.timezone)
    localized = reference.astimezone(anchor.timezone)
    delta = localized.astimezone(timezone.utc) - epoch.astimezone(timezone.utc)

    total = delta // timedelta(seconds=1)
    days, remainder = divmod(total, SECONDS_IN_DAY)
    return SobrietyDuration(days=days, hours=remainder // SECONDS_IN_HOUR)


class SobrietyClock:
    """Sobriety anchor paired with a clock for "elapsed until now" queries."""

    def __init__(self, anchor: SobrietyAnchor, clock):
        self._anchor = anchor
        self._clock = clock

    @property
    def anchor(self) -> SobrietyAnchor:
        return self._anchor

    def elapsed(self, reference: datetime | None = None) -> SobrietyDuration:
        """Elapsed time until `reference`, defaulting to now."""
        return elapsed(self._anchor, reference or self._clock.now())

    def elapsed_days(self, reference: datetime | None = None) -> int:
        return self.elapsed(reference).days
