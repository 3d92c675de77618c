"""Parser and formatter for the 'Xw Xd Xh Xm' interval grammar."""

import re

from ..errors import InvalidIntervalFormat

SECONDS_IN_MINUTE = 60
SECONDS_IN_HOUR = 3600
SECONDS_IN_DAY = 86400
SECONDS_IN_WEEK = 604800

UNIT_SECONDS = {
    "w": SECONDS_IN_WEEK,
    "d": SECONDS_IN_DAY,
    "h": SECONDS_IN_HOUR,
    "m": SECONDS_IN_MINUTE,
}
UNIT_ORDER = "wdhm"

_TOKEN = re.compile(r"\s*([0-9]+)([wdhm])")


def parse_interval(text: str) -> int:
    """
    Parse an interval such as '1w 2d 3h 30m' into seconds.

    Each unit is optional but units must appear at most once and in
    w, d, h, m order. Tokens may be separated by whitespace or adjacent.

    Raises:
        InvalidIntervalFormat: on unrecognized tokens, out-of-order or
            repeated units, or when no tokens are present.
    """
    body = text.strip()
    if not body:
        raise InvalidIntervalFormat(text, "no tokens")

    total = 0
    last_rank = -1
    pos = 0
    while pos < len(body):
        match = _TOKEN.match(body, pos)
        if not match:
            token = body[pos:].split()[0]
            raise InvalidIntervalFormat(text, f"unrecognized token {token!r}")

        amount, unit = match.groups()
        rank = UNIT_ORDER.index(unit)
        if rank <= last_rank:
            raise InvalidIntervalFormat(text, f"unit {unit!r} out of order")

        last_rank = rank
        total += int(amount) * UNIT_SECONDS[unit]
        pos = match.end()

    return total


def format_interval(seconds: int) -> str:
    """Format seconds in canonical 'Xw Xd Xh Xm' form, at minute resolution."""
    if seconds < 0:
        raise ValueError(f"Interval must be non-negative, got {seconds}")

    remainder = seconds // SECONDS_IN_MINUTE
    parts = []
    for unit in UNIT_ORDER:
        amount, remainder = divmod(remainder, UNIT_SECONDS[unit] // SECONDS_IN_MINUTE)
        if amount:
            parts.append(f"{amount}{unit}")

    return " ".join(parts) or "0m"
