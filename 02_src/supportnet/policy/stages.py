"""Recovery stages and their check-in guidelines."""

from dataclasses import dataclass
from enum import Enum

from .interval import SECONDS_IN_DAY, SECONDS_IN_HOUR, SECONDS_IN_MINUTE, SECONDS_IN_WEEK

EARLY_STAGE_DAYS = 90
LONG_TERM_STAGE_DAYS = 365


class RecoveryStage(str, Enum):
    """Recovery stage by elapsed sobriety days."""

    EARLY = "early"
    MID_TERM = "mid_term"
    LONG_TERM = "long_term"


@dataclass(frozen=True)
class StageGuideline:
    """Interval bounds and recommendation guidance for a stage."""

    stage: RecoveryStage
    min_interval: int
    max_interval: int
    fallback_interval: int
    guidelines: str


EARLY_SOBRIETY_GUIDELINES = (
    "Consider the following guidelines for early sobriety (less than 3 months):\n\n"
    "- Mood: Good -> Check-in timer: 1-2 times per day (e.g., 12h or 8h)\n"
    "- Mood: Moderate -> Check-in timer: 2-3 times per day (e.g., 6h or 4h)\n"
    "- Mood: Low -> Check-in timer: 3-4 times per day (e.g., 4h, 3h, or 2h)"
)

MID_TERM_SOBRIETY_GUIDELINES = (
    "Consider the following guidelines for mid-term sobriety (3 months to 1 year):\n\n"
    "- Mood: Good -> Check-in timer: Every 1-2 days (e.g., 1d, 1d 12h)\n"
    "- Mood: Moderate -> Check-in timer: Every day (e.g., 24h)\n"
    "- Mood: Low -> Check-in timer: Twice per day (e.g., 12h)"
)

LONG_TERM_SOBRIETY_GUIDELINES = (
    "Consider the following guidelines for long-term sobriety (1 year and beyond):\n\n"
    "- Mood: Good -> Check-in timer: Every 3-7 days (e.g., 3d, 5d, 1w)\n"
    "- Mood: Moderate -> Check-in timer: Every 1-3 days (e.g., 1d, 2d, 3d)\n"
    "- Mood: Low -> Check-in timer: Every day (e.g., 24h)"
)

STAGE_GUIDELINES = {
    RecoveryStage.EARLY: StageGuideline(
        stage=RecoveryStage.EARLY,
        min_interval=2 * SECONDS_IN_HOUR,
        max_interval=12 * SECONDS_IN_HOUR,
        fallback_interval=150 * SECONDS_IN_MINUTE,
        guidelines=EARLY_SOBRIETY_GUIDELINES,
    ),
    RecoveryStage.MID_TERM: StageGuideline(
        stage=RecoveryStage.MID_TERM,
        min_interval=12 * SECONDS_IN_HOUR,
        max_interval=2 * SECONDS_IN_DAY,
        fallback_interval=SECONDS_IN_DAY,
        guidelines=MID_TERM_SOBRIETY_GUIDELINES,
    ),
    RecoveryStage.LONG_TERM: StageGuideline(
        stage=RecoveryStage.LONG_TERM,
        min_interval=SECONDS_IN_DAY,
        max_interval=SECONDS_IN_WEEK,
        fallback_interval=3 * SECONDS_IN_DAY,
        guidelines=LONG_TERM_SOBRIETY_GUIDELINES,
    ),
}


def stage_for(elapsed_days: int) -> RecoveryStage:
    """Map elapsed sobriety days to a recovery stage."""
    if elapsed_days < EARLY_STAGE_DAYS:
        return RecoveryStage.EARLY
    if elapsed_days < LONG_TERM_STAGE_DAYS:
        return RecoveryStage.MID_TERM
    return RecoveryStage.LONG_TERM
