"""Check-in interval policy module."""

from .interval import format_interval, parse_interval
from .policy import CheckInIntervalPolicy, IIntervalSource
from .stages import STAGE_GUIDELINES, RecoveryStage, StageGuideline, stage_for

__all__ = [
    "CheckInIntervalPolicy",
    "IIntervalSource",
    "RecoveryStage",
    "STAGE_GUIDELINES",
    "StageGuideline",
    "format_interval",
    "parse_interval",
    "stage_for",
]
