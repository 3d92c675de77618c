"""CheckInIntervalPolicy implementation."""

from typing import Protocol

from ..logging_config import get_logger
from ..models import Mood
from .interval import format_interval, parse_interval
from .stages import STAGE_GUIDELINES, StageGuideline, stage_for

logger = get_logger(__name__)


class IIntervalSource(Protocol):
    """External recommender for the next check-in interval."""

    async def request_interval(self, elapsed_days: int, mood: Mood | None) -> str:
        """Return an interval in 'Xw Xd Xh Xm' form. Raise RecommendationError on failure."""
        ...


class CheckInIntervalPolicy:
    """Recommends the wait before the next check-in from recovery progress."""

    def __init__(self, source: IIntervalSource | None = None):
        self._source = source

    @property
    def has_source(self) -> bool:
        return self._source is not None

    def guideline(self, elapsed_days: int) -> StageGuideline:
        return STAGE_GUIDELINES[stage_for(elapsed_days)]

    async def recommend(self, elapsed_days: int, mood: Mood | None = None) -> int:
        """
        Recommend the next check-in interval in seconds.

        Without a source the stage fallback is returned. A sourced value is
        parsed and clamped into the stage bounds.

        Raises:
            RecommendationError: if the source fails.
            InvalidIntervalFormat: if the source answer cannot be parsed.
        """
        guideline = self.guideline(elapsed_days)
        if self._source is None:
            return guideline.fallback_interval

        answer = await self._source.request_interval(elapsed_days, mood)
        seconds = parse_interval(answer)

        clamped = min(max(seconds, guideline.min_interval), guideline.max_interval)
        if clamped != seconds:
            logger.info(
                "Recommended interval %s outside %s bounds, using %s",
                format_interval(seconds),
                guideline.stage.value,
                format_interval(clamped),
            )
        return clamped
