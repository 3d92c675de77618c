"""Interval recommendation source backed by an LLM."""

from ..errors import RecommendationError
from ..logging_config import get_logger
from ..models import Mood
from ..policy.stages import STAGE_GUIDELINES, stage_for
from .llm_provider import ILLMProvider

logger = get_logger(__name__)

FORMAT_INSTRUCTIONS = (
    "Please provide your recommendation for a check-in timer ONLY in the format "
    "'Xw Xd Xh Xm' where X is a number and w, d, h, and m stand for weeks, days, "
    "hours, and minutes, respectively. You may leave out any time unit that is not "
    "needed. Do not include any additional text in your response."
)


class LLMIntervalSource:
    """Asks the LLM for the next check-in interval."""

    def __init__(self, llm_provider: ILLMProvider, user_name: str):
        self._llm = llm_provider
        self._user_name = user_name

    def build_prompt(self, elapsed_days: int, mood: Mood | None = None) -> str:
        """Build the stage-specific recommendation prompt."""
        mood_text = f"reported mood ({mood.value})" if mood else "mood"
        prompt = (
            f"Based on the user's sobriety duration ({elapsed_days} days) and {mood_text}, "
            f"determine an appropriate check-in timer for {self._user_name} in addiction "
            "recovery. "
        )
        prompt += STAGE_GUIDELINES[stage_for(elapsed_days)].guidelines
        prompt += "\n\n" + FORMAT_INSTRUCTIONS
        return prompt

    async def request_interval(self, elapsed_days: int, mood: Mood | None) -> str:
        prompt = self.build_prompt(elapsed_days, mood)
        try:
            answer = await self._llm.complete(messages=[{"role": "user", "content": prompt}])
        except RecommendationError:
            raise
        except Exception as e:
            raise RecommendationError(f"Interval request failed: {e}") from e

        logger.debug("LLM recommended interval %r for %s days", answer, elapsed_days)
        return answer.strip()
