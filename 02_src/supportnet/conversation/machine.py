"""ConversationStateMachine implementation."""

import asyncio
from datetime import datetime, timezone

from ..clock import IClock, SobrietyClock
from ..errors import InvalidIntervalFormat, RecommendationError
from ..logging_config import get_logger
from ..models import (
    ChatTurn,
    ConversationSnapshot,
    ConversationState,
    EndReason,
    Mood,
    Phase,
)
from ..policy import CheckInIntervalPolicy, format_interval

logger = get_logger(__name__)

DEFAULT_INTERVAL_SECONDS = 150 * 60


class ConversationStateMachine:
    """
    Owns the tracked user's ConversationState.

    Every transition runs under one asyncio.Lock. The lock is never held
    while awaiting the interval policy, which may call out to the network.
    """

    def __init__(
        self,
        clock: IClock,
        policy: CheckInIntervalPolicy,
        sobriety: SobrietyClock,
        timeout_ticks: int = 1,
        default_interval: int = DEFAULT_INTERVAL_SECONDS,
    ):
        if timeout_ticks < 1:
            raise ValueError("timeout_ticks must be at least 1")

        self._clock = clock
        self._policy = policy
        self._sobriety = sobriety
        self._timeout_ticks = timeout_ticks
        self._default_interval = default_interval
        self._lock = asyncio.Lock()
        self._state = self._initial_state()

    def _initial_state(self) -> ConversationState:
        return ConversationState(
            current_interval=self._default_interval,
            last_contact=self._clock.now(),
        )

    @property
    def timeout_ticks(self) -> int:
        return self._timeout_ticks

    async def on_inbound_message(self, turn: ChatTurn) -> None:
        """Record a user message, opening a conversation if idle."""
        async with self._lock:
            if self._state.phase is Phase.IDLE:
                self._state.phase = Phase.ACTIVE
                logger.info("Conversation started by user message")
            self._state.timeout_counter = 0
            self._state.history.append(turn)
            self._state.revision += 1

    async def on_tick(self) -> bool:
        """
        Count a tick without user activity, ending the conversation once
        the counter reaches the timeout threshold.

        Returns:
            True if the conversation timed out and was ended.
        """
        async with self._lock:
            if self._state.phase is not Phase.ACTIVE:
                return False
            self._state.timeout_counter += 1
            timed_out = self._state.timeout_counter >= self._timeout_ticks

        if not timed_out:
            return False
        return await self.end_conversation(EndReason.TIMEOUT)

    async def start_conversation(self) -> None:
        """Open a conversation after a check-in was sent."""
        async with self._lock:
            if self._state.phase is Phase.ACTIVE:
                logger.info("Conversation already in progress. Resetting timeout counter.")
                self._state.timeout_counter = 0
                return

            self._state.phase = Phase.ACTIVE
            self._state.timeout_counter = 0
            self._state.last_contact = self._clock.now()
            logger.info(
                "Conversation started",
                extra={"context": {"phase": Phase.ACTIVE.value}},
            )

    async def end_conversation(self, reason: EndReason = EndReason.REQUESTED) -> bool:
        """
        Recompute the check-in interval and return to idle.

        If the recompute fails the previous interval is kept. A timeout end
        is abandoned when the user wrote in while the interval was being
        computed.

        Returns:
            True if the conversation state was reset.
        """
        async with self._lock:
            mood = self._state.mood
            revision = self._state.revision
            previous = self._state.current_interval

        interval = await self._recompute_interval(mood, previous)

        async with self._lock:
            if reason is EndReason.TIMEOUT and self._state.revision != revision:
                logger.info("User replied during timeout handling, keeping conversation open")
                return False

            self._state.current_interval = interval
            self._state.phase = Phase.IDLE
            self._state.timeout_counter = 0
            self._state.history.clear()
            self._state.mood = None
            self._state.last_contact = self._clock.now()

        logger.info(
            "Conversation ended (%s), next check-in in %s",
            reason.value,
            format_interval(interval),
            extra={
                "context": {
                    "phase": Phase.IDLE.value,
                    "reason": reason.value,
                    "interval_seconds": interval,
                }
            },
        )
        return True

    async def request_end_conversation(self) -> bool:
        """End the conversation regardless of the timeout counter."""
        return await self.end_conversation(EndReason.REQUESTED)

    async def record_mood(self, mood: Mood) -> None:
        """Remember the mood reported in the current conversation."""
        async with self._lock:
            self._state.mood = mood

    async def is_check_in_due(self, now: datetime) -> bool:
        """Check whether an idle user has waited the current interval."""
        async with self._lock:
            if self._state.phase is not Phase.IDLE:
                return False
            waited = (
                now.astimezone(timezone.utc) - self._state.last_contact.astimezone(timezone.utc)
            ).total_seconds()
            return waited >= self._state.current_interval

    async def snapshot(self) -> ConversationSnapshot:
        """Return a consistent copy of the current state."""
        async with self._lock:
            return ConversationSnapshot(
                phase=self._state.phase,
                history=tuple(self._state.history),
                timeout_counter=self._state.timeout_counter,
                current_interval=self._state.current_interval,
                last_contact=self._state.last_contact,
                mood=self._state.mood,
            )

    async def reset(self) -> None:
        """Restore the initial idle state."""
        async with self._lock:
            self._state = self._initial_state()

    async def _recompute_interval(self, mood: Mood | None, previous: int) -> int:
        elapsed_days = self._sobriety.elapsed_days()
        try:
            return await self._policy.recommend(elapsed_days, mood)
        except InvalidIntervalFormat as e:
            logger.warning("Unparsable interval recommendation, keeping previous: %s", e)
        except RecommendationError as e:
            logger.warning("Interval recommendation failed, keeping previous: %s", e)
        return previous
