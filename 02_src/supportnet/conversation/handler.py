"""Entry point for direct messages from the tracked user."""

from enum import Enum

from ..logging_config import get_logger
from ..models import ChatTurn, Mood
from ..tracker import ITracker
from .machine import ConversationStateMachine

logger = get_logger(__name__)

END_COMMAND = "!end"
MOOD_COMMAND = "!mood"


class InboundResult(str, Enum):
    """What happened to an inbound message."""

    IGNORED = "ignored"
    RECORDED = "recorded"
    MOOD_RECORDED = "mood_recorded"
    ENDED = "ended"
    REJECTED = "rejected"


class InboundHandler:
    """Routes direct messages into the conversation state machine."""

    def __init__(
        self,
        machine: ConversationStateMachine,
        tracked_user_id: str,
        tracker: ITracker | None = None,
    ):
        self._machine = machine
        self._tracked_user_id = tracked_user_id
        self._tracker = tracker

    async def handle(self, sender_id: str, turn: ChatTurn) -> InboundResult:
        """Handle a direct message already extracted by the transport."""
        if sender_id != self._tracked_user_id:
            logger.debug("Ignoring message from untracked sender %s", sender_id)
            return InboundResult.IGNORED

        words = turn.content.split(maxsplit=1)
        command = words[0] if words else ""
        argument = words[1] if len(words) > 1 else ""

        if command == END_COMMAND:
            await self.request_end()
            return InboundResult.ENDED

        if command == MOOD_COMMAND:
            value = argument.strip().lower()
            try:
                mood = Mood(value)
            except ValueError:
                # Counts as user activity even when the value is unknown
                logger.warning("Unknown mood %r", value)
                await self._machine.on_inbound_message(turn)
                await self._track("mood_rejected", {"length": len(turn.content)})
                return InboundResult.REJECTED
            await self._machine.record_mood(mood)
            await self._machine.on_inbound_message(turn)
            await self._track("mood_recorded", {"mood": mood.value})
            return InboundResult.MOOD_RECORDED

        await self._machine.on_inbound_message(turn)
        await self._track("message_received", {"length": len(turn.content)})
        return InboundResult.RECORDED

    async def request_end(self) -> bool:
        """
        End the conversation on the user's behalf.

        Shared by the '!end' command and the HTTP end route so both leave
        the same trace.

        Returns:
            True if the conversation state was reset.
        """
        ended = await self._machine.request_end_conversation()
        await self._track("conversation_end_requested", {"ended": ended})
        return ended

    async def __call__(self, sender_id: str, turn: ChatTurn) -> None:
        await self.handle(sender_id, turn)

    async def _track(self, event_type: str, data: dict) -> None:
        if self._tracker:
            await self._tracker.track(event_type=event_type, actor="inbound_handler", data=data)
