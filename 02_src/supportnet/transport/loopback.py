"""In-process transport that records outbound prompts."""

from ..clock import IClock
from ..errors import TransportError
from ..logging_config import get_logger
from .base import InboundCallback, make_user_turn

logger = get_logger(__name__)


class LoopbackTransport:
    """Keeps sent check-ins in memory; inbound text arrives via deliver()."""

    def __init__(self, clock: IClock | None = None):
        self._clock = clock
        self._callback: InboundCallback | None = None
        self.sent: list[str] = []

    async def send_check_in_prompt(self, recipient: str) -> None:
        self.sent.append(recipient)
        logger.info("Check-in prompt queued for %s", recipient)

    def on_inbound_direct_message(self, callback: InboundCallback) -> None:
        self._callback = callback

    async def deliver(self, sender_id: str, text: str) -> None:
        if self._callback is None:
            raise TransportError("No inbound handler registered")
        await self._callback(sender_id, make_user_turn(text, self._clock))

    async def close(self) -> None:
        self.sent.clear()
