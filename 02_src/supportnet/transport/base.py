"""Transport capability interface."""

from datetime import datetime, timezone
from typing import Awaitable, Callable, Protocol

from ..clock import IClock
from ..models import ChatTurn

InboundCallback = Callable[[str, ChatTurn], Awaitable[None]]


class ITransport(Protocol):
    """Chat network the tracked user is reached through."""

    async def send_check_in_prompt(self, recipient: str) -> None:
        """Ask the transport to prompt `recipient`. Raise TransportError on failure."""
        ...

    def on_inbound_direct_message(self, callback: InboundCallback) -> None:
        """Register the handler for direct messages (sender_id, turn)."""
        ...

    async def deliver(self, sender_id: str, text: str) -> None:
        """Push already-extracted inbound text to the registered handler."""
        ...

    async def close(self) -> None:
        """Release transport resources."""
        ...


def make_user_turn(text: str, clock: IClock | None = None) -> ChatTurn:
    """Wrap inbound text as a user ChatTurn."""
    timestamp = clock.now() if clock else datetime.now(timezone.utc)
    return ChatTurn(role="user", content=text, timestamp=timestamp)
