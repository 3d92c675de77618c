"""Transport posting check-ins to an HTTP webhook."""

import httpx

from ..clock import IClock
from ..errors import TransportError
from ..logging_config import get_logger
from .base import InboundCallback, make_user_turn

logger = get_logger(__name__)


class WebhookTransport:
    """
    Outbound check-ins are POSTed as JSON to `webhook_url`; the chat bridge
    behind it owns the wording. Inbound messages are pushed through the
    HTTP API and reach the handler via deliver().
    """

    def __init__(
        self,
        webhook_url: str,
        clock: IClock | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        self._webhook_url = webhook_url
        self._clock = clock
        self._timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient()
        self._callback: InboundCallback | None = None

    async def send_check_in_prompt(self, recipient: str) -> None:
        payload = {"type": "check_in", "recipient": recipient}
        if self._clock:
            payload["timestamp"] = self._clock.now().isoformat()

        try:
            response = await self._client.post(
                self._webhook_url,
                json=payload,
                timeout=self._timeout,
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise TransportError(f"Check-in webhook failed: {e}") from e

        logger.info("Check-in prompt sent to %s", recipient)

    def on_inbound_direct_message(self, callback: InboundCallback) -> None:
        self._callback = callback

    async def deliver(self, sender_id: str, text: str) -> None:
        if self._callback is None:
            raise TransportError("No inbound handler registered")
        await self._callback(sender_id, make_user_turn(text, self._clock))

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
