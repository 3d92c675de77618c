"""Transport module."""

from .base import InboundCallback, ITransport, make_user_turn
from .loopback import LoopbackTransport
from .webhook import WebhookTransport

__all__ = [
    "InboundCallback",
    "ITransport",
    "LoopbackTransport",
    "WebhookTransport",
    "make_user_turn",
]
