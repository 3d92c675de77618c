"""Conversation module."""

from .handler import END_COMMAND, MOOD_COMMAND, InboundHandler, InboundResult
from .machine import ConversationStateMachine

__all__ = [
    "ConversationStateMachine",
    "END_COMMAND",
    "InboundHandler",
    "InboundResult",
    "MOOD_COMMAND",
]
