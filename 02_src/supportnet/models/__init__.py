"""Core data models for SupportNET."""

from .conversation import (
    ChatTurn,
    ConversationSnapshot,
    ConversationState,
    EndReason,
    Mood,
    Phase,
)
from .recovery import QuietWindow, SobrietyAnchor, SobrietyDuration
from .tracing import TraceEvent

__all__ = [
    # Conversation
    "ChatTurn",
    "ConversationSnapshot",
    "ConversationState",
    "EndReason",
    "Mood",
    "Phase",
    # Recovery
    "QuietWindow",
    "SobrietyAnchor",
    "SobrietyDuration",
    # Tracing
    "TraceEvent",
]
