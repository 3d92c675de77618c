"""Conversation-related data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Literal


class Phase(str, Enum):
    """Conversation phase of the tracked user."""

    IDLE = "idle"
    ACTIVE = "active"


class Mood(str, Enum):
    """Mood reported by the user during a conversation."""

    GOOD = "good"
    MODERATE = "moderate"
    LOW = "low"


class EndReason(str, Enum):
    """Why a conversation ended."""

    TIMEOUT = "timeout"
    REQUESTED = "requested"


@dataclass(frozen=True)
class ChatTurn:
    """A single message turn in a conversation."""

    role: Literal["user", "system"]
    content: str
    timestamp: datetime


@dataclass
class ConversationState:
    """Mutable session state of the tracked user."""

    current_interval: int  # seconds until the next check-in is due
    last_contact: datetime
    phase: Phase = Phase.IDLE
    history: list[ChatTurn] = field(default_factory=list)
    timeout_counter: int = 0
    mood: Mood | None = None
    revision: int = 0  # bumped on every user message


@dataclass(frozen=True)
class ConversationSnapshot:
    """Read-only copy of ConversationState."""

    phase: Phase
    history: tuple[ChatTurn, ...]
    timeout_counter: int
    current_interval: int
    last_contact: datetime
    mood: Mood | None
