"""Tracing and observability data models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class TraceEvent:
    """A single observability event."""

    id: str
    event_type: str  # e.g. "check_in_sent", "conversation_ended"
    actor: str  # who created this event
    data: dict  # counts and outcomes, never message content
    timestamp: datetime
