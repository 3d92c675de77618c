"""SupportNET: adaptive check-in companion for a single tracked user."""

from .app import Application
from .clock import QuietHoursGate, SobrietyClock, TimeZoneClock
from .config import SupportNetConfig, config_from_env
from .conversation import ConversationStateMachine, InboundHandler, InboundResult
from .errors import (
    ConfigurationError,
    InvalidIntervalFormat,
    RecommendationError,
    SupportNetError,
    TransportError,
)
from .models import (
    ChatTurn,
    ConversationSnapshot,
    ConversationState,
    EndReason,
    Mood,
    Phase,
    QuietWindow,
    SobrietyAnchor,
    SobrietyDuration,
    TraceEvent,
)
from .policy import CheckInIntervalPolicy, IIntervalSource, format_interval, parse_interval
from .scheduler import CheckInScheduler, TickOutcome
from .transport import ITransport, LoopbackTransport, WebhookTransport

__all__ = [
    # Application
    "Application",
    "SupportNetConfig",
    "config_from_env",
    # Errors
    "SupportNetError",
    "InvalidIntervalFormat",
    "RecommendationError",
    "TransportError",
    "ConfigurationError",
    # Models
    "ChatTurn",
    "ConversationSnapshot",
    "ConversationState",
    "EndReason",
    "Mood",
    "Phase",
    "QuietWindow",
    "SobrietyAnchor",
    "SobrietyDuration",
    "TraceEvent",
    # Components
    "TimeZoneClock",
    "QuietHoursGate",
    "SobrietyClock",
    "CheckInIntervalPolicy",
    "IIntervalSource",
    "parse_interval",
    "format_interval",
    "ConversationStateMachine",
    "InboundHandler",
    "InboundResult",
    "CheckInScheduler",
    "TickOutcome",
    "ITransport",
    "LoopbackTransport",
    "WebhookTransport",
]
