"""Error taxonomy for SupportNET."""


class SupportNetError(Exception):
    """Base class for all SupportNET errors."""


class InvalidIntervalFormat(SupportNetError, ValueError):
    """Interval string does not match the 'Xw Xd Xh Xm' grammar."""

    def __init__(self, text: str, reason: str):
        self.text = text
        self.reason = reason
        super().__init__(f"Invalid interval {text!r}: {reason}")


class RecommendationError(SupportNetError):
    """The interval recommendation source failed."""


class TransportError(SupportNetError):
    """A transport could not deliver an outbound message."""


class ConfigurationError(SupportNetError):
    """Startup configuration is missing or invalid."""
