"""Scheduler module."""

from .scheduler import CheckInScheduler, TickOutcome

__all__ = ["CheckInScheduler", "TickOutcome"]
