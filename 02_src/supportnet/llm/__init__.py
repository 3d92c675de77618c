"""LLM module."""

from .interval_source import LLMIntervalSource
from .llm_provider import ILLMProvider, LLMProvider

__all__ = ["ILLMProvider", "LLMIntervalSource", "LLMProvider"]
