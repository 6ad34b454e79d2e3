"""API provider clients for external services."""

from .openai_client import OpenAIClient

__all__ = [
    "OpenAIClient",
]
