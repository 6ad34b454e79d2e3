"""Exception hierarchy for the scene enhancer.

Only the API layer maps these to HTTP statuses: ImageRejectedError becomes
a 400, everything else that escapes the orchestrator becomes a generic 500.
"""

from typing import Optional


class SceneEnhancerError(Exception):
    """Base exception for all service errors."""


class ConfigurationError(SceneEnhancerError):
    """Settings missing or invalid at startup."""


class ProviderError(SceneEnhancerError):
    """Upstream AI provider answered with an error status."""

    def __init__(self, provider: str, message: str, status_code: Optional[int] = None):
        self.provider = provider
        self.message = message
        self.status_code = status_code
        super().__init__(f"{provider} error: {message}")


class AuthenticationError(ProviderError):
    """Provider rejected the API key (401)."""

    def __init__(self, provider: str):
        super().__init__(provider, "Authentication failed", 401)


class RateLimitError(ProviderError):
    """Provider throttled the request (429)."""

    def __init__(self, provider: str, retry_after: Optional[int] = None):
        self.retry_after = retry_after
        message = "Rate limit exceeded"
        if retry_after:
            message += f", retry after {retry_after}s"
        super().__init__(provider, message, 429)

    @classmethod
    def from_header(cls, provider: str, retry_after: Optional[str]) -> "RateLimitError":
        """Build from a raw Retry-After header; HTTP-date values are ignored."""
        seconds = int(retry_after) if retry_after and retry_after.isdigit() else None
        return cls(provider, seconds)


class GenerationError(SceneEnhancerError):
    """Image generation returned no usable image."""


class ImageRejectedError(SceneEnhancerError):
    """Scene analysis marked the source image as unusable."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Image rejected: {reason}")
