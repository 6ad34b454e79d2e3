"""Shared async HTTP plumbing for upstream AI providers."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import httpx

from ..utils.logger import get_logger
from ..utils.errors import ProviderError, AuthenticationError, RateLimitError

logger = get_logger(__name__)


class BaseProvider(ABC):
    """
    One long-lived httpx.AsyncClient per provider.

    Subclasses set ``name`` and supply auth headers; ``post_json`` sends a
    request and turns non-2xx answers into the ProviderError family.
    """

    name = "provider"

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: Optional[float] = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self.client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @property
    def is_open(self) -> bool:
        return self.client is not None

    async def initialize(self):
        """Open the HTTP client; calling it twice is a no-op."""
        if self.is_open:
            return

        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self._get_default_headers(),
            transport=self.transport,
        )
        logger.info(
            f"{self.name} client opened",
            extra={"provider": self.name, "base_url": self.base_url}
        )

    async def close(self):
        if not self.is_open:
            return

        await self.client.aclose()
        self.client = None
        logger.info(f"{self.name} client closed", extra={"provider": self.name})

    @abstractmethod
    def _get_default_headers(self) -> dict:
        """Auth and content headers sent with every request."""

    async def post_json(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST a JSON payload relative to base_url and decode the answer.

        Raises:
            RuntimeError: If the client was never initialized
            ProviderError: On any status >= 400
            httpx.RequestError: On transport failures
        """
        if not self.is_open:
            raise RuntimeError(
                f"{self.name} client is not open. "
                "Call initialize() or use it as an async context manager."
            )

        response = await self.client.post(path, json=payload)
        self._raise_for_status(response)
        return response.json()

    def _raise_for_status(self, response: httpx.Response):
        status = response.status_code
        if status < 400:
            return

        if status == 401:
            raise AuthenticationError(self.name)

        if status == 429:
            raise RateLimitError.from_header(self.name, response.headers.get("Retry-After"))

        message = _error_message(response)
        logger.error(
            f"{self.name} request failed: {status}",
            extra={
                "provider": self.name,
                "status": status,
                "response": response.text,
            }
        )
        raise ProviderError(self.name, message, status)


def _error_message(response: httpx.Response) -> str:
    """OpenAI-style {"error": {"message": ...}} or the raw body text."""
    try:
        error = response.json().get("error")
    except (ValueError, AttributeError):
        return response.text

    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    if isinstance(error, str) and error:
        return error
    return response.text
