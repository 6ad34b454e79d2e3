"""OpenAI API client for vision completions and image generation."""

from typing import Any, Dict, List, Optional
import httpx

from .base import BaseProvider
from ..utils.logger import get_logger, truncate

logger = get_logger(__name__)


class OpenAIClient(BaseProvider):
    """Client for the OpenAI REST API (chat completions + images)."""

    name = "openai"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        timeout: Optional[float] = 600.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize OpenAI client.

        Args:
            api_key: OpenAI API key
            base_url: API root, override for OpenAI-compatible gateways
            timeout: Request timeout in seconds
            transport: Optional httpx transport
        """
        super().__init__(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    def _get_default_headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def complete_json(
        self,
        system_prompt: str,
        user_text: str,
        image_url: Any,
        model: str,
    ) -> str:
        """
        Ask a vision model for a JSON object describing an image.

        Args:
            system_prompt: Instruction block sent as the system message
            user_text: Short user instruction sent alongside the image
            image_url: Public URL or data URI of the image
            model: Chat completion model identifier

        Returns:
            Raw message content of the first choice, or "{}" when empty

        Raises:
            ProviderError: On any error status
            httpx.RequestError: On transport failures
        """
        payload = {
            "model": model,
            "response_format": {"type": "json_object"},
            "messages": [
                {
                    "role": "system",
                    "content": system_prompt,
                },
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": user_text},
                        {"type": "image_url", "image_url": {"url": image_url}},
                    ],
                },
            ],
        }

        logger.info(
            "Requesting scene analysis",
            extra={
                "model": model,
                "image_url": truncate(image_url),
            }
        )

        data = await self.post_json("chat/completions", payload)

        choices = data.get("choices") or []
        content = None
        if choices:
            content = (choices[0].get("message") or {}).get("content")

        logger.info(
            "Scene analysis complete",
            extra={
                "model_requested": model,
                "model_actual": data.get("model", "unknown"),
                "has_content": bool(content),
            }
        )

        return content or "{}"

    async def generate_image(
        self,
        prompt: str,
        model: str,
        size: str = "1024x1024",
        response_format: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Generate a single image from a text prompt.

        Args:
            prompt: Text prompt for the image model
            model: Image model identifier
            size: Target size, e.g. "1024x1024"
            response_format: Only sent when set (models that default to URLs)

        Returns:
            The "data" entries of the response; each may carry "b64_json"
        """
        payload = {
            "model": model,
            "prompt": prompt,
            "size": size,
            "n": 1,
        }
        if response_format:
            payload["response_format"] = response_format

        logger.info(
            f"Submitting image generation: {model}",
            extra={
                "model": model,
                "size": size,
                "prompt": prompt[:100],
            }
        )

        data = await self.post_json("images/generations", payload)
        return data.get("data") or []
