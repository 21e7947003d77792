"""
Text-Generation Client.

Thin async wrapper around the hosted Gemini `generateContent` REST endpoint.
Built once by the application lifespan, stored on app.state and closed on
shutdown. Services receive it as an argument, so tests pass a fake with
the same `generate` coroutine.
"""

from typing import Any, Protocol

import httpx

from modules.notebook.core.config_schema import AiSchema
from modules.notebook.core.exceptions import ExternalServiceError
from modules.notebook.core.logging import get_logger

logger = get_logger(__name__)


class TextGenerator(Protocol):
    """Anything that can turn a prompt into text."""

    model: str

    async def generate(self, prompt: str) -> str: ...


class TextGenerationClient:
    """
    HTTP client for the hosted text-generation API.

    Usage:
        client = TextGenerationClient(api_key, ai_config)
        text = await client.generate("Summarize: ...")
        await client.close()
    """

    def __init__(
        self,
        api_key: str,
        config: AiSchema,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.model = config.model
        self.timeout = config.timeout_seconds
        self._api_key = api_key
        self._client = httpx.AsyncClient(
            base_url=config.base_url.rstrip("/"),
            timeout=self.timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if not self._client.is_closed:
            await self._client.aclose()

    async def generate(self, prompt: str) -> str:
        """
        Generate text for a prompt.

        Raises:
            ExternalServiceError: On timeout, HTTP failure or an empty answer
        """
        payload = {"contents": [{"parts": [{"text": prompt}]}]}

        try:
            response = await self._client.post(
                f"/models/{self.model}:generateContent",
                params={"key": self._api_key},
                json=payload,
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning("Text generation timed out", extra={"model": self.model})
            raise ExternalServiceError("Text generation request timed out") from e
        except httpx.HTTPError as e:
            logger.error(
                "Text generation request failed",
                extra={"model": self.model, "error": str(e)},
            )
            raise ExternalServiceError("Text generation request failed") from e

        text = _extract_text(response.json())
        if not text:
            raise ExternalServiceError("Text generation returned an empty response")
        return text

    async def is_healthy(self) -> bool:
        """Probe the API with a trivial prompt."""
        try:
            await self.generate("ping")
        except ExternalServiceError:
            return False
        return True


def _extract_text(body: dict[str, Any]) -> str:
    """Concatenate the text parts of the first candidate."""
    candidates = body.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(part.get("text", "") for part in parts).strip()
