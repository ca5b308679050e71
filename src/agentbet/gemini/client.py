"""Async Gemini generate-content client (JSON-only replies, single attempt)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import httpx
import structlog

from agentbet.exceptions import GeminiAPIError, GeminiResponseError
from agentbet.gemini.config import GeminiConfig

if TYPE_CHECKING:
    from types import TracebackType

logger = structlog.get_logger()


def build_generate_request(
    *,
    system_prompt: str,
    user_prompt: str,
    temperature: float,
    search: bool,
) -> dict[str, Any]:
    """Build a generateContent body requesting a JSON-only reply.

    The `googleSearch` tool is attached only when `search` is true.
    """
    body: dict[str, Any] = {
        "contents": [{"parts": [{"text": user_prompt}]}],
        "systemInstruction": {"parts": [{"text": system_prompt}]},
        "generationConfig": {
            "responseMimeType": "application/json",
            "temperature": temperature,
        },
    }
    if search:
        body["tools"] = [{"googleSearch": {}}]
    return body


def extract_generated_text(envelope: object) -> str:
    """Return `candidates[0].content.parts[0].text` from a response envelope.

    Raises:
        GeminiResponseError: If the envelope does not have that shape.
    """
    try:
        text = envelope["candidates"][0]["content"]["parts"][0]["text"]  # type: ignore[index]
    except (KeyError, IndexError, TypeError) as e:
        raise GeminiResponseError("Response envelope has no generated text") from e
    if not isinstance(text, str):
        raise GeminiResponseError("Generated text is not a string")
    return text


class GeminiClient:
    """
    Async client for the Gemini generateContent endpoint.

    Use as an async context manager:

        async with GeminiClient.from_env() as gemini:
            text = await gemini.generate_json_text(
                system_prompt="...", user_prompt="...", temperature=0.1
            )
    """

    def __init__(self, config: GeminiConfig) -> None:
        self._config = config
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_env(cls, *, model: str | None = None) -> GeminiClient:
        """Create a `GeminiClient` using environment configuration.

        Raises:
            ConfigurationError: If `GEMINI_API_KEY` is missing.
        """
        return cls(GeminiConfig.from_env(model=model))

    @property
    def model(self) -> str:
        return self._config.model

    async def open(self) -> None:
        """Initialize the underlying `httpx.AsyncClient` if needed."""
        if self._client is not None:
            return

        self._client = httpx.AsyncClient(
            base_url=self._config.base_url,
            timeout=self._config.timeout_seconds,
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
        )

    async def close(self) -> None:
        """Close the underlying `httpx.AsyncClient` if it is open."""
        if self._client is None:
            return
        await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> GeminiClient:
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    @property
    def client(self) -> httpx.AsyncClient:
        """Return the initialized `httpx.AsyncClient`.

        Raises:
            RuntimeError: If `open()` has not been called yet.
        """
        if self._client is None:
            raise RuntimeError(
                "GeminiClient not initialized. "
                "Use 'async with GeminiClient.from_env()' or call open()."
            )
        return self._client

    async def generate_json_text(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        search: bool = False,
    ) -> str:
        """Send one generateContent request and return the generated JSON text.

        No retries: at most one request is issued per call.

        Raises:
            GeminiAPIError: If the endpoint returns a non-2xx status.
            GeminiResponseError: If the body is not JSON or has no generated text.
            httpx.HTTPError: On network failures and timeouts.
        """
        body = build_generate_request(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            temperature=temperature,
            search=search,
        )
        response = await self.client.post(
            f"/v1beta/models/{self._config.model}:generateContent",
            params={"key": self._config.api_key},
            json=body,
        )

        if not response.is_success:
            logger.warning(
                "Gemini request failed",
                status_code=response.status_code,
                model=self._config.model,
            )
            raise GeminiAPIError(
                f"Gemini request failed with status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            envelope = response.json()
        except json.JSONDecodeError as e:
            raise GeminiResponseError("Response was not valid JSON") from e

        return extract_generated_text(envelope)
