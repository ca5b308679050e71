"""Configuration for the Gemini generate-content client."""

from __future__ import annotations

import os
from dataclasses import dataclass

from agentbet.secrets import GEMINI_API_KEY_SECRET, EnvSecretProvider, SecretProvider

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"
DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com"


@dataclass(frozen=True)
class GeminiConfig:
    """Configuration for the Gemini API client."""

    api_key: str
    model: str = DEFAULT_GEMINI_MODEL
    base_url: str = DEFAULT_GEMINI_BASE_URL
    timeout_seconds: float = 30.0

    def __repr__(self) -> str:
        return (
            f"GeminiConfig(model={self.model!r}, base_url={self.base_url!r}, "
            f"timeout_seconds={self.timeout_seconds!r})"
        )

    @classmethod
    def from_secrets(
        cls,
        provider: SecretProvider,
        *,
        model: str = DEFAULT_GEMINI_MODEL,
        base_url: str = DEFAULT_GEMINI_BASE_URL,
        timeout_seconds: float = 30.0,
    ) -> GeminiConfig:
        """Resolve the API key through a secret provider."""
        return cls(
            api_key=provider.get_secret(GEMINI_API_KEY_SECRET),
            model=model,
            base_url=base_url,
            timeout_seconds=timeout_seconds,
        )

    @classmethod
    def from_env(cls, *, model: str | None = None) -> GeminiConfig:
        """Load configuration from environment variables.

        Required:
            GEMINI_API_KEY: Your Gemini API key

        Optional:
            GEMINI_MODEL: Model name (default: gemini-2.0-flash)
            GEMINI_BASE_URL: Override base URL
            GEMINI_TIMEOUT: Request timeout in seconds (default: 30)
        """
        return cls.from_secrets(
            EnvSecretProvider(),
            model=model or os.environ.get("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
            base_url=os.environ.get("GEMINI_BASE_URL", DEFAULT_GEMINI_BASE_URL),
            timeout_seconds=float(os.environ.get("GEMINI_TIMEOUT", "30")),
        )
