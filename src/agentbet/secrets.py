"""Secret access (the LLM API key never leaves this boundary in logs)."""

from __future__ import annotations

import os
from typing import Protocol

from agentbet.exceptions import ConfigurationError

GEMINI_API_KEY_SECRET = "GEMINI_API_KEY"


class SecretProvider(Protocol):
    """Resolves secrets by id (runtime secret store, environment, vault...)."""

    def get_secret(self, secret_id: str) -> str: ...


class EnvSecretProvider:
    """Secret provider backed by environment variables."""

    def get_secret(self, secret_id: str) -> str:
        value = os.environ.get(secret_id)
        if not value:
            raise ConfigurationError(f"{secret_id} environment variable is required")
        return value
