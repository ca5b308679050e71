"""Factory function for advisor backends."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from ._gemini import GeminiAdvisor
from ._mock import MockAdvisor

if TYPE_CHECKING:
    from agentbet.gemini.client import GeminiClient

    from ._schemas import Advisor

ADVISOR_BACKEND_ENV = "AGENTBET_ADVISOR_BACKEND"


def resolve_backend(backend: str | None = None) -> str:
    """Normalize a backend name, reading AGENTBET_ADVISOR_BACKEND when None (default: gemini)."""
    backend_raw = backend
    if backend_raw is None:
        backend_raw = os.getenv(ADVISOR_BACKEND_ENV) or "gemini"
    backend_value = backend_raw.strip().lower()
    if backend_value not in {"gemini", "mock"}:
        raise ValueError(f"Unknown advisor backend: {backend_value!r}")
    return backend_value


def get_advisor(
    backend: str | None = None,
    *,
    client: GeminiClient | None = None,
) -> Advisor:
    """Construct an advisor from config.

    Args:
        backend: Explicit backend override ("gemini" or "mock").
        client: Open `GeminiClient`; required for the "gemini" backend.

    Returns:
        An advisor instance.
    """
    backend_value = resolve_backend(backend)

    if backend_value == "mock":
        return MockAdvisor()

    if client is None:
        raise ValueError(
            "The 'gemini' advisor backend needs an open GeminiClient. "
            f"Set GEMINI_API_KEY or use {ADVISOR_BACKEND_ENV}=mock."
        )
    return GeminiAdvisor(client)
