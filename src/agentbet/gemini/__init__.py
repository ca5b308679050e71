"""Gemini generate-content integration (typed async client)."""

from agentbet.gemini.client import GeminiClient, build_generate_request
from agentbet.gemini.config import GeminiConfig

__all__ = [
    "GeminiClient",
    "GeminiConfig",
    "build_generate_request",
]
