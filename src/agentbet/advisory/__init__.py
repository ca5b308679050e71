"""Advisory layer: prompt the LLM once, validate the structured reply.

- `GeminiAdvisor` talks to the generate-content endpoint.
- `MockAdvisor` stays available for tests/CI and dry runs.
"""

from __future__ import annotations

from ._factory import get_advisor, resolve_backend
from ._gemini import GeminiAdvisor, parse_advice
from ._mock import MockAdvisor
from ._schemas import (
    Advisor,
    Choice,
    MarketIdea,
    QuestionReview,
    SettlementDecision,
    TradingContext,
    TradingStrategy,
)

__all__ = [
    "Advisor",
    "Choice",
    "GeminiAdvisor",
    "MarketIdea",
    "MockAdvisor",
    "QuestionReview",
    "SettlementDecision",
    "TradingContext",
    "TradingStrategy",
    "get_advisor",
    "parse_advice",
    "resolve_backend",
]
