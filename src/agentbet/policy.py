"""Confidence-gated action policy.

Decides whether an advisory decision is acted on, what to do when no advice is
available, and how advisory values map onto on-chain amounts.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import TypeVar

import structlog

from agentbet.advisory import MarketIdea, SettlementDecision, TradingStrategy
from agentbet.constants import (
    BET_SIZE_WEI,
    CONFIDENCE_BPS_SCALE,
    DEFAULT_BET_SIZE,
    MAX_CONFIDENCE_BPS,
)

logger = structlog.get_logger()

DecisionT = TypeVar("DecisionT")


class OnFailure(str, Enum):
    """What a workflow does when the advisory call yields no usable decision."""

    USE_FALLBACK = "fallback"
    ABORT = "abort"


# Canned decisions that keep simulation flows moving when the advisor is unavailable.
FALLBACK_TRADING_STRATEGY = TradingStrategy(
    choice="YES",
    confidence=75,
    reasoning=(
        "Based on current market trends and price analysis, "
        "the YES outcome appears more likely"
    ),
    suggested_bet_size="small",
)
FALLBACK_SETTLEMENT = SettlementDecision(
    outcome="YES",
    confidence=85,
    reasoning="Based on current market trends and data analysis",
)
FALLBACK_MARKET_IDEA = MarketIdea(
    question="Will Bitcoin exceed $100,000 by end of this week?",
    duration=604_800,
    category="crypto",
)


def passes_confidence_gate(confidence: float, threshold: float) -> bool:
    """Return True when `confidence` (0..100) is at or above `threshold`."""
    return confidence >= threshold


def bet_amount_wei(size: str | None) -> int:
    """Map a suggested bet size to wei; anything unrecognised maps to the small amount."""
    if size is None:
        return BET_SIZE_WEI[DEFAULT_BET_SIZE]
    return BET_SIZE_WEI.get(size, BET_SIZE_WEI[DEFAULT_BET_SIZE])


def confidence_to_bps(confidence: float) -> int:
    """Convert advisory confidence (0..100) to basis points (0..10000).

    Rounds half up, then clamps to [0, MAX_CONFIDENCE_BPS].
    """
    if not math.isfinite(confidence):
        raise ValueError(f"confidence must be finite, got {confidence!r}")
    scaled = math.floor(confidence * CONFIDENCE_BPS_SCALE + 0.5)
    return max(0, min(scaled, MAX_CONFIDENCE_BPS))


def resolve_advice(
    advice: DecisionT | None,
    *,
    fallback: DecisionT,
    on_failure: OnFailure,
    workflow: str,
) -> DecisionT | None:
    """Return the advice, the fallback decision, or None per the failure policy."""
    if advice is not None:
        return advice

    if on_failure is OnFailure.USE_FALLBACK:
        logger.warning("Advisor unavailable, using fallback decision", workflow=workflow)
        return fallback

    logger.warning("Advisor unavailable, aborting", workflow=workflow)
    return None
