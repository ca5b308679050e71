"""Centralized policy constants for the AgentBet oracle workflows.

This module defines named constants for policy-encoding literals used by the
trading, market-creation and settlement workflows. Keeping them in one place:

- Prevents the thresholds of the different workflows from silently diverging
- Makes the advisory-scale to on-chain-scale conversion explicit and testable
- Keeps magic numbers (wei amounts, decimals, buffers) out of workflow code
"""

from __future__ import annotations

# =============================================================================
# Confidence Gates
# =============================================================================

# Minimum advisory confidence (0..100) for a trade recommendation to be acted on.
#
# Used by:
# - config.py: WorkflowConfig.trading_confidence_threshold default
# - workflows.py: run_trading_workflow()
TRADING_CONFIDENCE_THRESHOLD: float = 60

# Minimum advisory confidence (0..100) for a settlement to be written on-chain.
#
# Used by:
# - config.py: WorkflowConfig.settlement_confidence_threshold default
# - workflows.py: run_settlement_workflow()
#
# Lower than the trading gate. Both are overridable per deployment.
SETTLEMENT_CONFIDENCE_THRESHOLD: float = 50

# =============================================================================
# Confidence Scale Conversion
# =============================================================================

# Multiplier from the advisory scale (0..100) to on-chain basis points (0..10000).
#
# Used by:
# - policy.py: confidence_to_bps()
CONFIDENCE_BPS_SCALE: int = 100

# Upper clamp for the encoded confidence (uint16 field, 10000 = 100%).
MAX_CONFIDENCE_BPS: int = 10_000

# =============================================================================
# Bet Sizing
# =============================================================================

# Fixed bet amounts (wei) for the advisor's suggestedBetSize labels.
#
# Used by:
# - policy.py: bet_amount_wei()
#
# small = 0.001 ETH, medium = 0.005 ETH, large = 0.01 ETH.
BET_SIZE_WEI: dict[str, int] = {
    "small": 1_000_000_000_000_000,
    "medium": 5_000_000_000_000_000,
    "large": 10_000_000_000_000_000,
}

# Label used when the advisor returns an unrecognised bet size.
DEFAULT_BET_SIZE: str = "small"

# =============================================================================
# Market Creation
# =============================================================================

# Window after the market deadline during which settlement may be requested.
#
# Used by:
# - config.py: WorkflowConfig.settlement_buffer_seconds default
# - workflows.py: run_market_creation_workflow()
DEFAULT_SETTLEMENT_BUFFER_SECONDS: int = 43_200

# Market duration used when a request or idea carries no positive duration (24h).
DEFAULT_MARKET_DURATION_SECONDS: int = 86_400

# Shortest question accepted for a new market.
#
# Used by:
# - advisory/_schemas.py: MarketIdea.question
# - workflows.py: HTTP market creation pre-check
MIN_QUESTION_LENGTH: int = 10

# =============================================================================
# Price Feeds
# =============================================================================

# Fixed decimal count of the USD price feeds (answer is 8-decimal fixed point).
#
# Used by:
# - chain/reader.py: normalize_price()
PRICE_FEED_DECIMALS: int = 8

# Sentinel returned when a price feed read fails. Price context is best-effort.
PRICE_UNKNOWN: str = "unknown"

# =============================================================================
# Addresses
# =============================================================================

# "No agent" marker for system-created markets.
ZERO_ADDRESS: str = "0x0000000000000000000000000000000000000000"

# =============================================================================
# LLM Sampling
# =============================================================================

# Low temperature for fact-finding; higher for creative market ideas.
#
# Used by:
# - advisory/_gemini.py: GeminiAdvisor
SETTLEMENT_TEMPERATURE: float = 0.1
QUESTION_REVIEW_TEMPERATURE: float = 0.1
TRADING_TEMPERATURE: float = 0.3
MARKET_IDEA_TEMPERATURE: float = 0.8
