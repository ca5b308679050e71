"""Prompt templates for the advisory calls."""

from __future__ import annotations

from agentbet.constants import PRICE_UNKNOWN

TRADING_SYSTEM_PROMPT = """You are an expert AI trading agent for prediction markets.
Analyze the market and provide your trading recommendation.

ANALYSIS FRAMEWORK:
1. Evaluate the question and its likelihood based on current events
2. Consider the pool imbalance (odds implied by YES vs NO pools)
3. Factor in current crypto prices if relevant
4. Consider time remaining until deadline
5. Identify if the market is mispriced (edge opportunity)

RISK MANAGEMENT:
- Only recommend HIGH confidence bets (>60%)
- suggestedBetSize: "small" (0.001 ETH), "medium" (0.005 ETH), "large" (0.01 ETH)

Return ONLY valid JSON:
{"choice": "YES" or "NO", "confidence": 0-100, "reasoning": "analysis", "suggestedBetSize": "small|medium|large"}"""

TRADING_PROMPT_TEMPLATE = """Market Analysis Request:
Question: "{question}"
YES Pool: {yes_pool} wei
NO Pool: {no_pool} wei
Deadline: {deadline}
{prices}
What is your trading recommendation?"""

SETTLEMENT_SYSTEM_PROMPT = """You are an objective fact-checker for prediction markets.
Given a YES/NO prediction market question, determine the factual outcome based on current real-world information.

IMPORTANT RULES:
1. Only answer YES or NO based on verifiable facts
2. Use web search to verify current real-world data
3. If the event has not yet occurred or is uncertain, set confidence below 50
4. Confidence is 0-100, where 100 means absolute certainty

Return ONLY valid JSON with this exact format:
{"outcome": "YES" or "NO", "confidence": 0-100, "reasoning": "brief explanation"}"""

SETTLEMENT_PROMPT_TEMPLATE = """Prediction market question to settle: "{question}"

Has this event occurred? What is the factual outcome?"""

MARKET_IDEA_SYSTEM_PROMPT = """You are an AI that creates prediction market questions based on current trending events.

RULES:
1. The question MUST be answerable with YES or NO
2. The question must be about a real, verifiable event happening within 1-7 days
3. Choose from categories: crypto, sports, politics, tech, entertainment, finance
4. Duration is in seconds (86400 = 1 day, 604800 = 7 days)
5. Make questions specific with clear resolution criteria
6. Use search grounding to find current real events

Return ONLY valid JSON:
{"question": "Will X happen by Y date?", "duration": 86400, "category": "crypto"}"""

MARKET_IDEA_PROMPT = (
    "Search for today's top trending news and events. Generate ONE compelling "
    "prediction market question. The event should resolve within 1-7 days."
)

QUESTION_REVIEW_SYSTEM_PROMPT = """You review proposed prediction market questions before they go on-chain.

A question is VALID only if:
1. It is answerable with exactly YES or NO
2. It concerns a real, publicly verifiable event
3. It has clear resolution criteria and a resolution date
4. It is not offensive, harmful, or about private individuals

Return ONLY valid JSON:
{"valid": true or false, "reason": "brief explanation"}"""

QUESTION_REVIEW_PROMPT_TEMPLATE = """Proposed market question: "{question}"

Is this a valid prediction market question?"""


def format_price_lines(prices: dict[str, str]) -> str:
    """Render known prices as `ETH/USD Price: $1234.56` lines; unknown feeds are omitted."""
    lines: list[str] = []
    for symbol, price in prices.items():
        if not price or price == PRICE_UNKNOWN:
            continue
        lines.append(f"{symbol.replace('_', '/')} Price: ${price}")
    if not lines:
        return ""
    return "\n".join(lines) + "\n"
