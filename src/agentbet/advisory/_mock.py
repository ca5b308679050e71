"""Mock advisor for tests, CI and dry runs."""

from __future__ import annotations

from ._schemas import (
    MarketIdea,
    QuestionReview,
    SettlementDecision,
    TradingContext,
    TradingStrategy,
)

_DEFAULT_STRATEGY = TradingStrategy(
    choice="YES",
    confidence=70,
    reasoning="Mock strategy: pools are balanced, leaning YES. This is a test stub.",
    suggested_bet_size="small",
)
_DEFAULT_SETTLEMENT = SettlementDecision(
    outcome="YES",
    confidence=80,
    reasoning="Mock settlement. This is a test stub.",
)
_DEFAULT_IDEA = MarketIdea(
    question="Will ETH close above $4,000 on Friday?",
    duration=86_400,
    category="crypto",
)
_DEFAULT_REVIEW = QuestionReview(valid=True, reason="Mock review accepts every question.")


class MockAdvisor:
    """Mock advisor returning fixed decisions.

    Each decision can be overridden. Pass `None` for one decision, or
    `no_advice=True` for all of them, to simulate an unavailable advisor.
    """

    def __init__(
        self,
        *,
        strategy: TradingStrategy | None = _DEFAULT_STRATEGY,
        settlement: SettlementDecision | None = _DEFAULT_SETTLEMENT,
        idea: MarketIdea | None = _DEFAULT_IDEA,
        review: QuestionReview | None = _DEFAULT_REVIEW,
        no_advice: bool = False,
    ) -> None:
        self._strategy = None if no_advice else strategy
        self._settlement = None if no_advice else settlement
        self._idea = None if no_advice else idea
        self._review = None if no_advice else review
        self.calls: list[str] = []

    async def ask_trading_strategy(self, context: TradingContext) -> TradingStrategy | None:
        self.calls.append(f"trading:{context.question}")
        return self._strategy

    async def ask_settlement(self, question: str) -> SettlementDecision | None:
        self.calls.append(f"settlement:{question}")
        return self._settlement

    async def ask_market_idea(self) -> MarketIdea | None:
        self.calls.append("market_idea")
        return self._idea

    async def review_question(self, question: str) -> QuestionReview | None:
        self.calls.append(f"review:{question}")
        return self._review
