"""Schema types for advisory decisions (validated LLM replies)."""

from __future__ import annotations

from typing import Literal, Protocol

from pydantic import BaseModel, ConfigDict, Field, field_validator

from agentbet.constants import MIN_QUESTION_LENGTH

Choice = Literal["YES", "NO"]


class TradingStrategy(BaseModel):
    """Trading recommendation for one market."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    choice: Choice
    confidence: float = Field(strict=True, allow_inf_nan=False, description="0..100")
    reasoning: str = ""
    suggested_bet_size: str | None = Field(default="small", alias="suggestedBetSize")

    @field_validator("suggested_bet_size", mode="before")
    @classmethod
    def _coerce_bet_size(cls, value: object) -> str | None:
        # Unknown shapes map to the default size downstream instead of rejecting the advice.
        return value if isinstance(value, str) else None


class SettlementDecision(BaseModel):
    """Factual outcome for a market question."""

    model_config = ConfigDict(frozen=True)

    outcome: Choice
    confidence: float = Field(strict=True, ge=0, le=100, allow_inf_nan=False)
    reasoning: str = ""


class MarketIdea(BaseModel):
    """A proposed yes/no market."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    question: str = Field(min_length=MIN_QUESTION_LENGTH)
    duration: int = Field(strict=True, gt=0, description="Seconds until the market deadline")
    category: str = "general"


class QuestionReview(BaseModel):
    """Verdict on a caller-supplied market question."""

    model_config = ConfigDict(frozen=True)

    valid: bool = Field(strict=True)
    reason: str = ""


class TradingContext(BaseModel):
    """Market and price context interpolated into the trading prompt."""

    model_config = ConfigDict(frozen=True)

    question: str
    yes_pool: int = 0
    no_pool: int = 0
    deadline: int = 0
    prices: dict[str, str] = Field(default_factory=dict)


class Advisor(Protocol):
    """Protocol for advisory backends.

    Every method returns the typed decision, or `None` when no advice is available
    (transport failure, unparseable reply, or a reply that fails validation).
    """

    async def ask_trading_strategy(self, context: TradingContext) -> TradingStrategy | None: ...

    async def ask_settlement(self, question: str) -> SettlementDecision | None: ...

    async def ask_market_idea(self) -> MarketIdea | None: ...

    async def review_question(self, question: str) -> QuestionReview | None: ...
