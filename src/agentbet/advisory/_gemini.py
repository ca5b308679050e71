"""Gemini advisor: prompt, call once, parse and validate the JSON reply."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, TypeVar

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from agentbet.constants import (
    MARKET_IDEA_TEMPERATURE,
    QUESTION_REVIEW_TEMPERATURE,
    SETTLEMENT_TEMPERATURE,
    TRADING_TEMPERATURE,
)
from agentbet.exceptions import GeminiAPIError, GeminiResponseError

from ._prompts import (
    MARKET_IDEA_PROMPT,
    MARKET_IDEA_SYSTEM_PROMPT,
    QUESTION_REVIEW_PROMPT_TEMPLATE,
    QUESTION_REVIEW_SYSTEM_PROMPT,
    SETTLEMENT_PROMPT_TEMPLATE,
    SETTLEMENT_SYSTEM_PROMPT,
    TRADING_PROMPT_TEMPLATE,
    TRADING_SYSTEM_PROMPT,
    format_price_lines,
)
from ._schemas import (
    MarketIdea,
    QuestionReview,
    SettlementDecision,
    TradingContext,
    TradingStrategy,
)

if TYPE_CHECKING:
    from agentbet.gemini.client import GeminiClient

logger = structlog.get_logger()

AdviceT = TypeVar("AdviceT", bound=BaseModel)


def parse_advice(text: str, schema: type[AdviceT]) -> AdviceT | None:
    """Parse generated text as JSON into `schema`.

    Returns:
        The validated decision, or None if the text is not JSON or fails validation.
        A partially valid reply is never returned.
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("Advice is not valid JSON", schema=schema.__name__, error=str(e))
        return None

    try:
        return schema.model_validate(raw)
    except ValidationError as e:
        logger.warning(
            "Invalid advice format",
            schema=schema.__name__,
            errors=e.error_count(),
            text=text[:500],
        )
        return None


class GeminiAdvisor:
    """Advisor backed by the Gemini generate-content endpoint."""

    def __init__(self, client: GeminiClient) -> None:
        self._client = client

    @property
    def model(self) -> str:
        return self._client.model

    async def ask_trading_strategy(self, context: TradingContext) -> TradingStrategy | None:
        """Ask for a YES/NO trade, confidence and bet size for one market."""
        prompt = self._build_trading_prompt(context)
        return await self._ask(
            TradingStrategy,
            system_prompt=TRADING_SYSTEM_PROMPT,
            user_prompt=prompt,
            temperature=TRADING_TEMPERATURE,
            search=False,
        )

    async def ask_settlement(self, question: str) -> SettlementDecision | None:
        """Ask for the factual outcome of a market question (search grounded)."""
        return await self._ask(
            SettlementDecision,
            system_prompt=SETTLEMENT_SYSTEM_PROMPT,
            user_prompt=SETTLEMENT_PROMPT_TEMPLATE.format(question=question),
            temperature=SETTLEMENT_TEMPERATURE,
            search=True,
        )

    async def ask_market_idea(self) -> MarketIdea | None:
        """Ask for one new market question drawn from current events (search grounded)."""
        return await self._ask(
            MarketIdea,
            system_prompt=MARKET_IDEA_SYSTEM_PROMPT,
            user_prompt=MARKET_IDEA_PROMPT,
            temperature=MARKET_IDEA_TEMPERATURE,
            search=True,
        )

    async def review_question(self, question: str) -> QuestionReview | None:
        """Ask whether a caller-supplied question is fit for a market."""
        return await self._ask(
            QuestionReview,
            system_prompt=QUESTION_REVIEW_SYSTEM_PROMPT,
            user_prompt=QUESTION_REVIEW_PROMPT_TEMPLATE.format(question=question),
            temperature=QUESTION_REVIEW_TEMPERATURE,
            search=True,
        )

    def _build_trading_prompt(self, context: TradingContext) -> str:
        return TRADING_PROMPT_TEMPLATE.format(
            question=context.question,
            yes_pool=context.yes_pool,
            no_pool=context.no_pool,
            deadline=context.deadline,
            prices=format_price_lines(context.prices),
        )

    async def _ask(
        self,
        schema: type[AdviceT],
        *,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        search: bool,
    ) -> AdviceT | None:
        try:
            text = await self._client.generate_json_text(
                system_prompt=system_prompt,
                user_prompt=user_prompt,
                temperature=temperature,
                search=search,
            )
        except GeminiAPIError as e:
            logger.warning(
                "Advisory call failed", schema=schema.__name__, status_code=e.status_code
            )
            return None
        except GeminiResponseError as e:
            logger.warning(
                "Failed to parse advisory response", schema=schema.__name__, error=str(e)
            )
            return None
        except httpx.HTTPError as e:
            logger.warning(
                "Advisory transport error",
                schema=schema.__name__,
                error_type=type(e).__name__,
            )
            return None

        return parse_advice(text, schema)
