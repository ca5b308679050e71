from __future__ import annotations

import json

import httpx
import pytest
import respx
from httpx import Response

from agentbet.advisory import (
    GeminiAdvisor,
    MarketIdea,
    MockAdvisor,
    QuestionReview,
    SettlementDecision,
    TradingContext,
    TradingStrategy,
    get_advisor,
    parse_advice,
    resolve_backend,
)
from agentbet.advisory._prompts import format_price_lines
from agentbet.gemini import GeminiClient, GeminiConfig

GENERATE_URL = (
    "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.0-flash:generateContent"
)


def _envelope(payload: object) -> dict[str, object]:
    text = payload if isinstance(payload, str) else json.dumps(payload)
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def _context() -> TradingContext:
    return TradingContext(
        question="Will ETH close above $4,000 on Friday?",
        yes_pool=3 * 10**15,
        no_pool=10**15,
        deadline=1_767_225_600,
        prices={"ETH_USD": "3456.78", "BTC_USD": "unknown"},
    )


# ============================================================================
# parse_advice
# ============================================================================
def test_parse_trading_strategy() -> None:
    strategy = parse_advice(
        '{"choice": "NO", "confidence": 72.5, "reasoning": "pool skew", '
        '"suggestedBetSize": "medium"}',
        TradingStrategy,
    )

    assert strategy == TradingStrategy(
        choice="NO", confidence=72.5, reasoning="pool skew", suggested_bet_size="medium"
    )


def test_parse_ignores_extra_fields() -> None:
    decision = parse_advice(
        '{"outcome": "YES", "confidence": 90, "reasoning": "done", "sources": []}',
        SettlementDecision,
    )

    assert decision is not None
    assert decision.outcome == "YES"


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "",
        "[]",
        '{"choice": "MAYBE", "confidence": 80}',
        '{"choice": "yes", "confidence": 80}',
        '{"choice": "YES", "confidence": "80"}',
        '{"choice": "YES"}',
    ],
)
def test_parse_trading_strategy_rejects_bad_replies(text: str) -> None:
    assert parse_advice(text, TradingStrategy) is None


def test_parse_trading_strategy_unknown_bet_size_shape_is_kept_as_none() -> None:
    strategy = parse_advice(
        '{"choice": "YES", "confidence": 80, "suggestedBetSize": 3}', TradingStrategy
    )

    assert strategy is not None
    assert strategy.suggested_bet_size is None


@pytest.mark.parametrize("confidence", ["101", "-1"])
def test_parse_settlement_rejects_out_of_range_confidence(confidence: str) -> None:
    text = f'{{"outcome": "YES", "confidence": {confidence}}}'

    assert parse_advice(text, SettlementDecision) is None


@pytest.mark.parametrize(
    "payload",
    [
        {"question": "Too short", "duration": 86400},
        {"question": "Will BTC close above $100k today?", "duration": 0},
        {"question": "Will BTC close above $100k today?", "duration": "86400"},
    ],
)
def test_parse_market_idea_rejects_invalid(payload: dict[str, object]) -> None:
    assert parse_advice(json.dumps(payload), MarketIdea) is None


def test_parse_market_idea_defaults_category() -> None:
    idea = parse_advice(
        '{"question": "Will BTC close above $100k today?", "duration": 86400}', MarketIdea
    )

    assert idea is not None
    assert idea.category == "general"


def test_format_price_lines_skips_unknown_feeds() -> None:
    lines = format_price_lines({"ETH_USD": "3456.78", "BTC_USD": "unknown"})

    assert lines == "ETH/USD Price: $3456.78\n"
    assert format_price_lines({}) == ""


# ============================================================================
# GeminiAdvisor (respx at the HTTP boundary)
# ============================================================================
@pytest.mark.asyncio
@respx.mock
async def test_trading_strategy_prompt_carries_market_context() -> None:
    route = respx.post(GENERATE_URL).mock(
        return_value=Response(
            200,
            json=_envelope(
                {"choice": "YES", "confidence": 81, "reasoning": "r", "suggestedBetSize": "large"}
            ),
        )
    )

    async with GeminiClient(GeminiConfig(api_key="test-key")) as client:
        strategy = await GeminiAdvisor(client).ask_trading_strategy(_context())

    assert strategy is not None
    assert strategy.choice == "YES"
    assert strategy.suggested_bet_size == "large"

    sent = json.loads(route.calls[0].request.content)
    user_prompt = sent["contents"][0]["parts"][0]["text"]
    assert "Will ETH close above $4,000 on Friday?" in user_prompt
    assert "YES Pool: 3000000000000000 wei" in user_prompt
    assert "ETH/USD Price: $3456.78" in user_prompt
    assert "BTC" not in user_prompt
    assert "tools" not in sent
    assert sent["generationConfig"]["temperature"] == 0.3


@pytest.mark.asyncio
@respx.mock
async def test_settlement_uses_search_grounding_and_low_temperature() -> None:
    route = respx.post(GENERATE_URL).mock(
        return_value=Response(200, json=_envelope({"outcome": "NO", "confidence": 64}))
    )

    async with GeminiClient(GeminiConfig(api_key="test-key")) as client:
        decision = await GeminiAdvisor(client).ask_settlement("Did it rain in Paris today?")

    assert decision == SettlementDecision(outcome="NO", confidence=64)
    sent = json.loads(route.calls[0].request.content)
    assert sent["tools"] == [{"googleSearch": {}}]
    assert sent["generationConfig"]["temperature"] == 0.1
    assert "Did it rain in Paris today?" in sent["contents"][0]["parts"][0]["text"]


@pytest.mark.asyncio
@respx.mock
async def test_market_idea_and_review_use_search_grounding() -> None:
    route = respx.post(GENERATE_URL).mock(
        side_effect=[
            Response(
                200,
                json=_envelope(
                    {
                        "question": "Will SOL trade above $250 by Sunday?",
                        "duration": 172800,
                        "category": "crypto",
                    }
                ),
            ),
            Response(200, json=_envelope({"valid": False, "reason": "ambiguous"})),
        ]
    )

    async with GeminiClient(GeminiConfig(api_key="test-key")) as client:
        advisor = GeminiAdvisor(client)
        idea = await advisor.ask_market_idea()
        review = await advisor.review_question("Will things get better?")

    assert idea is not None and idea.duration == 172800
    assert review == QuestionReview(valid=False, reason="ambiguous")
    for call in route.calls:
        assert json.loads(call.request.content)["tools"] == [{"googleSearch": {}}]
    assert json.loads(route.calls[0].request.content)["generationConfig"]["temperature"] == 0.8


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        Response(500, json={"error": "boom"}),
        Response(200, text="not json"),
        Response(200, json={"candidates": []}),
        Response(200, json=_envelope("Sure! The answer is YES.")),
        Response(200, json=_envelope({"outcome": "MAYBE", "confidence": 90})),
    ],
)
async def test_settlement_failures_become_no_advice(response: Response) -> None:
    with respx.mock:
        route = respx.post(GENERATE_URL).mock(return_value=response)
        async with GeminiClient(GeminiConfig(api_key="test-key")) as client:
            decision = await GeminiAdvisor(client).ask_settlement("Did it rain in Paris today?")

    assert decision is None
    assert route.call_count == 1


@pytest.mark.asyncio
@respx.mock
async def test_transport_error_becomes_no_advice() -> None:
    respx.post(GENERATE_URL).mock(side_effect=httpx.ReadTimeout("slow"))

    async with GeminiClient(GeminiConfig(api_key="test-key")) as client:
        assert await GeminiAdvisor(client).ask_market_idea() is None


# ============================================================================
# Mock advisor and factory
# ============================================================================
@pytest.mark.asyncio
async def test_mock_advisor_records_calls_and_supports_no_advice() -> None:
    advisor = MockAdvisor()
    silent = MockAdvisor(no_advice=True)

    assert (await advisor.ask_settlement("Q?")) is not None
    assert (await advisor.ask_trading_strategy(_context())) is not None
    assert advisor.calls == ["settlement:Q?", "trading:Will ETH close above $4,000 on Friday?"]
    assert await silent.ask_market_idea() is None
    assert await silent.review_question("Q?") is None


def test_resolve_backend_reads_env(monkeypatch: pytest.MonkeyPatch) -> None:
    assert resolve_backend() == "gemini"
    monkeypatch.setenv("AGENTBET_ADVISOR_BACKEND", " Mock ")
    assert resolve_backend() == "mock"
    assert resolve_backend("gemini") == "gemini"


def test_resolve_backend_rejects_unknown() -> None:
    with pytest.raises(ValueError, match="Unknown advisor backend"):
        resolve_backend("openai")


@pytest.mark.asyncio
async def test_get_advisor_backends() -> None:
    assert isinstance(get_advisor("mock"), MockAdvisor)

    with pytest.raises(ValueError, match="needs an open GeminiClient"):
        get_advisor("gemini")

    async with GeminiClient(GeminiConfig(api_key="test-key")) as client:
        advisor = get_advisor("gemini", client=client)

    assert isinstance(advisor, GeminiAdvisor)
    assert advisor.model == "gemini-2.0-flash"
