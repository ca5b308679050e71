"""
Advisory workflows: read context, consult the advisor, gate, encode, submit.

All three flows share one shape:

    gather context -> ask the advisor -> resolve failure per policy
    -> confidence gate -> encode payload -> submit report (or recommend)

Configuration errors, unknown networks and report write failures propagate to the
caller. Malformed triggers and unusable advice end the invocation without action.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import structlog
from pydantic import BaseModel, ConfigDict

from agentbet.advisory import Advisor, Choice, TradingContext
from agentbet.chain import (
    ChainReader,
    ReportWriter,
    encode_create_market_payload,
    encode_settlement_payload,
    resolve_network,
    submit_report,
)
from agentbet.config import WorkflowConfig
from agentbet.constants import (
    DEFAULT_MARKET_DURATION_SECONDS,
    MIN_QUESTION_LENGTH,
    ZERO_ADDRESS,
)
from agentbet.exceptions import ChainReadError, ConfigurationError, TriggerDecodeError
from agentbet.policy import (
    FALLBACK_MARKET_IDEA,
    FALLBACK_SETTLEMENT,
    FALLBACK_TRADING_STRATEGY,
    OnFailure,
    bet_amount_wei,
    confidence_to_bps,
    passes_confidence_gate,
    resolve_advice,
)
from agentbet.triggers import (
    CronTick,
    HttpTrigger,
    SettlementRequestedLog,
    Trigger,
    decode_create_market_request,
    decode_trade_request,
    default_on_failure,
)

logger = structlog.get_logger()


class ActionStatus(str, Enum):
    SUBMITTED = "submitted"
    RECOMMENDED = "recommended"
    SKIPPED_LOW_CONFIDENCE = "skipped_low_confidence"
    NO_ADVICE = "no_advice"
    REJECTED_REQUEST = "rejected_request"
    MARKET_UNAVAILABLE = "market_unavailable"


@dataclass
class WorkflowContext:
    """Everything a workflow invocation needs, passed in explicitly."""

    config: WorkflowConfig
    advisor: Advisor
    reader: ChainReader | None = None
    writer: ReportWriter | None = None

    def require_reader(self) -> ChainReader:
        if self.reader is None:
            raise ConfigurationError("Chain reader is required (set AGENTBET_RPC_URL)")
        return self.reader

    def require_writer(self) -> ReportWriter:
        if self.writer is None:
            raise ConfigurationError("Report writer is required for this workflow")
        return self.writer


class TradeRecommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: ActionStatus
    market_id: int | None = None
    question: str | None = None
    choice: Choice | None = None
    confidence: float | None = None
    bet_amount_wei: int | None = None
    reasoning: str = ""
    prices: dict[str, str] = {}
    detail: str | None = None


class MarketCreationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: ActionStatus
    question: str | None = None
    duration: int | None = None
    is_agent_created: bool | None = None
    agent_address: str | None = None
    tx_hash: str | None = None
    detail: str | None = None


class SettlementResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: ActionStatus
    market_id: int | None = None
    question: str | None = None
    outcome: Choice | None = None
    confidence: float | None = None
    confidence_bps: int | None = None
    reasoning: str = ""
    tx_hash: str | None = None
    detail: str | None = None


async def run_trading_workflow(
    ctx: WorkflowContext,
    trigger: CronTick | HttpTrigger,
    *,
    on_failure: OnFailure | None = None,
) -> TradeRecommendation:
    """Produce a trade recommendation for one market. Never writes on-chain.

    Cron ticks analyse `config.default_market_id` and keep going with placeholder
    market data when the read fails. HTTP requests name their market and abort
    when it cannot be read.
    """
    policy = on_failure or default_on_failure(trigger)
    evm = ctx.config.primary_evm
    resolve_network(evm.chain_selector_name)
    reader = ctx.require_reader()

    bet_override: int | None = None
    if isinstance(trigger, HttpTrigger):
        try:
            request = decode_trade_request(trigger)
        except TriggerDecodeError as e:
            logger.warning("Rejected trade request", error=str(e))
            return TradeRecommendation(status=ActionStatus.REJECTED_REQUEST, detail=str(e))
        market_id = request.market_id
        bet_override = request.bet_amount
        logger.info(
            "Trade strategy requested",
            market_id=market_id,
            agent=request.agent_address,
        )
    else:
        market_id = ctx.config.default_market_id
        logger.info("Trade strategy analysis triggered", market_id=market_id)

    try:
        market = await reader.get_market(market_id)
    except ChainReadError as e:
        if isinstance(trigger, HttpTrigger):
            logger.warning("Market unavailable", market_id=market_id, error=str(e))
            return TradeRecommendation(
                status=ActionStatus.MARKET_UNAVAILABLE,
                market_id=market_id,
                detail=str(e),
            )
        logger.warning("Could not read market state, using placeholder", market_id=market_id)
        context = TradingContext(question=FALLBACK_MARKET_IDEA.question)
    else:
        context = TradingContext(
            question=market.question or FALLBACK_MARKET_IDEA.question,
            yes_pool=market.yes_pool,
            no_pool=market.no_pool,
            deadline=market.deadline,
        )

    prices = await reader.read_price_context()
    context = context.model_copy(update={"prices": prices})

    advice = await ctx.advisor.ask_trading_strategy(context)
    strategy = resolve_advice(
        advice,
        fallback=FALLBACK_TRADING_STRATEGY,
        on_failure=policy,
        workflow="trading",
    )
    if strategy is None:
        return TradeRecommendation(
            status=ActionStatus.NO_ADVICE,
            market_id=market_id,
            question=context.question,
            prices=prices,
        )

    threshold = ctx.config.trading_confidence_threshold
    if not passes_confidence_gate(strategy.confidence, threshold):
        logger.info(
            "Strategy below confidence threshold",
            market_id=market_id,
            confidence=strategy.confidence,
            threshold=threshold,
        )
        return TradeRecommendation(
            status=ActionStatus.SKIPPED_LOW_CONFIDENCE,
            market_id=market_id,
            question=context.question,
            choice=strategy.choice,
            confidence=strategy.confidence,
            reasoning=strategy.reasoning,
            prices=prices,
        )

    amount = bet_override
    if amount is None:
        amount = bet_amount_wei(strategy.suggested_bet_size)
    logger.info(
        "Trade recommendation",
        market_id=market_id,
        choice=strategy.choice,
        amount_wei=amount,
        confidence=strategy.confidence,
    )
    return TradeRecommendation(
        status=ActionStatus.RECOMMENDED,
        market_id=market_id,
        question=context.question,
        choice=strategy.choice,
        confidence=strategy.confidence,
        bet_amount_wei=amount,
        reasoning=strategy.reasoning,
        prices=prices,
    )


async def run_market_creation_workflow(
    ctx: WorkflowContext,
    trigger: CronTick | HttpTrigger,
    *,
    on_failure: OnFailure | None = None,
) -> MarketCreationResult:
    """Create a market from an advisor idea (cron) or a reviewed caller question (HTTP)."""
    policy = on_failure or default_on_failure(trigger)
    evm = ctx.config.primary_evm
    resolve_network(evm.chain_selector_name)
    writer = ctx.require_writer()

    if isinstance(trigger, HttpTrigger):
        try:
            request = decode_create_market_request(trigger)
        except TriggerDecodeError as e:
            logger.warning("Rejected market request", error=str(e))
            return MarketCreationResult(status=ActionStatus.REJECTED_REQUEST, detail=str(e))

        question = request.question
        if len(question) < MIN_QUESTION_LENGTH:
            logger.warning("Rejected market request", reason="question too short")
            return MarketCreationResult(
                status=ActionStatus.REJECTED_REQUEST,
                question=question,
                detail=f"Question must be at least {MIN_QUESTION_LENGTH} characters",
            )

        review = await ctx.advisor.review_question(question)
        if review is None and policy is OnFailure.ABORT:
            logger.warning("Question review unavailable, rejecting", question=question)
            return MarketCreationResult(
                status=ActionStatus.REJECTED_REQUEST,
                question=question,
                detail="Question review unavailable",
            )
        if review is not None and not review.valid:
            logger.info("Question rejected by review", question=question, reason=review.reason)
            return MarketCreationResult(
                status=ActionStatus.REJECTED_REQUEST,
                question=question,
                detail=review.reason or "Question rejected",
            )

        duration = request.duration
        agent_address = request.agent_address or ZERO_ADDRESS
        is_agent_created = agent_address.lower() != ZERO_ADDRESS
    else:
        logger.info("Market creation triggered")
        idea = resolve_advice(
            await ctx.advisor.ask_market_idea(),
            fallback=FALLBACK_MARKET_IDEA,
            on_failure=policy,
            workflow="market_creation",
        )
        if idea is None:
            return MarketCreationResult(status=ActionStatus.NO_ADVICE)
        question = idea.question
        duration = idea.duration
        agent_address = ZERO_ADDRESS
        is_agent_created = True

    if duration is None or duration <= 0:
        duration = DEFAULT_MARKET_DURATION_SECONDS

    payload = encode_create_market_payload(
        question,
        duration,
        settlement_buffer=ctx.config.settlement_buffer_seconds,
        is_agent_created=is_agent_created,
        agent_address=agent_address,
    )
    result = await submit_report(
        writer,
        receiver=evm.market_address,
        payload=payload,
        gas_limit=evm.gas_limit,
    )
    logger.info("Market created", question=question, duration=duration, tx_hash=result.tx_hash)
    return MarketCreationResult(
        status=ActionStatus.SUBMITTED,
        question=question,
        duration=duration,
        is_agent_created=is_agent_created,
        agent_address=agent_address,
        tx_hash=result.tx_hash,
    )


async def run_settlement_workflow(
    ctx: WorkflowContext,
    trigger: SettlementRequestedLog,
    *,
    on_failure: OnFailure | None = None,
) -> SettlementResult:
    """Resolve a market whose settlement was requested on-chain."""
    policy = on_failure or default_on_failure(trigger)
    evm = ctx.config.primary_evm
    resolve_network(evm.chain_selector_name)
    writer = ctx.require_writer()

    try:
        market_id, question = trigger.decode()
    except TriggerDecodeError as e:
        logger.warning("Ignoring settlement log", error=str(e))
        return SettlementResult(status=ActionStatus.REJECTED_REQUEST, detail=str(e))

    logger.info("Settlement requested", market_id=market_id, question=question)

    decision = resolve_advice(
        await ctx.advisor.ask_settlement(question),
        fallback=FALLBACK_SETTLEMENT,
        on_failure=policy,
        workflow="settlement",
    )
    if decision is None:
        return SettlementResult(
            status=ActionStatus.NO_ADVICE,
            market_id=market_id,
            question=question,
        )

    threshold = ctx.config.settlement_confidence_threshold
    if not passes_confidence_gate(decision.confidence, threshold):
        logger.warning(
            "Settlement below confidence threshold, not settling",
            market_id=market_id,
            confidence=decision.confidence,
            threshold=threshold,
        )
        return SettlementResult(
            status=ActionStatus.SKIPPED_LOW_CONFIDENCE,
            market_id=market_id,
            question=question,
            outcome=decision.outcome,
            confidence=decision.confidence,
            reasoning=decision.reasoning,
        )

    confidence_bps = confidence_to_bps(decision.confidence)
    payload = encode_settlement_payload(market_id, decision.outcome, decision.confidence)
    result = await submit_report(
        writer,
        receiver=evm.market_address,
        payload=payload,
        gas_limit=evm.gas_limit,
    )
    logger.info(
        "Market settled",
        market_id=market_id,
        outcome=decision.outcome,
        confidence_bps=confidence_bps,
        tx_hash=result.tx_hash,
    )
    return SettlementResult(
        status=ActionStatus.SUBMITTED,
        market_id=market_id,
        question=question,
        outcome=decision.outcome,
        confidence=decision.confidence,
        confidence_bps=confidence_bps,
        reasoning=decision.reasoning,
        tx_hash=result.tx_hash,
    )


async def run_workflow(
    ctx: WorkflowContext,
    name: str,
    trigger: Trigger,
    *,
    on_failure: OnFailure | None = None,
) -> TradeRecommendation | MarketCreationResult | SettlementResult:
    """Dispatch to a workflow by name ("trading", "market_creation", "settlement")."""
    if name == "trading" and isinstance(trigger, CronTick | HttpTrigger):
        return await run_trading_workflow(ctx, trigger, on_failure=on_failure)
    if name == "market_creation" and isinstance(trigger, CronTick | HttpTrigger):
        return await run_market_creation_workflow(ctx, trigger, on_failure=on_failure)
    if name == "settlement" and isinstance(trigger, SettlementRequestedLog):
        return await run_settlement_workflow(ctx, trigger, on_failure=on_failure)
    raise ValueError(f"Workflow {name!r} does not accept {type(trigger).__name__}")
