"""Typer CLI commands that run the advisory workflows once."""

from __future__ import annotations

import json
from contextlib import AsyncExitStack, asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.table import Table

from agentbet.cli.utils import (
    console,
    exit_agentbet_error,
    open_web3,
    print_model_json,
    run_async,
)
from agentbet.exceptions import AgentBetError
from agentbet.policy import OnFailure

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from pydantic import BaseModel

    from agentbet.workflows import WorkflowContext

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Workflow config JSON (default: AGENTBET_CONFIG)."),
]
BackendOption = Annotated[
    str | None,
    typer.Option("--backend", help="Advisor backend: gemini or mock."),
]
DryRunOption = Annotated[
    bool,
    typer.Option("--dry-run/--live", help="Record reports locally instead of sending them."),
]
OnFailureOption = Annotated[
    OnFailure | None,
    typer.Option("--on-failure", help="When no advice is available: fallback or abort."),
]
JsonOption = Annotated[bool, typer.Option("--json", help="Output as JSON")]


def _check_backend(backend: str | None) -> None:
    from agentbet.advisory import resolve_backend

    try:
        resolve_backend(backend)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2) from None


@asynccontextmanager
async def workflow_context(
    *,
    config_path: Path | None,
    backend: str | None,
    dry_run: bool,
) -> AsyncIterator[WorkflowContext]:
    """Wire config, advisor, chain reader and report writer for one invocation.

    Raises:
        ConfigurationError: If config, RPC URL or signing key are missing for the request.
    """
    from agentbet.advisory import get_advisor, resolve_backend
    from agentbet.chain import (
        ChainReader,
        DryRunReportWriter,
        ReportWriter,
        Web3ReportWriter,
        resolve_network,
    )
    from agentbet.config import Settings, load_workflow_config
    from agentbet.exceptions import ConfigurationError
    from agentbet.gemini import GeminiClient
    from agentbet.workflows import WorkflowContext

    settings = Settings.from_env()
    config = load_workflow_config(config_path or settings.config_path)
    network = resolve_network(config.primary_evm.chain_selector_name)

    async with AsyncExitStack() as stack:
        gemini = None
        if resolve_backend(backend) == "gemini":
            gemini = await stack.enter_async_context(
                GeminiClient.from_env(model=config.gemini_model)
            )
        advisor = get_advisor(backend, client=gemini)

        w3 = None
        if settings.rpc_url:
            w3 = await stack.enter_async_context(open_web3(settings.rpc_url))
        reader = ChainReader(w3, config.primary_evm) if w3 is not None else None

        writer: ReportWriter
        if dry_run:
            writer = DryRunReportWriter()
        else:
            if w3 is None:
                raise ConfigurationError("AGENTBET_RPC_URL is required for --live")
            if not settings.private_key:
                raise ConfigurationError("AGENTBET_PRIVATE_KEY is required for --live")
            writer = Web3ReportWriter(
                w3, private_key=settings.private_key, chain_id=network.chain_id
            )

        yield WorkflowContext(config=config, advisor=advisor, reader=reader, writer=writer)


def _print_result(title: str, result: BaseModel, *, output_json: bool) -> None:
    if output_json:
        print_model_json(result)
        return

    table = Table(title=title)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    for key, value in result.model_dump(mode="json").items():
        if value is None or value == "" or value == {}:
            continue
        rendered = json.dumps(value) if isinstance(value, dict) else str(value)
        table.add_row(key, rendered)
    console.print(table)


def trade(
    market_id: Annotated[
        int | None,
        typer.Option("--market-id", help="Market to analyse (requires --agent)."),
    ] = None,
    agent: Annotated[
        str | None,
        typer.Option("--agent", help="Requesting agent address (runs as an HTTP request)."),
    ] = None,
    bet_amount: Annotated[
        int | None,
        typer.Option("--bet-amount", help="Bet amount in wei (overrides the suggested size)."),
    ] = None,
    config_path: ConfigOption = None,
    backend: BackendOption = None,
    on_failure: OnFailureOption = None,
    output_json: JsonOption = False,
) -> None:
    """Recommend a trade for one market (never sends a transaction)."""
    from agentbet.triggers import CronTick, HttpTrigger
    from agentbet.workflows import TradeRecommendation, run_trading_workflow

    _check_backend(backend)

    trigger: CronTick | HttpTrigger
    if agent is None:
        if market_id is not None or bet_amount is not None:
            console.print("[red]Error:[/red] --market-id and --bet-amount require --agent.")
            raise typer.Exit(2)
        trigger = CronTick()
    else:
        body: dict[str, object] = {"marketId": market_id or 0, "agentAddress": agent}
        if bet_amount is not None:
            body["betAmount"] = bet_amount
        trigger = HttpTrigger(body=json.dumps(body))

    async def _run() -> TradeRecommendation:
        async with workflow_context(config_path=config_path, backend=backend, dry_run=True) as ctx:
            return await run_trading_workflow(ctx, trigger, on_failure=on_failure)

    try:
        result = run_async(_run())
    except AgentBetError as e:
        exit_agentbet_error(e)
    _print_result("Trade Recommendation", result, output_json=output_json)


def create_market(
    question: Annotated[
        str | None,
        typer.Option("--question", "-q", help="Market question (runs as an HTTP request)."),
    ] = None,
    duration: Annotated[
        int | None,
        typer.Option("--duration", help="Seconds until the market deadline (default: 1 day)."),
    ] = None,
    agent: Annotated[
        str | None,
        typer.Option("--agent", help="Creating agent address."),
    ] = None,
    config_path: ConfigOption = None,
    backend: BackendOption = None,
    dry_run: DryRunOption = True,
    on_failure: OnFailureOption = None,
    output_json: JsonOption = False,
) -> None:
    """Create a market from an advisor idea, or from --question after review."""
    from agentbet.triggers import CronTick, HttpTrigger
    from agentbet.workflows import MarketCreationResult, run_market_creation_workflow

    _check_backend(backend)

    trigger: CronTick | HttpTrigger
    if question is None:
        trigger = CronTick()
    else:
        body: dict[str, object] = {"question": question}
        if duration is not None:
            body["duration"] = duration
        if agent is not None:
            body["agentAddress"] = agent
        trigger = HttpTrigger(body=json.dumps(body))

    async def _run() -> MarketCreationResult:
        async with workflow_context(
            config_path=config_path, backend=backend, dry_run=dry_run
        ) as ctx:
            return await run_market_creation_workflow(ctx, trigger, on_failure=on_failure)

    try:
        result = run_async(_run())
    except AgentBetError as e:
        exit_agentbet_error(e)
    _print_result("Market Creation", result, output_json=output_json)


def settle(
    market_id: Annotated[int, typer.Option("--market-id", help="Market to settle.")],
    question: Annotated[str, typer.Option("--question", "-q", help="Market question.")],
    config_path: ConfigOption = None,
    backend: BackendOption = None,
    dry_run: DryRunOption = True,
    on_failure: OnFailureOption = None,
    output_json: JsonOption = False,
) -> None:
    """Settle a market as if its SettlementRequested event had fired."""
    from agentbet.triggers import SettlementRequestedLog
    from agentbet.workflows import SettlementResult, run_settlement_workflow

    _check_backend(backend)

    if market_id < 0:
        console.print("[red]Error:[/red] --market-id must be non-negative.")
        raise typer.Exit(2)
    trigger = SettlementRequestedLog.from_values(market_id, question)

    async def _run() -> SettlementResult:
        async with workflow_context(
            config_path=config_path, backend=backend, dry_run=dry_run
        ) as ctx:
            return await run_settlement_workflow(ctx, trigger, on_failure=on_failure)

    try:
        result = run_async(_run())
    except AgentBetError as e:
        exit_agentbet_error(e)
    _print_result("Settlement", result, output_json=output_json)
