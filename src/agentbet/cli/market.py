"""Typer CLI commands for on-chain market reads."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.table import Table

from agentbet.cli.utils import (
    console,
    exit_agentbet_error,
    open_chain_reader,
    print_model_json,
    run_async,
)
from agentbet.exceptions import AgentBetError

if TYPE_CHECKING:
    from agentbet.chain import Market

app = typer.Typer(help="On-chain market reads.")

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Workflow config JSON (default: AGENTBET_CONFIG)."),
]


def _format_timestamp(value: int) -> str:
    if value <= 0:
        return "-"
    return datetime.fromtimestamp(value, tz=UTC).strftime("%Y-%m-%d %H:%M UTC")


def _format_eth(wei: int) -> str:
    return f"{wei / 10**18:.4f} ETH"


@app.command("get")
def market_get(
    market_id: Annotated[int, typer.Argument(help="Market id to fetch.")],
    config_path: ConfigOption = None,
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Fetch a single market by id."""

    async def _get() -> Market:
        async with open_chain_reader(config_path) as reader:
            return await reader.get_market(market_id)

    try:
        market = run_async(_get())
    except AgentBetError as e:
        exit_agentbet_error(e)

    if output_json:
        print_model_json(market)
        return

    table = Table(title=f"Market #{market.market_id}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Question", market.question)
    table.add_row("Status", market.status.name)
    table.add_row("Deadline", _format_timestamp(market.deadline))
    table.add_row("Settlement Deadline", _format_timestamp(market.settlement_deadline))
    table.add_row("YES Pool", _format_eth(market.yes_pool))
    table.add_row("NO Pool", _format_eth(market.no_pool))
    table.add_row("Bettors", str(market.total_bettors))
    table.add_row("Creator", market.creator)
    if market.is_agent_created:
        table.add_row("Creator Agent", market.creator_agent)
    outcome = market.settled_outcome
    if outcome is not None:
        table.add_row("Outcome", outcome.name)
        table.add_row("Confidence", f"{market.confidence_score / 100:.2f}%")

    console.print(table)


@app.command("list")
def market_list(
    limit: Annotated[int, typer.Option("--limit", "-n", help="Show the newest N markets.")] = 20,
    config_path: ConfigOption = None,
) -> None:
    """List markets (newest last)."""

    async def _list() -> list[Market]:
        async with open_chain_reader(config_path) as reader:
            return await reader.list_markets(limit=limit)

    try:
        markets = run_async(_list())
    except AgentBetError as e:
        exit_agentbet_error(e)

    if not markets:
        console.print("[yellow]No markets found.[/yellow]")
        return

    table = Table(title="Markets")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Question", style="white")
    table.add_column("Status", style="green")
    table.add_column("Pool", style="yellow", justify="right")
    table.add_column("Deadline", style="dim")

    for market in markets:
        table.add_row(
            str(market.market_id),
            market.question[:60] + ("..." if len(market.question) > 60 else ""),
            market.status.name,
            _format_eth(market.total_pool),
            _format_timestamp(market.deadline),
        )

    console.print(table)
