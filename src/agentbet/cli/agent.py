"""Typer CLI commands for agent registry reads."""

from __future__ import annotations

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
    from agentbet.chain import AgentProfile

app = typer.Typer(help="Agent registry reads.")

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Workflow config JSON (default: AGENTBET_CONFIG)."),
]


def _format_win_rate(profile: AgentProfile) -> str:
    rate = profile.win_rate
    return "-" if rate is None else f"{rate:.1%}"


@app.command("get")
def agent_get(
    address: Annotated[str, typer.Argument(help="Agent address.")],
    config_path: ConfigOption = None,
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Fetch one agent profile from the registry."""

    async def _get() -> AgentProfile:
        async with open_chain_reader(config_path) as reader:
            return await reader.get_agent(address)

    try:
        profile = run_async(_get())
    except AgentBetError as e:
        exit_agentbet_error(e)
    except ValueError as e:
        console.print(f"[red]Error:[/red] Invalid address: {e}")
        raise typer.Exit(2) from None

    if output_json:
        print_model_json(profile)
        return

    table = Table(title=f"Agent: {profile.name or profile.address}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Address", profile.address)
    table.add_row("Owner", profile.owner)
    table.add_row("Strategy", profile.strategy)
    table.add_row("Active", "yes" if profile.is_active else "no")
    table.add_row("Score", str(profile.score))
    table.add_row("Bets", str(profile.total_bets))
    table.add_row("Wins / Losses", f"{profile.wins} / {profile.losses}")
    table.add_row("Win Rate", _format_win_rate(profile))
    table.add_row("Markets Created", str(profile.markets_created))

    console.print(table)


@app.command("leaderboard")
def agent_leaderboard(
    limit: Annotated[int, typer.Option("--limit", "-n", help="Number of agents.")] = 10,
    offset: Annotated[int, typer.Option("--offset", help="Leaderboard offset.")] = 0,
    config_path: ConfigOption = None,
) -> None:
    """Show the registry leaderboard."""

    async def _leaderboard() -> list[AgentProfile]:
        async with open_chain_reader(config_path) as reader:
            return await reader.get_leaderboard(offset=offset, limit=limit)

    try:
        profiles = run_async(_leaderboard())
    except AgentBetError as e:
        exit_agentbet_error(e)

    if not profiles:
        console.print("[yellow]No agents registered.[/yellow]")
        return

    table = Table(title="Agent Leaderboard")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Agent", style="cyan")
    table.add_column("Score", style="green", justify="right")
    table.add_column("Bets", justify="right")
    table.add_column("Win Rate", justify="right")

    for rank, profile in enumerate(profiles, start=offset + 1):
        table.add_row(
            str(rank),
            profile.name or profile.address,
            str(profile.score),
            str(profile.total_bets),
            _format_win_rate(profile),
        )

    console.print(table)
