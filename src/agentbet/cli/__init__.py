"""
CLI application for AgentBet workflows.

Runs the trading, market creation and settlement workflows once, and reads
market and agent state from chain.
"""

from __future__ import annotations

import typer
from dotenv import find_dotenv, load_dotenv

from agentbet.cli.agent import app as agent_app
from agentbet.cli.market import app as market_app
from agentbet.cli.utils import console
from agentbet.cli.workflows import create_market, settle, trade

app = typer.Typer(
    name="agentbet",
    help="AgentBet CLI - AI-advised trading, market creation and settlement.",
    add_completion=False,
)

app.add_typer(market_app, name="market")
app.add_typer(agent_app, name="agent")

app.command("trade")(trade)
app.command("create-market")(create_market)
app.command("settle")(settle)


@app.callback()
def main() -> None:
    """AgentBet CLI."""
    load_dotenv(find_dotenv(usecwd=True))


@app.command()
def version() -> None:
    """Show version information."""
    from agentbet import __version__

    console.print(f"agentbet v{__version__}")
