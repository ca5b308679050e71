"""Shared utilities for CLI commands (console output, async helpers, wiring)."""

from __future__ import annotations

import asyncio
import json
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer
from rich.console import Console
from web3 import AsyncWeb3

from agentbet.exceptions import AgentBetError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Coroutine
    from pathlib import Path

    from pydantic import BaseModel

    from agentbet.chain import ChainReader

console = Console()

T = TypeVar("T")


def run_async(coro: Coroutine[object, object, T]) -> T:
    """Run a coroutine from a sync CLI command.

    Raises:
        typer.Exit: With code 130 on KeyboardInterrupt (standard SIGINT exit code).
    """
    try:
        return asyncio.run(coro)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        raise typer.Exit(130) from None


def exit_agentbet_error(error: AgentBetError) -> NoReturn:
    """Print a domain error and exit with code 1."""
    console.print(f"[red]Error:[/red] {error}")
    raise typer.Exit(1) from None


def print_model_json(model: BaseModel) -> None:
    typer.echo(json.dumps(model.model_dump(mode="json"), indent=2, default=str))


def build_web3(rpc_url: str) -> AsyncWeb3:
    """Create the JSON-RPC client used for reads and live report writes."""
    return AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))


@asynccontextmanager
async def open_web3(rpc_url: str) -> AsyncIterator[AsyncWeb3]:
    w3 = build_web3(rpc_url)
    try:
        yield w3
    finally:
        await w3.provider.disconnect()


@asynccontextmanager
async def open_chain_reader(config_path: Path | None) -> AsyncIterator[ChainReader]:
    """Open a `ChainReader` for the primary EVM target of a workflow config.

    Raises:
        ConfigurationError: If the config or AGENTBET_RPC_URL is missing.
    """
    from agentbet.chain import ChainReader
    from agentbet.config import Settings, load_workflow_config

    settings = Settings.from_env()
    config = load_workflow_config(config_path or settings.config_path)
    async with open_web3(settings.require_rpc_url()) as w3:
        yield ChainReader(w3, config.primary_evm)
