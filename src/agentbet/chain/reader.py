"""Read-only access to the market, registry and price-feed contracts."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, TypeVar

import structlog
from eth_utils import to_checksum_address
from pydantic import ValidationError

from agentbet.chain.abi import (
    GET_AGENT,
    GET_LEADERBOARD,
    GET_MARKET,
    LATEST_ROUND_DATA,
    NEXT_MARKET_ID,
    ContractFunction,
)
from agentbet.chain.models import AgentProfile, Market, PriceRound
from agentbet.constants import PRICE_FEED_DECIMALS, PRICE_UNKNOWN
from agentbet.exceptions import ChainReadError, ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable

    from web3 import AsyncWeb3

    from agentbet.config import EvmConfig

logger = structlog.get_logger()

T = TypeVar("T")


def normalize_price(answer: int, decimals: int = PRICE_FEED_DECIMALS) -> str:
    """Format a fixed-point feed answer as a two-decimal string (10000000000 -> "100.00")."""
    value = Decimal(answer) / (Decimal(10) ** decimals)
    return f"{value:.2f}"


class ChainReader:
    """
    Contract reads through an `AsyncWeb3` instance.

    Usage:

        w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))
        reader = ChainReader(w3, config.primary_evm)
        market = await reader.get_market(3)
    """

    def __init__(self, w3: AsyncWeb3, evm: EvmConfig) -> None:
        self._w3 = w3
        self._evm = evm

    async def _call(self, address: str, function: ContractFunction, *args: Any) -> tuple[Any, ...]:
        call_data = function.encode_call(*args)
        try:
            raw = await self._w3.eth.call(
                {"to": to_checksum_address(address), "data": "0x" + call_data.hex()}
            )
            return function.decode_output(bytes(raw))
        except Exception as e:
            raise ChainReadError(f"{function.signature} call to {address} failed: {e}") from e

    @staticmethod
    def _convert(function: ContractFunction, build: Callable[[], T]) -> T:
        try:
            return build()
        except (ValueError, ValidationError) as e:
            raise ChainReadError(f"{function.signature} returned an invalid struct: {e}") from e

    async def get_market(self, market_id: int) -> Market:
        """Read one market struct.

        Raises:
            ChainReadError: If the call fails or returns undecodable data.
        """
        (raw,) = await self._call(self._evm.market_address, GET_MARKET, market_id)
        return self._convert(GET_MARKET, lambda: Market.from_tuple(market_id, raw))

    async def next_market_id(self) -> int:
        (next_id,) = await self._call(self._evm.market_address, NEXT_MARKET_ID)
        return int(next_id)

    async def list_markets(self, *, limit: int | None = None) -> list[Market]:
        """Read markets 0..nextMarketId-1 (newest first when `limit` is set)."""
        total = await self.next_market_id()
        market_ids = list(range(total))
        if limit is not None:
            market_ids = market_ids[-limit:] if limit > 0 else []
        return [await self.get_market(market_id) for market_id in market_ids]

    def _require_registry(self) -> str:
        if not self._evm.registry_address:
            raise ConfigurationError("registryAddress is not configured")
        return self._evm.registry_address

    async def get_agent(self, address: str) -> AgentProfile:
        registry = self._require_registry()
        checksum = to_checksum_address(address)
        (raw,) = await self._call(registry, GET_AGENT, checksum)
        return self._convert(GET_AGENT, lambda: AgentProfile.from_tuple(checksum, raw))

    async def get_leaderboard(self, *, offset: int = 0, limit: int = 10) -> list[AgentProfile]:
        """Read a page of the registry leaderboard (ordered by the contract)."""
        registry = self._require_registry()
        addresses, profiles = await self._call(registry, GET_LEADERBOARD, offset, limit)
        return self._convert(
            GET_LEADERBOARD,
            lambda: [
                AgentProfile.from_tuple(address, raw)
                for address, raw in zip(addresses, profiles, strict=True)
            ],
        )

    async def get_price_round(self, feed_address: str) -> PriceRound:
        round_id, answer, started_at, updated_at, answered_in_round = await self._call(
            feed_address, LATEST_ROUND_DATA
        )
        return PriceRound(
            round_id=round_id,
            answer=answer,
            started_at=started_at,
            updated_at=updated_at,
            answered_in_round=answered_in_round,
        )

    async def read_price_feed(self, feed_address: str) -> str:
        """Read a USD price feed as a two-decimal string; "unknown" on any failure."""
        try:
            price_round = await self.get_price_round(feed_address)
        except ChainReadError as e:
            logger.warning("Price feed unavailable", feed=feed_address, error=str(e))
            return PRICE_UNKNOWN
        return normalize_price(price_round.answer)

    async def read_price_context(self) -> dict[str, str]:
        """Read every configured feed (symbol -> price string). Never raises."""
        prices: dict[str, str] = {}
        for symbol, feed_address in self._evm.data_feeds.items():
            prices[symbol] = await self.read_price_feed(feed_address)
        return prices
