"""Minimal ABI surface of the market, registry and price-feed contracts.

Only the functions these workflows call are described. Each entry knows its
selector, how to encode a call, and how to decode the return data.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from eth_abi import decode, encode
from eth_utils import function_signature_to_4byte_selector, keccak

MARKET_TUPLE = (
    "(address,string,uint256,uint256,uint256,uint8,uint8,uint16,"
    "uint256,uint256,uint256,bool,address)"
)
AGENT_TUPLE = (
    "(address,string,string,uint256,uint256,uint256,uint256,"
    "uint256,uint256,uint256,uint256,bool,uint256)"
)


@dataclass(frozen=True)
class ContractFunction:
    """A contract function with fixed input and output types."""

    name: str
    input_types: tuple[str, ...] = ()
    output_types: tuple[str, ...] = ()

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.input_types)})"

    @property
    def selector(self) -> bytes:
        return function_signature_to_4byte_selector(self.signature)

    def encode_call(self, *args: Any) -> bytes:
        """Return selector + ABI-encoded arguments."""
        if len(args) != len(self.input_types):
            raise ValueError(
                f"{self.signature} takes {len(self.input_types)} argument(s), got {len(args)}"
            )
        return self.selector + encode(list(self.input_types), list(args))

    def decode_output(self, data: bytes) -> tuple[Any, ...]:
        """Decode return data into a tuple of output values."""
        return tuple(decode(list(self.output_types), bytes(data)))


GET_MARKET = ContractFunction("getMarket", ("uint256",), (MARKET_TUPLE,))
NEXT_MARKET_ID = ContractFunction("nextMarketId", (), ("uint256",))
LATEST_ROUND_DATA = ContractFunction(
    "latestRoundData", (), ("uint80", "int256", "uint256", "uint256", "uint80")
)
ON_REPORT = ContractFunction("onReport", ("bytes",))
GET_AGENT = ContractFunction("getAgent", ("address",), (AGENT_TUPLE,))
GET_LEADERBOARD = ContractFunction(
    "getLeaderboard", ("uint256", "uint256"), ("address[]", f"{AGENT_TUPLE}[]")
)

# SettlementRequested(uint256 indexed marketId, string question)
SETTLEMENT_REQUESTED_SIGNATURE = "SettlementRequested(uint256,string)"
SETTLEMENT_REQUESTED_TOPIC: bytes = keccak(text=SETTLEMENT_REQUESTED_SIGNATURE)
