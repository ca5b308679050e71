"""Report payload codec: one action byte followed by ABI-encoded parameters.

    0x00 || abi.encode(string question, uint256 duration, uint256 settlementBuffer,
                       bool isAgentCreated, address agentAddress)      create market
    0x01 || abi.encode(uint256 marketId, uint8 outcome, uint16 confidenceBps)
                                                                       settle market

Payloads reach the market contract through `onReport(bytes)`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from eth_abi import decode, encode

from agentbet.chain.abi import ON_REPORT
from agentbet.chain.models import Outcome
from agentbet.constants import DEFAULT_SETTLEMENT_BUFFER_SECONDS, ZERO_ADDRESS
from agentbet.policy import confidence_to_bps

CREATE_MARKET_TYPES = ["string", "uint256", "uint256", "bool", "address"]
SETTLE_MARKET_TYPES = ["uint256", "uint8", "uint16"]


class ReportAction(IntEnum):
    """Leading discriminator byte of a report payload."""

    CREATE_MARKET = 0x00
    SETTLE_MARKET = 0x01


@dataclass(frozen=True)
class CreateMarketReport:
    question: str
    duration: int
    settlement_buffer: int
    is_agent_created: bool
    agent_address: str

    action = ReportAction.CREATE_MARKET


@dataclass(frozen=True)
class SettlementReport:
    market_id: int
    outcome: Outcome
    confidence_bps: int

    action = ReportAction.SETTLE_MARKET


def encode_create_market_payload(
    question: str,
    duration: int,
    *,
    settlement_buffer: int = DEFAULT_SETTLEMENT_BUFFER_SECONDS,
    is_agent_created: bool = True,
    agent_address: str = ZERO_ADDRESS,
) -> bytes:
    """Encode a 0x00 market-creation payload."""
    if duration <= 0:
        raise ValueError("duration must be positive")
    params = encode(
        CREATE_MARKET_TYPES,
        [question, duration, settlement_buffer, is_agent_created, agent_address],
    )
    return bytes([ReportAction.CREATE_MARKET]) + params


def encode_settlement_payload(market_id: int, outcome: Outcome | str, confidence: float) -> bytes:
    """Encode a 0x01 settlement payload.

    Args:
        market_id: On-chain market identifier.
        outcome: `Outcome` or the advisory "YES"/"NO" string.
        confidence: Advisory confidence on the 0..100 scale (converted to basis points).
    """
    if isinstance(outcome, str):
        outcome = Outcome.from_choice(outcome)
    params = encode(
        SETTLE_MARKET_TYPES,
        [market_id, int(outcome), confidence_to_bps(confidence)],
    )
    return bytes([ReportAction.SETTLE_MARKET]) + params


def decode_report_payload(payload: bytes) -> CreateMarketReport | SettlementReport:
    """Decode a report payload back into its typed form.

    Raises:
        ValueError: If the payload is empty or carries an unknown action byte.
    """
    if not payload:
        raise ValueError("Empty report payload")

    action_byte, body = payload[0], bytes(payload[1:])
    if action_byte == ReportAction.CREATE_MARKET:
        question, duration, buffer, is_agent, agent = decode(CREATE_MARKET_TYPES, body)
        return CreateMarketReport(
            question=question,
            duration=duration,
            settlement_buffer=buffer,
            is_agent_created=is_agent,
            agent_address=agent,
        )
    if action_byte == ReportAction.SETTLE_MARKET:
        market_id, outcome, confidence_bps = decode(SETTLE_MARKET_TYPES, body)
        return SettlementReport(
            market_id=market_id,
            outcome=Outcome(outcome),
            confidence_bps=confidence_bps,
        )
    raise ValueError(f"Unknown report action: 0x{action_byte:02x}")


def encode_on_report_call(payload: bytes) -> bytes:
    """Wrap a payload as `onReport(bytes)` call data."""
    return ON_REPORT.encode_call(payload)
