"""Trigger types delivered to workflows.

A closed set of variants, each decoding and validating its own payload:

- `CronTick`: scheduled invocation, no payload.
- `HttpTrigger`: raw JSON body of a payment-gated request.
- `SettlementRequestedLog`: `SettlementRequested(uint256 indexed marketId, string question)`.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import to_bytes
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from agentbet.chain.abi import SETTLEMENT_REQUESTED_TOPIC
from agentbet.exceptions import TriggerDecodeError
from agentbet.policy import OnFailure

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


@dataclass(frozen=True)
class CronTick:
    scheduled_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True)
class HttpTrigger:
    body: str | bytes


@dataclass(frozen=True)
class SettlementRequestedLog:
    topics: tuple[bytes, ...]
    data: bytes

    @classmethod
    def from_hex(cls, topics: list[str], data: str) -> SettlementRequestedLog:
        """Build from hex strings as they appear in RPC log objects."""
        try:
            return cls(
                topics=tuple(to_bytes(hexstr=topic) for topic in topics),
                data=to_bytes(hexstr=data),
            )
        except (TypeError, ValueError) as e:
            raise TriggerDecodeError(f"Log is not hex encoded: {e}") from e

    @classmethod
    def from_values(cls, market_id: int, question: str) -> SettlementRequestedLog:
        """Build the log a market contract emits for `market_id` and `question`."""
        return cls(
            topics=(SETTLEMENT_REQUESTED_TOPIC, market_id.to_bytes(32, "big")),
            data=encode(["string"], [question]),
        )

    def decode(self) -> tuple[int, str]:
        """Return `(market_id, question)`.

        Raises:
            TriggerDecodeError: If the log is not a SettlementRequested event.
        """
        if len(self.topics) < 2 or self.topics[0] != SETTLEMENT_REQUESTED_TOPIC:
            raise TriggerDecodeError("Log is not a SettlementRequested event")
        market_id = int.from_bytes(self.topics[1], "big")
        try:
            (question,) = decode(["string"], self.data)
        except (DecodingError, UnicodeDecodeError) as e:
            raise TriggerDecodeError(f"SettlementRequested data is malformed: {e}") from e
        return market_id, question


Trigger = CronTick | HttpTrigger | SettlementRequestedLog


def default_on_failure(trigger: Trigger) -> OnFailure:
    """Cron ticks keep moving with fallback decisions; requests and log events abort."""
    if isinstance(trigger, CronTick):
        return OnFailure.USE_FALLBACK
    return OnFailure.ABORT


def _check_address(value: str) -> str:
    if not _ADDRESS_RE.match(value):
        raise ValueError("must be a 0x-prefixed 20-byte hex address")
    return value


class TradeRequest(BaseModel):
    """Body of a payment-gated strategy request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    market_id: int = Field(alias="marketId", ge=0)
    agent_address: str = Field(alias="agentAddress")
    bet_amount: int | None = Field(default=None, alias="betAmount", gt=0)

    @field_validator("agent_address")
    @classmethod
    def _validate_agent(cls, value: str) -> str:
        return _check_address(value)


class CreateMarketRequest(BaseModel):
    """Body of a payment-gated market creation request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, str_strip_whitespace=True)

    question: str = Field(min_length=1)
    duration: int | None = None
    agent_address: str | None = Field(default=None, alias="agentAddress")

    @field_validator("agent_address")
    @classmethod
    def _validate_agent(cls, value: str | None) -> str | None:
        if not value:
            return None
        return _check_address(value)


def _load_json_object(body: str | bytes) -> dict[str, object]:
    try:
        raw = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise TriggerDecodeError("Invalid request body") from e
    if not isinstance(raw, dict):
        raise TriggerDecodeError("Request body must be a JSON object")
    return raw


def decode_trade_request(trigger: HttpTrigger) -> TradeRequest:
    """Decode `{marketId, agentAddress, betAmount?}`.

    Raises:
        TriggerDecodeError: On malformed JSON or missing/invalid fields.
    """
    raw = _load_json_object(trigger.body)
    try:
        return TradeRequest.model_validate(raw)
    except ValidationError as e:
        raise TriggerDecodeError(f"Invalid trade request: {e.error_count()} error(s)") from e


def decode_create_market_request(trigger: HttpTrigger) -> CreateMarketRequest:
    """Decode `{question, duration?, agentAddress?}`.

    Raises:
        TriggerDecodeError: On malformed JSON or a missing question.
    """
    raw = _load_json_object(trigger.body)
    if not raw.get("question"):
        raise TriggerDecodeError("Missing question field")
    try:
        return CreateMarketRequest.model_validate(raw)
    except ValidationError as e:
        raise TriggerDecodeError(f"Invalid market request: {e.error_count()} error(s)") from e
