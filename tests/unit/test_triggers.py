from __future__ import annotations

import json

import pytest
from eth_abi import encode
from eth_utils import keccak

from agentbet.exceptions import TriggerDecodeError
from agentbet.policy import OnFailure
from agentbet.triggers import (
    CronTick,
    HttpTrigger,
    SettlementRequestedLog,
    decode_create_market_request,
    decode_trade_request,
    default_on_failure,
)
from tests.fakes import AGENT_ADDRESS


def test_default_on_failure_per_trigger() -> None:
    assert default_on_failure(CronTick()) is OnFailure.USE_FALLBACK
    assert default_on_failure(HttpTrigger(body="{}")) is OnFailure.ABORT
    assert default_on_failure(SettlementRequestedLog.from_values(1, "Q?")) is OnFailure.ABORT


def test_decode_trade_request() -> None:
    body = json.dumps(
        {"marketId": 4, "agentAddress": AGENT_ADDRESS, "betAmount": "2000000000000000"}
    )

    request = decode_trade_request(HttpTrigger(body=body))

    assert request.market_id == 4
    assert request.agent_address == AGENT_ADDRESS
    assert request.bet_amount == 2 * 10**15


def test_decode_trade_request_accepts_bytes_without_bet_amount() -> None:
    body = json.dumps({"marketId": 0, "agentAddress": AGENT_ADDRESS}).encode()

    request = decode_trade_request(HttpTrigger(body=body))

    assert request.bet_amount is None


@pytest.mark.parametrize(
    "body",
    [
        "not json",
        b"\xff\xfe",
        "[1, 2]",
        '{"agentAddress": "0x5555555555555555555555555555555555555555"}',
        '{"marketId": -1, "agentAddress": "0x5555555555555555555555555555555555555555"}',
        '{"marketId": 1, "agentAddress": "0x1234"}',
        '{"marketId": 1, "agentAddress": "0x5555555555555555555555555555555555555555", '
        '"betAmount": 0}',
    ],
)
def test_decode_trade_request_rejects_malformed_bodies(body: str | bytes) -> None:
    with pytest.raises(TriggerDecodeError):
        decode_trade_request(HttpTrigger(body=body))


def test_decode_create_market_request() -> None:
    body = json.dumps(
        {"question": "  Will it snow in Denver tomorrow?  ", "duration": 7200, "agentAddress": ""}
    )

    request = decode_create_market_request(HttpTrigger(body=body))

    assert request.question == "Will it snow in Denver tomorrow?"
    assert request.duration == 7200
    assert request.agent_address is None


@pytest.mark.parametrize("body", ['{"duration": 60}', '{"question": ""}', "{oops"])
def test_decode_create_market_request_requires_question(body: str) -> None:
    with pytest.raises(TriggerDecodeError):
        decode_create_market_request(HttpTrigger(body=body))


def test_missing_question_message() -> None:
    with pytest.raises(TriggerDecodeError, match="Missing question field"):
        decode_create_market_request(HttpTrigger(body='{"duration": 60}'))


def test_settlement_log_decodes_market_id_and_question() -> None:
    log = SettlementRequestedLog(
        topics=(
            keccak(text="SettlementRequested(uint256,string)"),
            (42).to_bytes(32, "big"),
        ),
        data=encode(["string"], ["Did BTC close above $100k?"]),
    )

    assert log.decode() == (42, "Did BTC close above $100k?")


def test_settlement_log_from_hex_matches_from_values() -> None:
    expected = SettlementRequestedLog.from_values(7, "Did it rain?")
    log = SettlementRequestedLog.from_hex(
        ["0x" + topic.hex() for topic in expected.topics], "0x" + expected.data.hex()
    )

    assert log == expected


def test_settlement_log_rejects_other_events() -> None:
    log = SettlementRequestedLog(
        topics=(keccak(text="MarketCreated(uint256,string)"), (1).to_bytes(32, "big")),
        data=encode(["string"], ["Q?"]),
    )

    with pytest.raises(TriggerDecodeError, match="not a SettlementRequested event"):
        log.decode()


def test_settlement_log_rejects_malformed_data() -> None:
    valid = SettlementRequestedLog.from_values(1, "Q?")
    log = SettlementRequestedLog(topics=valid.topics, data=b"\x00\x01")

    with pytest.raises(TriggerDecodeError, match="malformed"):
        log.decode()


def test_settlement_log_rejects_non_utf8_question() -> None:
    valid = SettlementRequestedLog.from_values(3, "Q?")
    log = SettlementRequestedLog(
        topics=valid.topics, data=encode(["bytes"], [b"\xff\xfe question"])
    )

    with pytest.raises(TriggerDecodeError, match="malformed"):
        log.decode()


def test_settlement_log_from_hex_rejects_non_hex() -> None:
    with pytest.raises(TriggerDecodeError):
        SettlementRequestedLog.from_hex(["0xzz"], "0x")
