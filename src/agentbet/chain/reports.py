"""Report delivery: wrap a payload as `onReport(bytes)` and hand it to a writer.

The writer stands in for the runtime's consensus-signing and forwarding
facility. Anything other than a SUCCESS status aborts the invocation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Protocol

import structlog
from eth_account import Account
from eth_utils import keccak, to_checksum_address

from agentbet.chain.payloads import encode_on_report_call
from agentbet.exceptions import ReportWriteError

if TYPE_CHECKING:
    from web3 import AsyncWeb3

logger = structlog.get_logger()


class TxStatus(str, Enum):
    SUCCESS = "success"
    REVERTED = "reverted"
    FATAL = "fatal"


@dataclass(frozen=True)
class WriteReportResult:
    tx_status: TxStatus
    tx_hash: str | None = None
    error_message: str | None = None


class ReportWriter(Protocol):
    """Signs and delivers `onReport` call data to a receiver contract."""

    async def write_report(
        self, *, receiver: str, call_data: bytes, gas_limit: int
    ) -> WriteReportResult: ...


async def submit_report(
    writer: ReportWriter,
    *,
    receiver: str,
    payload: bytes,
    gas_limit: int,
) -> WriteReportResult:
    """Deliver a report payload to `receiver.onReport(bytes)`.

    Raises:
        ReportWriteError: If the transaction status is not SUCCESS.
    """
    call_data = encode_on_report_call(payload)
    result = await writer.write_report(receiver=receiver, call_data=call_data, gas_limit=gas_limit)

    if result.tx_status is not TxStatus.SUCCESS:
        raise ReportWriteError(result.tx_status.value, result.error_message)

    logger.info(
        "Report written",
        receiver=receiver,
        action=f"0x{payload[0]:02x}",
        tx_hash=result.tx_hash,
    )
    return result


@dataclass(frozen=True)
class SubmittedReport:
    receiver: str
    call_data: bytes
    gas_limit: int


@dataclass
class DryRunReportWriter:
    """Records reports instead of sending them; always succeeds.

    The tx hash is the keccak of the call data, so repeated runs are comparable.
    """

    submitted: list[SubmittedReport] = field(default_factory=list)

    async def write_report(
        self, *, receiver: str, call_data: bytes, gas_limit: int
    ) -> WriteReportResult:
        self.submitted.append(
            SubmittedReport(receiver=receiver, call_data=call_data, gas_limit=gas_limit)
        )
        logger.info("Dry run: report not sent", receiver=receiver, size=len(call_data))
        tx_hash = "0x" + keccak(call_data).hex()
        return WriteReportResult(tx_status=TxStatus.SUCCESS, tx_hash=tx_hash)


class Web3ReportWriter:
    """Sends `onReport` transactions signed with a local key."""

    def __init__(
        self,
        w3: AsyncWeb3,
        *,
        private_key: str,
        chain_id: int,
        receipt_timeout_seconds: float = 120.0,
    ) -> None:
        self._w3 = w3
        self._account = Account.from_key(private_key)
        self._chain_id = chain_id
        self._receipt_timeout_seconds = receipt_timeout_seconds

    @property
    def address(self) -> str:
        return str(self._account.address)

    async def write_report(
        self, *, receiver: str, call_data: bytes, gas_limit: int
    ) -> WriteReportResult:
        nonce = await self._w3.eth.get_transaction_count(self._account.address)
        gas_price = await self._w3.eth.gas_price
        tx = {
            "to": to_checksum_address(receiver),
            "data": "0x" + call_data.hex(),
            "value": 0,
            "gas": gas_limit,
            "gasPrice": gas_price,
            "nonce": nonce,
            "chainId": self._chain_id,
        }
        signed = self._account.sign_transaction(tx)
        tx_hash = await self._w3.eth.send_raw_transaction(signed.raw_transaction)
        receipt = await self._w3.eth.wait_for_transaction_receipt(
            tx_hash, timeout=self._receipt_timeout_seconds
        )

        tx_hash_hex = "0x" + bytes(tx_hash).hex()
        if receipt["status"] != 1:
            return WriteReportResult(
                tx_status=TxStatus.REVERTED,
                tx_hash=tx_hash_hex,
                error_message=f"transaction {tx_hash_hex} reverted",
            )
        return WriteReportResult(tx_status=TxStatus.SUCCESS, tx_hash=tx_hash_hex)
