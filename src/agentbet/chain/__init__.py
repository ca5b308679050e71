"""On-chain surface: contract reads, report payload codec, report delivery."""

from agentbet.chain.models import AgentProfile, Market, MarketStatus, Outcome, PriceRound
from agentbet.chain.networks import Network, resolve_network
from agentbet.chain.payloads import (
    CreateMarketReport,
    ReportAction,
    SettlementReport,
    decode_report_payload,
    encode_create_market_payload,
    encode_on_report_call,
    encode_settlement_payload,
)
from agentbet.chain.reader import ChainReader, normalize_price
from agentbet.chain.reports import (
    DryRunReportWriter,
    ReportWriter,
    TxStatus,
    Web3ReportWriter,
    WriteReportResult,
    submit_report,
)

__all__ = [
    "AgentProfile",
    "ChainReader",
    "CreateMarketReport",
    "DryRunReportWriter",
    "Market",
    "MarketStatus",
    "Network",
    "Outcome",
    "PriceRound",
    "ReportAction",
    "ReportWriter",
    "SettlementReport",
    "TxStatus",
    "Web3ReportWriter",
    "WriteReportResult",
    "decode_report_payload",
    "encode_create_market_payload",
    "encode_on_report_call",
    "encode_settlement_payload",
    "normalize_price",
    "resolve_network",
    "submit_report",
]
