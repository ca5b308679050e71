"""Exception types for AgentBet workflows.

Transport and validation errors are caught at the advisory boundary and turned
into "no advice". Configuration and on-chain write errors abort the invocation.
"""

from __future__ import annotations


class AgentBetError(Exception):
    """Base exception for AgentBet workflow errors."""


class ConfigurationError(AgentBetError):
    """Missing or invalid workflow configuration (fatal for the invocation)."""


class NetworkNotFoundError(ConfigurationError):
    """Chain selector name does not map to a known network."""

    def __init__(self, chain_selector_name: str, supported: list[str] | None = None) -> None:
        message = f"Network not found: {chain_selector_name}"
        if supported:
            message += f" (supported: {', '.join(supported)})"
        super().__init__(message)
        self.chain_selector_name = chain_selector_name
        self.supported = supported or []


class GeminiAPIError(AgentBetError):
    """Generative-language endpoint returned a non-success status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GeminiResponseError(AgentBetError):
    """Response envelope could not be parsed into generated text."""


class TriggerDecodeError(AgentBetError):
    """Trigger payload (HTTP body or log event) is malformed."""


class ChainReadError(AgentBetError):
    """An on-chain read call failed or returned undecodable data."""


class ReportWriteError(AgentBetError):
    """Report transaction did not reach the success status."""

    def __init__(self, tx_status: str, error_message: str | None = None) -> None:
        detail = error_message or tx_status
        super().__init__(f"Failed to write report: {detail}")
        self.tx_status = tx_status
        self.error_message = error_message
