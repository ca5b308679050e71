"""
Workflow configuration (explicit, validated, passed into every invocation).

Config files use the camelCase keys of the workflow deployment format, e.g.:

    {
      "geminiModel": "gemini-2.0-flash",
      "schedule": "0 */10 * * * *",
      "evms": [
        {
          "marketAddress": "0x...",
          "chainSelectorName": "ethereum-testnet-sepolia-base-1",
          "gasLimit": "500000",
          "dataFeeds": {"ETH_USD": "0x...", "BTC_USD": "0x..."}
        }
      ]
    }
"""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from agentbet.constants import (
    DEFAULT_SETTLEMENT_BUFFER_SECONDS,
    SETTLEMENT_CONFIDENCE_THRESHOLD,
    TRADING_CONFIDENCE_THRESHOLD,
)
from agentbet.exceptions import ConfigurationError

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")

DEFAULT_CONFIG_PATH = Path("workflow.config.json")


def _check_address(value: str) -> str:
    if not _ADDRESS_RE.match(value):
        raise ValueError(f"not a 20-byte hex address: {value!r}")
    return value


class EvmConfig(BaseModel):
    """Target chain and contract addresses for one EVM deployment."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    market_address: str
    registry_address: str | None = None
    chain_selector_name: str = Field(min_length=1)
    gas_limit: int = Field(default=500_000, gt=0)
    data_feeds: dict[str, str] = Field(default_factory=dict)

    @field_validator("market_address", "registry_address")
    @classmethod
    def _validate_address(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return _check_address(value)

    @field_validator("data_feeds")
    @classmethod
    def _validate_feeds(cls, value: dict[str, str]) -> dict[str, str]:
        for address in value.values():
            _check_address(address)
        return value


class WorkflowConfig(BaseModel):
    """Configuration shared by the trading, creation and settlement workflows."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    gemini_model: str = "gemini-2.0-flash"
    schedule: str = "0 */10 * * * *"
    evms: list[EvmConfig] = Field(default_factory=list)
    trading_confidence_threshold: float = Field(
        default=TRADING_CONFIDENCE_THRESHOLD, ge=0, le=100
    )
    settlement_confidence_threshold: float = Field(
        default=SETTLEMENT_CONFIDENCE_THRESHOLD, ge=0, le=100
    )
    default_market_id: int = Field(default=0, ge=0)
    settlement_buffer_seconds: int = Field(default=DEFAULT_SETTLEMENT_BUFFER_SECONDS, ge=0)

    @property
    def primary_evm(self) -> EvmConfig:
        """Return the first EVM config.

        Raises:
            ConfigurationError: If no EVM config is present.
        """
        if not self.evms:
            raise ConfigurationError("No EVM config found")
        return self.evms[0]


def load_workflow_config(path: Path | str) -> WorkflowConfig:
    """Load and validate a workflow config file.

    Raises:
        ConfigurationError: If the file is missing, not JSON, fails validation, or
            declares no EVM targets.
    """
    config_path = Path(path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ConfigurationError(f"Workflow config not found: {config_path}") from None
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Workflow config is not valid JSON: {config_path}") from e

    try:
        config = WorkflowConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid workflow config {config_path}: {e}") from e

    if not config.evms:
        raise ConfigurationError("No EVM config found")
    return config


@dataclass(frozen=True)
class Settings:
    """Process-level settings read from the environment."""

    rpc_url: str | None = None
    private_key: str | None = None
    config_path: Path = DEFAULT_CONFIG_PATH

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment variables.

        Optional:
            AGENTBET_RPC_URL: JSON-RPC endpoint for chain reads/writes
            AGENTBET_PRIVATE_KEY: Signing key for live report submission
            AGENTBET_CONFIG: Workflow config path (default: workflow.config.json)
        """
        return cls(
            rpc_url=os.environ.get("AGENTBET_RPC_URL") or None,
            private_key=os.environ.get("AGENTBET_PRIVATE_KEY") or None,
            config_path=Path(os.environ.get("AGENTBET_CONFIG") or DEFAULT_CONFIG_PATH),
        )

    def require_rpc_url(self) -> str:
        """Return the RPC URL or raise `ConfigurationError`."""
        if not self.rpc_url:
            raise ConfigurationError("AGENTBET_RPC_URL environment variable is required")
        return self.rpc_url
