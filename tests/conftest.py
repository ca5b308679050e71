"""
Shared test fixtures.

PHILOSOPHY: Use REAL objects wherever possible. Only mock at system boundaries.
- Real Pydantic models and real ABI encoding (not dicts pretending to be structs)
- A fake `eth` namespace for JSON-RPC reads/writes
- respx ONLY for HTTP boundary
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from agentbet.config import WorkflowConfig
from tests.fakes import FakeWeb3, make_fake_w3, sample_config_dict

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer credentials out of unit tests."""
    for name in (
        "GEMINI_API_KEY",
        "GEMINI_MODEL",
        "GEMINI_BASE_URL",
        "GEMINI_TIMEOUT",
        "AGENTBET_ADVISOR_BACKEND",
        "AGENTBET_RPC_URL",
        "AGENTBET_PRIVATE_KEY",
        "AGENTBET_CONFIG",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def workflow_config() -> WorkflowConfig:
    return WorkflowConfig.model_validate(sample_config_dict())


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "workflow.config.json"
    path.write_text(json.dumps(sample_config_dict()), encoding="utf-8")
    return path


@pytest.fixture
def fake_w3() -> FakeWeb3:
    return make_fake_w3()
