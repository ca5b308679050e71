"""
AgentBet advisory workflows.

LLM-advised trading, market creation and settlement for the AgentBet prediction
market contracts.
"""

__version__ = "0.1.0"

from agentbet.config import WorkflowConfig, load_workflow_config

# Configure structlog once at import time (quiet by default).
from agentbet.logging import configure_structlog
from agentbet.workflows import (
    ActionStatus,
    WorkflowContext,
    run_market_creation_workflow,
    run_settlement_workflow,
    run_trading_workflow,
)

configure_structlog()

__all__ = [
    "ActionStatus",
    "WorkflowConfig",
    "WorkflowContext",
    "__version__",
    "load_workflow_config",
    "run_market_creation_workflow",
    "run_settlement_workflow",
    "run_trading_workflow",
]
