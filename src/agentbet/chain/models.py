"""Typed views of on-chain structs (read-only; the contracts own the state)."""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MarketStatus(IntEnum):
    """Market lifecycle: OPEN -> SETTLEMENT_REQUESTED -> SETTLED, or -> CANCELLED."""

    OPEN = 0
    SETTLEMENT_REQUESTED = 1
    SETTLED = 2
    CANCELLED = 3


class Outcome(IntEnum):
    """Binary outcome as encoded on-chain (uint8)."""

    YES = 0
    NO = 1

    @classmethod
    def from_choice(cls, choice: str) -> Outcome:
        """Map an advisory "YES"/"NO" string to the on-chain value."""
        try:
            return cls[choice]
        except KeyError:
            raise ValueError(f"Invalid outcome: {choice!r}") from None


class Market(BaseModel):
    """Market struct returned by `getMarket(uint256)`."""

    model_config = ConfigDict(frozen=True)

    market_id: int = Field(ge=0)
    creator: str
    question: str
    created_at: int
    deadline: int
    settlement_deadline: int
    status: MarketStatus
    outcome: int
    confidence_score: int = Field(ge=0, le=10_000, description="Basis points")
    yes_pool: int = Field(ge=0, description="wei")
    no_pool: int = Field(ge=0, description="wei")
    total_bettors: int = Field(ge=0)
    is_agent_created: bool
    creator_agent: str

    @classmethod
    def from_tuple(cls, market_id: int, raw: tuple[Any, ...]) -> Market:
        """Build from the decoded 13-field struct tuple."""
        (
            creator,
            question,
            created_at,
            deadline,
            settlement_deadline,
            status,
            outcome,
            confidence_score,
            yes_pool,
            no_pool,
            total_bettors,
            is_agent_created,
            creator_agent,
        ) = raw
        return cls(
            market_id=market_id,
            creator=creator,
            question=question,
            created_at=created_at,
            deadline=deadline,
            settlement_deadline=settlement_deadline,
            status=MarketStatus(status),
            outcome=outcome,
            confidence_score=confidence_score,
            yes_pool=yes_pool,
            no_pool=no_pool,
            total_bettors=total_bettors,
            is_agent_created=is_agent_created,
            creator_agent=creator_agent,
        )

    @property
    def is_settled(self) -> bool:
        return self.status is MarketStatus.SETTLED

    @property
    def settled_outcome(self) -> Outcome | None:
        """Outcome, or None until the market is settled."""
        if not self.is_settled:
            return None
        return Outcome(self.outcome)

    @property
    def settled_confidence_bps(self) -> int | None:
        """Settlement confidence in basis points, or None until settled."""
        if not self.is_settled:
            return None
        return self.confidence_score

    @property
    def total_pool(self) -> int:
        return self.yes_pool + self.no_pool


class AgentProfile(BaseModel):
    """Agent struct returned by the agent registry."""

    model_config = ConfigDict(frozen=True)

    address: str
    owner: str
    name: str
    strategy: str
    staked_amount: int
    total_bets: int
    wins: int
    losses: int
    total_profit: int
    total_loss: int
    markets_created: int
    registered_at: int
    is_active: bool
    score: int

    @classmethod
    def from_tuple(cls, address: str, raw: tuple[Any, ...]) -> AgentProfile:
        """Build from the decoded 13-field registry struct tuple."""
        (
            owner,
            name,
            strategy,
            staked_amount,
            total_bets,
            wins,
            losses,
            total_profit,
            total_loss,
            markets_created,
            registered_at,
            is_active,
            score,
        ) = raw
        return cls(
            address=address,
            owner=owner,
            name=name,
            strategy=strategy,
            staked_amount=staked_amount,
            total_bets=total_bets,
            wins=wins,
            losses=losses,
            total_profit=total_profit,
            total_loss=total_loss,
            markets_created=markets_created,
            registered_at=registered_at,
            is_active=is_active,
            score=score,
        )

    @property
    def win_rate(self) -> float | None:
        decided = self.wins + self.losses
        if decided == 0:
            return None
        return self.wins / decided


class PriceRound(BaseModel):
    """One `latestRoundData()` round."""

    model_config = ConfigDict(frozen=True)

    round_id: int
    answer: int
    started_at: int
    updated_at: int
    answered_in_round: int
