"""
Data models for the Microgrid Ledger
"""

from datetime import datetime
from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EventType(str, Enum):
    """Kinds of events emitted to external observers"""
    NODE_REGISTERED = "NodeRegistered"
    ENERGY_PRODUCED = "EnergyProduced"
    ENERGY_TRADED = "EnergyTraded"
    CREDIT_TRANSFER = "CreditTransfer"


class Node(BaseModel):
    """Mutable accounting state of a registered participant.

    Only the registry and the credit ledger hold references to these records;
    everything handed to callers is a NodeView snapshot.
    """
    model_config = ConfigDict(validate_assignment=True)

    identity: str = Field(..., min_length=1, description="Opaque participant principal")
    name: str = Field(..., min_length=1, description="Display name set at registration")
    energy_generated: int = Field(default=0, ge=0, description="Energy units produced")
    energy_consumed: int = Field(default=0, ge=0, description="Energy units bought")
    credit_balance: int = Field(default=0, ge=0, description="Credits currently held")
    active: bool = Field(default=True, description="Participation gate")
    registered_at: datetime = Field(..., description="Registration timestamp")

    def view(self) -> "NodeView":
        return NodeView(**self.model_dump())


class NodeView(BaseModel):
    """Read-only snapshot of a node"""
    model_config = ConfigDict(frozen=True)

    identity: str
    name: str
    energy_generated: int
    energy_consumed: int
    credit_balance: int
    active: bool
    registered_at: datetime


class Transaction(BaseModel):
    """Completed peer-to-peer trade. Created only on success."""
    model_config = ConfigDict(frozen=True)

    transaction_id: int = Field(..., ge=0, description="Sequential log index")
    seller: str = Field(..., description="Identity whose credits were debited")
    buyer: str = Field(..., description="Identity whose credits were credited")
    energy_amount: int = Field(..., gt=0, description="Energy units traded")
    credit_amount: int = Field(..., gt=0, description="Credits moved, energy_amount * rate")
    timestamp: datetime = Field(..., description="Settlement timestamp")
    completed: bool = Field(default=True, description="Always true once recorded")

    @field_validator("buyer")
    @classmethod
    def validate_distinct_parties(cls, v, info):
        """Seller and buyer must be different identities"""
        if v == info.data.get("seller"):
            raise ValueError("Seller and buyer must be distinct")
        return v


class LedgerStats(BaseModel):
    """Aggregate ledger counters"""
    model_config = ConfigDict(frozen=True)

    node_count: int
    total_credits: int
    transaction_count: int


class LedgerEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    event_type: EventType


class NodeRegistered(LedgerEvent):
    event_type: EventType = EventType.NODE_REGISTERED
    identity: str
    name: str


class EnergyProduced(LedgerEvent):
    event_type: EventType = EventType.ENERGY_PRODUCED
    identity: str
    amount: int
    credits_earned: int


class EnergyTraded(LedgerEvent):
    event_type: EventType = EventType.ENERGY_TRADED
    seller: str
    buyer: str
    energy_amount: int
    credit_amount: int


class CreditTransfer(LedgerEvent):
    event_type: EventType = EventType.CREDIT_TRANSFER
    from_identity: str
    to_identity: str
    amount: int


AnyLedgerEvent = Union[NodeRegistered, EnergyProduced, EnergyTraded, CreditTransfer]
