"""Data models for inventory observations and resolution decisions."""

from __future__ import annotations

from .inventory_snapshot import InventorySnapshot
from .quota_policy import DEFAULT_VPC_QUOTA, QuotaPolicy
from .resource_decision import (
    CreateNew,
    DecisionKind,
    Failure,
    ResourceDecision,
    ReuseExact,
    ReuseFallback,
)
from .resource_record import ResourceRecord

__all__ = [
    "CreateNew",
    "DEFAULT_VPC_QUOTA",
    "DecisionKind",
    "Failure",
    "InventorySnapshot",
    "QuotaPolicy",
    "ResourceDecision",
    "ResourceRecord",
    "ReuseExact",
    "ReuseFallback",
]
