"""Decision consumer contract.

The provisioning engine itself lives outside this package. This module
defines what it must implement and dispatches a decision onto it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Sequence

from ..errors import QuotaExhaustedError
from ..models.quota_policy import QuotaPolicy
from ..models.resource_decision import CreateNew, Failure, ResourceDecision, ReuseExact, ReuseFallback

logger = logging.getLogger(__name__)


class ProvisioningEngine(ABC):
    """Engine that materializes or references the VPC named by a decision."""

    @abstractmethod
    def import_resource(self, resource_id: str) -> Any:
        """Reference an existing VPC by ID. Must not create anything."""

    @abstractmethod
    def create_resource(self, name_tag: str, availability_zones: Sequence[str]) -> Any:
        """Create a VPC tagged name_tag across the given availability zones."""


def apply_decision(
    decision: ResourceDecision,
    engine: ProvisioningEngine,
    recheck: Optional[Callable[[], int]] = None,
    policy: Optional[QuotaPolicy] = None,
) -> Any:
    """Hand a decision to the provisioning engine.

    Args:
        decision: Decision produced by the resolution engine
        engine: Provisioning engine to act on it
        recheck: Returns the current VPC count; called immediately before a
            create to narrow the window in which concurrent runs can exceed quota
        policy: Quota policy used with recheck

    Returns:
        Whatever the engine returns for the import or create call

    Raises:
        QuotaExhaustedError: On a Failure decision, or when the recheck finds
            the quota exhausted before creating
    """
    if isinstance(decision, (ReuseExact, ReuseFallback)):
        if decision.is_warning:
            logger.warning(f"Importing fallback VPC {decision.id}")
        return engine.import_resource(decision.id)

    if isinstance(decision, CreateNew):
        if recheck is not None and policy is not None:
            current = recheck()
            if policy.is_exhausted(current):
                raise QuotaExhaustedError(
                    f"quota exhausted before create: {current}/{policy.max_allowed} VPCs now in use"
                )
        return engine.create_resource(decision.desired_name_tag, decision.availability_zones)

    if isinstance(decision, Failure):
        raise QuotaExhaustedError(decision.reason)

    raise TypeError(f"Unknown decision type: {type(decision).__name__}")
