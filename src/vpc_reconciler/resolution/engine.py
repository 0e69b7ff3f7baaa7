"""Resolution engine: turns observed inventory into one VPC decision.

Preference order, evaluated strictly:
    exact tag match > create within quota > reuse any named VPC > fail closed

The quota check is proactive (count before create). Nothing here ever
creates a VPC or reacts to a provider quota error after the fact.

Concurrent deployment runs against the same account are not synchronized:
two runs may both observe headroom and both create. Provider-side atomic
reservation would be needed to close that gap; callers that care can
re-count immediately before creating (see ``provisioning.consumer``).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Sequence

from ..errors import ConfigurationError
from ..inventory.client import VpcInventoryClient
from ..models.inventory_snapshot import InventorySnapshot
from ..models.quota_policy import QuotaPolicy
from ..models.resource_decision import (
    CreateNew,
    Failure,
    ResourceDecision,
    ReuseExact,
    ReuseFallback,
)

if TYPE_CHECKING:
    import boto3

    from ..config import ReconcilerConfig

logger = logging.getLogger(__name__)


def decide(
    snapshot: InventorySnapshot,
    policy: QuotaPolicy,
    expected_name: str,
    availability_zones: Sequence[str],
) -> ResourceDecision:
    """Apply the decision algorithm to an inventory snapshot.

    Pure and deterministic: identical inputs always yield equal decisions.
    Ties are broken by provider listing order only.

    Args:
        snapshot: Observed inventory
        policy: Quota to respect
        expected_name: Name tag the deployment expects
        availability_zones: Zones for a newly created VPC

    Returns:
        Exactly one ResourceDecision
    """
    # An exact match is reused even when the region is over quota
    if snapshot.has_exact_match:
        return ReuseExact(id=snapshot.tagged_matches[0].id)

    if not snapshot.region_listed:
        raise ValueError("Snapshot has no region inventory to check the quota against")

    if not policy.is_exhausted(snapshot.total_count):
        return CreateNew(desired_name_tag=expected_name, availability_zones=tuple(availability_zones))

    fallback = snapshot.first_named()
    if fallback is not None:
        return ReuseFallback(id=fallback.id, observed_name_tag=fallback.name_tag)

    return Failure()


class ResolutionEngine:
    """Drives the inventory client and applies the decision algorithm.

    Attributes:
        inventory: Inventory client scoped to one region
        policy: Quota policy
        last_snapshot: Snapshot used by the most recent resolve() call
    """

    def __init__(self, inventory: VpcInventoryClient, policy: QuotaPolicy) -> None:
        self.inventory = inventory
        self.policy = policy
        self.last_snapshot: Optional[InventorySnapshot] = None

    def resolve(self, expected_name: str, availability_zones: Sequence[str]) -> ResourceDecision:
        """Decide which VPC the provisioning engine should use.

        The region-wide listing is skipped entirely when an exact match exists.

        Args:
            expected_name: Name tag the deployment expects
            availability_zones: Zones for a newly created VPC

        Returns:
            Exactly one ResourceDecision

        Raises:
            ConfigurationError: If inputs are missing or empty (before any provider call)
            ProviderError: If an inventory query fails
        """
        _validate_inputs(expected_name, availability_zones)

        tagged = self.inventory.find_by_name_tag(expected_name)
        if tagged:
            snapshot = InventorySnapshot(tagged_matches=tagged, region=self.inventory.region, region_listed=False)
        else:
            all_in_region = self.inventory.list_all()
            snapshot = InventorySnapshot(
                tagged_matches=(),
                all_in_region=all_in_region,
                total_count=len(all_in_region),
                region=self.inventory.region,
            )
        self.last_snapshot = snapshot

        decision = decide(snapshot, self.policy, expected_name, availability_zones)
        _log_decision(decision, snapshot, self.policy, expected_name)
        return decision


def resolve_from_config(config: "ReconcilerConfig", session: Optional["boto3.Session"] = None) -> ResourceDecision:
    """Validate config, build a fresh client and engine, and resolve once.

    Raises:
        ConfigurationError: If the config is invalid
        ProviderError: If an inventory query fails
    """
    config.validate()
    inventory = VpcInventoryClient(
        region=config.region,
        session=session,
        connect_timeout=config.connect_timeout,
        read_timeout=config.read_timeout,
    )
    engine = ResolutionEngine(inventory, QuotaPolicy(max_allowed=config.quota_max))
    return engine.resolve(config.expected_name_tag, config.availability_zones)


def _validate_inputs(expected_name: str, availability_zones: Sequence[str]) -> None:
    if not isinstance(expected_name, str) or not expected_name.strip():
        raise ConfigurationError("expected_name_tag is required")
    if isinstance(availability_zones, str) or not availability_zones:
        raise ConfigurationError("availability_zones must be a non-empty list of zone names")
    for zone in availability_zones:
        if not isinstance(zone, str) or not zone.strip():
            raise ConfigurationError("availability_zones cannot contain empty zone names")


def _log_decision(
    decision: ResourceDecision,
    snapshot: InventorySnapshot,
    policy: QuotaPolicy,
    expected_name: str,
) -> None:
    if isinstance(decision, ReuseExact):
        logger.info(f"Existing VPC found: {decision.id} (Name={expected_name})")
    elif isinstance(decision, CreateNew):
        logger.info(
            f"No VPC tagged Name={expected_name}; {snapshot.total_count}/{policy.max_allowed} "
            f"VPCs in use, a new one will be created"
        )
    elif isinstance(decision, ReuseFallback):
        logger.warning(decision.warning)
    else:
        logger.error(
            f"{decision.reason}: {snapshot.total_count}/{policy.max_allowed} VPCs in "
            f"{snapshot.region} and none carry a Name tag"
        )
