"""Resource decision model.

A decision is exactly one of four variants. It is pure output: the
provisioning engine is solely responsible for acting on it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Tuple

from ..errors import QuotaExhaustedError

QUOTA_EXHAUSTED_REASON = "quota exhausted and no reusable resource found"


class DecisionKind(Enum):
    """Outcome of a resolution, in preference order."""

    REUSE_EXACT = "reuse-exact"
    CREATE_NEW = "create-new"
    REUSE_FALLBACK = "reuse-fallback"
    FAILURE = "failure"


class ResourceDecision:
    """Base class for the decision variants."""

    kind: ClassVar[DecisionKind]

    @property
    def resource_id(self) -> Optional[str]:
        """ID of the VPC to import, None when nothing is reused."""
        return None

    @property
    def is_warning(self) -> bool:
        return False

    @property
    def is_fatal(self) -> bool:
        return False

    def vpc_id_or_none(self) -> Optional[str]:
        """Return the VPC ID to import, or None to create a new one.

        Raises:
            QuotaExhaustedError: If the decision is a Failure
        """
        return self.resource_id

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value}


@dataclass(frozen=True)
class ReuseExact(ResourceDecision):
    """An existing VPC tagged with the expected name was found."""

    id: str

    kind: ClassVar[DecisionKind] = DecisionKind.REUSE_EXACT

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ReuseExact requires a resource id")

    @property
    def resource_id(self) -> Optional[str]:
        return self.id

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "id": self.id}


@dataclass(frozen=True)
class ReuseFallback(ResourceDecision):
    """Quota is exhausted; some other named VPC is reused instead.

    Availability is preferred over exact identity here, so the reused VPC's
    configuration (availability zones, CIDR) may not match what was desired.
    Always surfaced as a warning.
    """

    id: str
    observed_name_tag: str

    kind: ClassVar[DecisionKind] = DecisionKind.REUSE_FALLBACK

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ReuseFallback requires a resource id")
        if not self.observed_name_tag:
            raise ValueError("ReuseFallback requires a non-empty observed name tag")

    @property
    def resource_id(self) -> Optional[str]:
        return self.id

    @property
    def is_warning(self) -> bool:
        return True

    @property
    def warning(self) -> str:
        return (
            f"Quota exhausted: reusing VPC {self.id} tagged '{self.observed_name_tag}' "
            f"instead of the expected VPC; its configuration may differ"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "id": self.id,
            "observed_name_tag": self.observed_name_tag,
            "warning": self.warning,
        }


@dataclass(frozen=True)
class CreateNew(ResourceDecision):
    """No match exists and the quota has headroom."""

    desired_name_tag: str
    availability_zones: Tuple[str, ...]

    kind: ClassVar[DecisionKind] = DecisionKind.CREATE_NEW

    def __post_init__(self) -> None:
        object.__setattr__(self, "availability_zones", tuple(self.availability_zones))
        if not self.desired_name_tag or not self.desired_name_tag.strip():
            raise ValueError("CreateNew requires a non-empty name tag")
        if not self.availability_zones:
            raise ValueError("CreateNew requires at least one availability zone")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "desired_name_tag": self.desired_name_tag,
            "availability_zones": list(self.availability_zones),
        }


@dataclass(frozen=True)
class Failure(ResourceDecision):
    """Quota is exhausted and no usable fallback exists. Fatal for the caller."""

    reason: str = QUOTA_EXHAUSTED_REASON

    kind: ClassVar[DecisionKind] = DecisionKind.FAILURE

    def __post_init__(self) -> None:
        if not self.reason:
            raise ValueError("Failure requires a reason")

    @property
    def is_fatal(self) -> bool:
        return True

    def vpc_id_or_none(self) -> Optional[str]:
        raise QuotaExhaustedError(self.reason)

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "reason": self.reason}
