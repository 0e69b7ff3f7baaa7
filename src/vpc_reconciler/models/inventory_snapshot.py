"""Inventory snapshot model: what the provider reported for one resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from .resource_record import ResourceRecord


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class InventorySnapshot:
    """Provider state observed during a single resolution call.

    Produced fresh on every resolution and never cached or persisted.
    Staleness is accepted: the provisioning engine is the final authority.

    Attributes:
        tagged_matches: VPCs carrying the expected Name tag, in listing order
        all_in_region: Every VPC visible in the region, in listing order
        total_count: Number of VPCs counted against the quota
            (defaults to len(all_in_region); None when the region was not listed)
        region: Region the snapshot was taken in
        region_listed: False when only the Name tag query ran
        captured_at: When the snapshot was taken (UTC)
    """

    tagged_matches: Tuple[ResourceRecord, ...] = ()
    all_in_region: Tuple[ResourceRecord, ...] = ()
    total_count: Optional[int] = None
    region: Optional[str] = None
    region_listed: bool = True
    captured_at: datetime = field(default_factory=_utcnow, compare=False)

    def __post_init__(self) -> None:
        # Accept any sequence but store tuples so the snapshot stays immutable
        object.__setattr__(self, "tagged_matches", tuple(self.tagged_matches))
        object.__setattr__(self, "all_in_region", tuple(self.all_in_region))
        if not self.region_listed:
            if self.all_in_region or self.total_count is not None:
                raise ValueError("An unlisted snapshot cannot carry region inventory")
            return
        if self.total_count is None:
            object.__setattr__(self, "total_count", len(self.all_in_region))
        if self.total_count < 0:
            raise ValueError(f"total_count cannot be negative: {self.total_count}")

    @property
    def has_exact_match(self) -> bool:
        return len(self.tagged_matches) > 0

    def first_named(self) -> Optional[ResourceRecord]:
        """Return the first VPC in listing order carrying any non-empty Name tag."""
        for record in self.all_in_region:
            if record.has_name_tag:
                return record
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert snapshot to dictionary for reporting."""
        return {
            "region": self.region,
            "captured_at": self.captured_at.isoformat(),
            "total_count": self.total_count,
            "region_listed": self.region_listed,
            "tagged_matches": [r.to_dict() for r in self.tagged_matches],
            "all_in_region": [r.to_dict() for r in self.all_in_region],
        }
