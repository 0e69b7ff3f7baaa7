"""Quota policy model."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import ConfigurationError

# AWS documented default: 5 VPCs per region
DEFAULT_VPC_QUOTA = 5


@dataclass(frozen=True)
class QuotaPolicy:
    """Account/region hard limit the caller wants to respect.

    Configuration, not fetched from the provider.

    Attributes:
        max_allowed: Maximum number of VPCs permitted in the region
    """

    max_allowed: int = DEFAULT_VPC_QUOTA

    def __post_init__(self) -> None:
        if isinstance(self.max_allowed, bool) or not isinstance(self.max_allowed, int):
            raise ConfigurationError(f"quota_max must be an integer, got {self.max_allowed!r}")
        if self.max_allowed <= 0:
            raise ConfigurationError(f"quota_max must be positive, got {self.max_allowed}")

    def is_exhausted(self, count: int) -> bool:
        """Reaching exactly max_allowed counts as exhausted."""
        return count >= self.max_allowed

    def headroom(self, count: int) -> int:
        return max(self.max_allowed - count, 0)
