"""Read-only VPC inventory queries."""

from __future__ import annotations

from .client import VpcInventoryClient

__all__ = ["VpcInventoryClient"]
