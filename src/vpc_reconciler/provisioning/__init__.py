"""Boundary to the external provisioning engine."""

from __future__ import annotations

from .consumer import ProvisioningEngine, apply_decision

__all__ = ["ProvisioningEngine", "apply_decision"]
