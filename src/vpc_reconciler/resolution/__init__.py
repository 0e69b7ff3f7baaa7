"""Quota-aware VPC resolution."""

from __future__ import annotations

from .engine import ResolutionEngine, decide, resolve_from_config

__all__ = ["ResolutionEngine", "decide", "resolve_from_config"]
