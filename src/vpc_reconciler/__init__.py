"""Shared VPC Reconciler - quota-aware VPC reuse decisions for deployments."""

__version__ = "0.1.0"
