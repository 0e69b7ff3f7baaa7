"""Exception hierarchy for VPC reconciliation.

Library code raises these; only the CLI turns them into exit codes.
"""

from __future__ import annotations

from typing import Optional


class ReconcilerError(Exception):
    """Base class for all reconciler errors."""


class ConfigurationError(ReconcilerError):
    """A required option is missing, empty, or malformed.

    Raised before any provider call is made.
    """


class ProviderError(ReconcilerError):
    """Network, auth, or API failure while querying the provider.

    Never retried. Resolution is aborted rather than decided from a partial
    inventory.

    Attributes:
        operation: Provider operation that failed (e.g., "describe_vpcs")
        region: AWS region the call was issued against
        error_code: AWS error code when the provider returned one
    """

    def __init__(
        self,
        message: str,
        operation: str,
        region: str,
        error_code: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.region = region
        self.error_code = error_code


class QuotaExhaustedError(ReconcilerError):
    """Quota is exhausted and no reusable VPC exists.

    Recoverable only by operator action: raise the quota, delete unused VPCs,
    or tag an existing VPC manually.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
