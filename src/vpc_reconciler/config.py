"""Configuration loading.

Precedence, lowest to highest: defaults, YAML config file, environment
variables, CLI options (applied by the caller).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigurationError
from .models.quota_policy import DEFAULT_VPC_QUOTA

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".vpc-reconciler" / "config.yaml"
CONFIG_PATH_ENV = "VPC_RECONCILER_CONFIG"

# Values the shared-VPC deployment template ships with. Examples only, never
# applied implicitly.
TEMPLATE_DEFAULTS: Dict[str, Any] = {
    "expected_name_tag": "shared-vpc",
    "availability_zones": ["sa-east-1a", "sa-east-1b"],
    "region": "sa-east-1",
}

ENV_VARS = {
    "expected_name_tag": "VPC_RECONCILER_NAME_TAG",
    "availability_zones": "VPC_RECONCILER_AZS",
    "region": "VPC_RECONCILER_REGION",
    "quota_max": "VPC_RECONCILER_QUOTA_MAX",
    "aws_profile": "AWS_PROFILE",
    "log_level": "VPC_RECONCILER_LOG_LEVEL",
}

STRING_OPTIONS = ("expected_name_tag", "region", "aws_profile", "log_level")


def parse_zones(value: str) -> List[str]:
    """Split a comma-separated zone list, dropping blanks."""
    return [zone.strip() for zone in value.split(",") if zone.strip()]


@dataclass
class ReconcilerConfig:
    """Options recognized by the reconciler.

    Attributes:
        expected_name_tag: Name tag the shared VPC carries (required)
        availability_zones: Zones for a newly created VPC (required)
        region: AWS region to reconcile in (required)
        quota_max: VPCs allowed in the region (default: AWS documented limit)
        aws_profile: AWS profile name (optional)
        log_level: Log level name
        connect_timeout: Provider connect timeout in seconds
        read_timeout: Provider read timeout in seconds
    """

    expected_name_tag: Optional[str] = None
    availability_zones: List[str] = field(default_factory=list)
    region: Optional[str] = None
    quota_max: Any = DEFAULT_VPC_QUOTA
    aws_profile: Optional[str] = None
    log_level: str = "INFO"
    connect_timeout: int = 10
    read_timeout: int = 30

    @classmethod
    def load(cls, path: Optional[str] = None) -> "ReconcilerConfig":
        """Load configuration from file and environment.

        Args:
            path: Explicit YAML config path. Falls back to $VPC_RECONCILER_CONFIG,
                then ~/.vpc-reconciler/config.yaml when it exists.

        Raises:
            ConfigurationError: If an explicitly named file is missing or malformed
        """
        config = cls()

        explicit = path or os.environ.get(CONFIG_PATH_ENV)
        config_path = Path(explicit).expanduser() if explicit else DEFAULT_CONFIG_PATH
        if explicit and not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")
        if config_path.exists():
            config.apply(cls._read_file(config_path))

        config.apply_env(os.environ)
        return config

    @staticmethod
    def _read_file(config_path: Path) -> Dict[str, Any]:
        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a mapping")

        logger.debug(f"Loaded config from {config_path}")
        return data

    def apply(self, values: Dict[str, Any]) -> None:
        """Overlay known keys from a mapping; unknown keys are rejected."""
        known = {f.name for f in fields(self)}
        for key, value in values.items():
            if key not in known:
                raise ConfigurationError(f"Unknown config option: {key}")
            if value is None:
                continue
            if key in STRING_OPTIONS and not isinstance(value, str):
                raise ConfigurationError(f"{key} must be a string, got {value!r}")
            if key == "availability_zones" and isinstance(value, str):
                value = parse_zones(value)
            setattr(self, key, value)

    def apply_env(self, environ: Any) -> None:
        """Overlay values from environment variables."""
        values: Dict[str, Any] = {}
        for key, env_name in ENV_VARS.items():
            if environ.get(env_name):
                values[key] = environ[env_name]

        if "region" not in values:
            region = environ.get("AWS_REGION") or environ.get("AWS_DEFAULT_REGION")
            if region and not self.region:
                values["region"] = region

        self.apply(values)

    def validate(self) -> bool:
        """Validate required options and normalize quota_max to int.

        Returns:
            True if valid

        Raises:
            ConfigurationError: Naming the first invalid option
        """
        for key in STRING_OPTIONS:
            value = getattr(self, key)
            if value is not None and not isinstance(value, str):
                raise ConfigurationError(f"{key} must be a string, got {value!r}")

        if not self.expected_name_tag or not self.expected_name_tag.strip():
            raise ConfigurationError("expected_name_tag is required")

        if not self.availability_zones or not isinstance(self.availability_zones, (list, tuple)):
            raise ConfigurationError("availability_zones must be a non-empty list")
        if any(not isinstance(z, str) or not z.strip() for z in self.availability_zones):
            raise ConfigurationError("availability_zones cannot contain empty zone names")

        if not self.region or not self.region.strip():
            raise ConfigurationError("region is required")

        self.normalize_quota()
        return True

    def normalize_quota(self) -> int:
        """Convert quota_max to a positive int, rejecting fractional values.

        Raises:
            ConfigurationError: If quota_max is not a positive whole number
        """
        if isinstance(self.quota_max, float) and not self.quota_max.is_integer():
            raise ConfigurationError(f"quota_max must be an integer, got {self.quota_max!r}")
        try:
            quota = int(self.quota_max)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"quota_max must be an integer, got {self.quota_max!r}") from e
        if isinstance(self.quota_max, bool) or quota <= 0:
            raise ConfigurationError(f"quota_max must be a positive integer, got {self.quota_max!r}")
        self.quota_max = quota
        return quota
