"""Tests for ResolutionEngine."""

from __future__ import annotations

import logging
from unittest.mock import Mock, patch

import pytest

from tests.fixtures.vpcs import create_ec2_client, create_record, create_vpc
from vpc_reconciler.config import ReconcilerConfig
from vpc_reconciler.errors import ConfigurationError, ProviderError
from vpc_reconciler.inventory.client import VpcInventoryClient
from vpc_reconciler.models.quota_policy import QuotaPolicy
from vpc_reconciler.models.resource_decision import CreateNew, Failure, ReuseExact, ReuseFallback
from vpc_reconciler.resolution.engine import ResolutionEngine, resolve_from_config

ZONES = ["sa-east-1a", "sa-east-1b"]


def _inventory(tagged=None, all_in_region=None) -> Mock:
    inventory = Mock(spec=VpcInventoryClient)
    inventory.region = "sa-east-1"
    inventory.find_by_name_tag.return_value = tagged or []
    inventory.list_all.return_value = all_in_region or []
    return inventory


class TestResolutionEngine:
    """Tests for ResolutionEngine.resolve."""

    def test_exact_match_skips_region_listing(self) -> None:
        """Test list_all is never called when the tag matches."""
        inventory = _inventory(tagged=[create_record("vpc-9", "shared-vpc")])
        engine = ResolutionEngine(inventory, QuotaPolicy(max_allowed=5))

        decision = engine.resolve("shared-vpc", ZONES)

        assert decision == ReuseExact(id="vpc-9")
        inventory.find_by_name_tag.assert_called_once_with("shared-vpc")
        inventory.list_all.assert_not_called()
        assert engine.last_snapshot is not None
        assert engine.last_snapshot.has_exact_match
        assert engine.last_snapshot.total_count is None
        assert engine.last_snapshot.region_listed is False

    def test_create_new_when_headroom(self) -> None:
        """Test 3 of 5 in use resolves to CreateNew."""
        records = [create_record(f"vpc-{i}", f"n{i}") for i in range(3)]
        engine = ResolutionEngine(_inventory(all_in_region=records), QuotaPolicy(max_allowed=5))

        decision = engine.resolve("shared-vpc", ZONES)

        assert decision == CreateNew(desired_name_tag="shared-vpc", availability_zones=tuple(ZONES))
        assert engine.last_snapshot.total_count == 3

    def test_fallback_logged_as_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test fallback is surfaced at warning level."""
        records = [create_record(f"vpc-{i}") for i in range(4)] + [create_record("vpc-1x", "other")]
        engine = ResolutionEngine(_inventory(all_in_region=records), QuotaPolicy(max_allowed=5))

        with caplog.at_level(logging.INFO, logger="vpc_reconciler"):
            decision = engine.resolve("shared-vpc", ZONES)

        assert decision == ReuseFallback(id="vpc-1x", observed_name_tag="other")
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "vpc-1x" in warnings[0].getMessage()

    def test_failure_logged_as_error(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test failure is surfaced at error level."""
        records = [create_record(f"vpc-{i}") for i in range(5)]
        engine = ResolutionEngine(_inventory(all_in_region=records), QuotaPolicy(max_allowed=5))

        with caplog.at_level(logging.INFO, logger="vpc_reconciler"):
            decision = engine.resolve("shared-vpc", ZONES)

        assert isinstance(decision, Failure)
        assert any(r.levelno == logging.ERROR for r in caplog.records)

    @pytest.mark.parametrize(
        "name,zones",
        [
            ("", ZONES),
            ("  ", ZONES),
            ("shared-vpc", []),
            ("shared-vpc", ["sa-east-1a", ""]),
            ("shared-vpc", "sa-east-1a"),
            (2024, ZONES),
            ("shared-vpc", ["sa-east-1a", 3]),
        ],
    )
    def test_invalid_inputs_fail_before_provider_calls(self, name: str, zones) -> None:
        """Test configuration errors are raised before any inventory query."""
        inventory = _inventory()
        engine = ResolutionEngine(inventory, QuotaPolicy())

        with pytest.raises(ConfigurationError):
            engine.resolve(name, zones)

        inventory.find_by_name_tag.assert_not_called()
        inventory.list_all.assert_not_called()

    def test_provider_error_propagates(self) -> None:
        """Test a failed listing aborts resolution."""
        inventory = _inventory()
        inventory.list_all.side_effect = ProviderError("boom", operation="describe_vpcs", region="sa-east-1")
        engine = ResolutionEngine(inventory, QuotaPolicy())

        with pytest.raises(ProviderError):
            engine.resolve("shared-vpc", ZONES)

        assert engine.last_snapshot is None

    def test_rerun_against_unchanged_account_is_idempotent(self) -> None:
        """Test repeated resolutions against the same VPC set agree."""
        ec2 = create_ec2_client([create_vpc(f"vpc-{i}", name="other" if i == 2 else None) for i in range(5)])
        engine = ResolutionEngine(VpcInventoryClient(region="sa-east-1", client=ec2), QuotaPolicy(max_allowed=5))

        first = engine.resolve("shared-vpc", ZONES)
        second = engine.resolve("shared-vpc", ZONES)

        assert first == second == ReuseFallback(id="vpc-2", observed_name_tag="other")

    def test_end_to_end_with_mock_ec2_exact_match(self) -> None:
        """Test the engine against a mocked describe_vpcs with a tagged VPC."""
        ec2 = create_ec2_client([create_vpc("vpc-a", name="other"), create_vpc("vpc-b", name="shared-vpc")])
        engine = ResolutionEngine(VpcInventoryClient(region="sa-east-1", client=ec2), QuotaPolicy(max_allowed=1))

        assert engine.resolve("shared-vpc", ZONES) == ReuseExact(id="vpc-b")


class TestResolveFromConfig:
    """Tests for resolve_from_config."""

    def test_invalid_config_raises_before_client_built(self) -> None:
        """Test validation happens before any AWS client is created."""
        with patch("vpc_reconciler.resolution.engine.VpcInventoryClient") as mock_client_class:
            with pytest.raises(ConfigurationError, match="region"):
                resolve_from_config(ReconcilerConfig(expected_name_tag="shared-vpc", availability_zones=ZONES))

        mock_client_class.assert_not_called()

    @patch("vpc_reconciler.inventory.client.create_boto_client")
    def test_builds_client_from_config(self, mock_create_client: Mock) -> None:
        """Test the configured quota and region drive the decision."""
        mock_create_client.return_value = create_ec2_client([create_vpc("vpc-1", name="other")])
        config = ReconcilerConfig(
            expected_name_tag="shared-vpc",
            availability_zones=ZONES,
            region="sa-east-1",
            quota_max="1",
        )

        decision = resolve_from_config(config)

        assert decision == ReuseFallback(id="vpc-1", observed_name_tag="other")
        assert mock_create_client.call_args.kwargs["region_name"] == "sa-east-1"
