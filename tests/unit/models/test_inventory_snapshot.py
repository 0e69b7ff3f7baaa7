"""Tests for InventorySnapshot model."""

from __future__ import annotations

import pytest

from tests.fixtures.vpcs import create_record
from vpc_reconciler.models.inventory_snapshot import InventorySnapshot


class TestInventorySnapshot:
    """Tests for InventorySnapshot."""

    def test_total_count_defaults_to_listing_length(self) -> None:
        """Test total_count is derived from all_in_region when omitted."""
        snapshot = InventorySnapshot(all_in_region=[create_record("vpc-1"), create_record("vpc-2")])
        assert snapshot.total_count == 2

    def test_explicit_total_count_is_kept(self) -> None:
        """Test an explicit total_count overrides the listing length."""
        snapshot = InventorySnapshot(all_in_region=[], total_count=5)
        assert snapshot.total_count == 5

    def test_negative_total_count_rejected(self) -> None:
        """Test negative counts are invalid."""
        with pytest.raises(ValueError):
            InventorySnapshot(total_count=-1)

    def test_sequences_are_stored_as_tuples(self) -> None:
        """Test list input is frozen into tuples."""
        snapshot = InventorySnapshot(tagged_matches=[create_record("vpc-1", "a")])
        assert isinstance(snapshot.tagged_matches, tuple)
        assert snapshot.has_exact_match is True

    def test_first_named_follows_listing_order(self) -> None:
        """Test first_named skips unnamed records and keeps listing order."""
        snapshot = InventorySnapshot(
            all_in_region=[
                create_record("vpc-untagged"),
                create_record("vpc-blank", ""),
                create_record("vpc-b", "beta"),
                create_record("vpc-a", "alpha"),
            ]
        )
        first = snapshot.first_named()
        assert first is not None
        assert first.id == "vpc-b"

    def test_first_named_none_when_nothing_named(self) -> None:
        """Test first_named returns None without named records."""
        snapshot = InventorySnapshot(all_in_region=[create_record("vpc-1")])
        assert snapshot.first_named() is None

    def test_equal_snapshots_ignore_capture_time(self) -> None:
        """Test snapshots with the same content compare equal."""
        records = [create_record("vpc-1", "a")]
        assert InventorySnapshot(all_in_region=records) == InventorySnapshot(all_in_region=records)

    def test_to_dict(self) -> None:
        """Test dictionary conversion."""
        snapshot = InventorySnapshot(
            tagged_matches=[create_record("vpc-1", "a")],
            all_in_region=[create_record("vpc-1", "a")],
            region="sa-east-1",
        )
        data = snapshot.to_dict()

        assert data["region"] == "sa-east-1"
        assert data["total_count"] == 1
        assert data["tagged_matches"][0]["id"] == "vpc-1"
        assert "captured_at" in data


class TestUnlistedSnapshot:
    """Snapshots built from the Name tag query alone."""

    def test_total_count_stays_unknown(self) -> None:
        """Test total_count is None rather than a misleading zero."""
        snapshot = InventorySnapshot(tagged_matches=[create_record("vpc-9", "a")], region_listed=False)

        assert snapshot.total_count is None
        data = snapshot.to_dict()
        assert data["total_count"] is None
        assert data["region_listed"] is False

    def test_cannot_carry_region_inventory(self) -> None:
        """Test an unlisted snapshot rejects region records or counts."""
        with pytest.raises(ValueError):
            InventorySnapshot(all_in_region=[create_record("vpc-1")], region_listed=False)
        with pytest.raises(ValueError):
            InventorySnapshot(total_count=3, region_listed=False)
