"""Decision reporting: terminal display and file export."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import yaml
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..models.inventory_snapshot import InventorySnapshot
from ..models.quota_policy import QuotaPolicy
from ..models.resource_decision import DecisionKind, ResourceDecision

DECISION_STYLES = {
    DecisionKind.REUSE_EXACT: ("green", "✓ Reusing existing VPC"),
    DecisionKind.CREATE_NEW: ("cyan", "+ Creating new VPC"),
    DecisionKind.REUSE_FALLBACK: ("yellow", "⚠ Reusing fallback VPC"),
    DecisionKind.FAILURE: ("red", "✗ Cannot provision VPC"),
}


class DecisionReporter:
    """Format, display, and export resolution decisions."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize decision reporter.

        Args:
            console: Rich console instance (creates new one if not provided)
        """
        self.console = console or Console()

    def display(
        self,
        decision: ResourceDecision,
        snapshot: Optional[InventorySnapshot] = None,
        policy: Optional[QuotaPolicy] = None,
    ) -> None:
        """Display a decision with the inventory it was based on."""
        style, title = DECISION_STYLES[decision.kind]

        lines = [f"[bold]{title}[/bold]"]
        lines.extend(self._describe(decision))
        if snapshot is not None and policy is not None and not snapshot.has_exact_match:
            lines.append(f"Quota usage: {snapshot.total_count}/{policy.max_allowed}")

        self.console.print()
        self.console.print(Panel("\n".join(lines), style=style))

        if snapshot is not None and snapshot.all_in_region:
            self.console.print(self.build_vpc_table(snapshot, highlight=decision.resource_id))

    def _describe(self, decision: ResourceDecision) -> list:
        data = decision.to_dict()
        if decision.kind == DecisionKind.REUSE_EXACT:
            return [f"VPC ID: {data['id']}"]
        if decision.kind == DecisionKind.CREATE_NEW:
            return [
                f"Name tag: {data['desired_name_tag']}",
                f"Availability zones: {', '.join(data['availability_zones'])}",
            ]
        if decision.kind == DecisionKind.REUSE_FALLBACK:
            return [f"VPC ID: {data['id']} (Name={data['observed_name_tag']})", data["warning"]]
        return [f"Reason: {data['reason']}"]

    def build_vpc_table(self, snapshot: InventorySnapshot, highlight: Optional[str] = None) -> Table:
        """Build a table of the VPCs in a snapshot, listing order preserved."""
        table = Table(title=f"VPCs in {snapshot.region or 'region'}", show_header=True, header_style="bold")
        table.add_column("VPC ID", style="cyan")
        table.add_column("Name")
        table.add_column("CIDR")
        table.add_column("State")
        table.add_column("Default")

        for record in snapshot.all_in_region:
            row_style = "bold" if record.id == highlight else None
            table.add_row(
                record.id,
                record.name_tag or "[dim]-[/dim]",
                record.cidr_block or "",
                record.state,
                "yes" if record.is_default else "",
                style=row_style,
            )
        return table

    def display_inventory(self, snapshot: InventorySnapshot, policy: QuotaPolicy) -> None:
        """Display region inventory with quota usage."""
        used = snapshot.total_count
        color = "red" if policy.is_exhausted(used) else "green"
        self.console.print(self.build_vpc_table(snapshot))
        self.console.print(
            f"\nQuota usage: [{color}]{used}/{policy.max_allowed}[/{color}] "
            f"({policy.headroom(used)} remaining)"
        )
        if snapshot.tagged_matches:
            ids = ", ".join(r.id for r in snapshot.tagged_matches)
            self.console.print(f"Name tag matches: [cyan]{ids}[/cyan]")

    def build_report(
        self,
        decision: ResourceDecision,
        snapshot: Optional[InventorySnapshot] = None,
        policy: Optional[QuotaPolicy] = None,
    ) -> Dict[str, Any]:
        """Build the export document for a decision."""
        report: Dict[str, Any] = {
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "decision": decision.to_dict(),
        }
        if policy is not None:
            report["quota_max"] = policy.max_allowed
        if snapshot is not None:
            report["inventory"] = snapshot.to_dict()
        return report

    def export_json(self, report: Dict[str, Any], filepath: str) -> None:
        with open(filepath, "w") as f:
            json.dump(report, f, indent=2)

    def export_yaml(self, report: Dict[str, Any], filepath: str) -> None:
        with open(filepath, "w") as f:
            yaml.safe_dump(report, f, default_flow_style=False, sort_keys=False)
