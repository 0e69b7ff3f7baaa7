"""Main CLI entry point using Typer."""

import logging
import sys
from typing import List, Optional

import typer
from rich.console import Console

from ..aws.client import create_session
from ..aws.credentials import CredentialValidationError, validate_credentials
from ..config import ReconcilerConfig, parse_zones
from ..errors import ConfigurationError, ProviderError
from ..inventory.client import VpcInventoryClient
from ..models.inventory_snapshot import InventorySnapshot
from ..models.quota_policy import QuotaPolicy
from ..reporting.reporter import DecisionReporter
from ..resolution.engine import ResolutionEngine
from ..utils.logging import setup_logging

logger = logging.getLogger(__name__)

EXIT_CONFIG_ERROR = 1
EXIT_PROVIDER_ERROR = 2
EXIT_QUOTA_EXHAUSTED = 3

# Create Typer app
app = typer.Typer(
    name="vpcrecon",
    help="Shared VPC Reconciler - quota-aware VPC reuse decisions for deployments",
    add_completion=False,
)

# Create Rich console for output
console = Console()

# Global config
config: Optional[ReconcilerConfig] = None


@app.callback()
def main(
    config_file: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML config file (default: $VPC_RECONCILER_CONFIG or ~/.vpc-reconciler/config.yaml)",
    ),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="AWS profile name"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output except errors"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
):
    """Shared VPC Reconciler - quota-aware VPC reuse decisions for deployments."""
    global config

    try:
        config = ReconcilerConfig.load(config_file)
    except ConfigurationError as e:
        console.print(f"✗ Configuration error: {e}", style="bold red")
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    # Override with CLI options
    if profile:
        config.aws_profile = profile

    # Setup logging
    log_level = "ERROR" if quiet else ("DEBUG" if verbose else config.log_level)
    setup_logging(level=log_level, verbose=verbose)

    # Disable colors if requested
    if no_color:
        console.no_color = True


@app.command()
def version():
    """Show version information."""
    import boto3

    from .. import __version__

    console.print(f"vpc-reconciler version {__version__}")
    console.print(f"Python {sys.version.split()[0]}")
    console.print(f"boto3 {boto3.__version__}")


def _loaded_config() -> ReconcilerConfig:
    if config is None:
        raise ConfigurationError("configuration was not loaded")
    return config


def _apply_overrides(
    name: Optional[str],
    zones: Optional[List[str]],
    region: Optional[str],
    quota_max: Optional[int],
) -> ReconcilerConfig:
    cfg = _loaded_config()
    overrides = {
        "expected_name_tag": name,
        "availability_zones": [z for value in zones for z in parse_zones(value)] if zones else None,
        "region": region,
        "quota_max": quota_max,
    }
    cfg.apply(overrides)
    cfg.validate()
    return cfg


@app.command()
def resolve(
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Expected Name tag of the shared VPC"),
    zones: Optional[List[str]] = typer.Option(
        None, "--az", help="Availability zone for a new VPC (repeatable or comma-separated)"
    ),
    region: Optional[str] = typer.Option(None, "--region", "-r", help="AWS region"),
    quota_max: Optional[int] = typer.Option(None, "--quota-max", help="VPCs allowed in the region"),
    export: Optional[str] = typer.Option(None, "--export", help="Export the decision to a file"),
    format: str = typer.Option("json", "--format", "-f", help="Export format: json or yaml"),
):
    """Decide whether to reuse, create, or fall back to an existing VPC.

    Exit codes: 0 reuse or create, 1 configuration error, 2 AWS error,
    3 quota exhausted with nothing to reuse.

    Examples:
        # Resolve the shared VPC in sa-east-1
        vpcrecon resolve --name shared-vpc --az sa-east-1a --az sa-east-1b --region sa-east-1

        # Export the decision for the deployment step
        vpcrecon resolve --name shared-vpc --az sa-east-1a --region sa-east-1 --export decision.json
    """
    if format.lower() not in ("json", "yaml"):
        console.print(f"✗ Invalid format: {format}. Must be 'json' or 'yaml'", style="bold red")
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    try:
        cfg = _apply_overrides(name, zones, region, quota_max)
        policy = QuotaPolicy(max_allowed=cfg.quota_max)

        session = create_session(profile_name=cfg.aws_profile, region_name=cfg.region)
        inventory = VpcInventoryClient(
            region=cfg.region,
            session=session,
            connect_timeout=cfg.connect_timeout,
            read_timeout=cfg.read_timeout,
        )
        engine = ResolutionEngine(inventory, policy)
        decision = engine.resolve(cfg.expected_name_tag, cfg.availability_zones)

    except ConfigurationError as e:
        console.print(f"✗ Configuration error: {e}", style="bold red")
        raise typer.Exit(code=EXIT_CONFIG_ERROR)
    except ProviderError as e:
        console.print(f"✗ AWS error during {e.operation} in {e.region}: {e}", style="bold red")
        logger.debug("Provider error in resolve command", exc_info=True)
        raise typer.Exit(code=EXIT_PROVIDER_ERROR)

    reporter = DecisionReporter(console)
    reporter.display(decision, engine.last_snapshot, policy)

    if export:
        report = reporter.build_report(decision, engine.last_snapshot, policy)
        if format.lower() == "json":
            reporter.export_json(report, export)
        else:
            reporter.export_yaml(report, export)
        console.print(f"\n✓ Exported decision to: [cyan]{export}[/cyan] ({format.upper()})")

    if decision.is_fatal:
        console.print(
            "\nRaise the VPC quota, delete unused VPCs, or tag an existing VPC with a Name tag.",
            style="yellow",
        )
        raise typer.Exit(code=EXIT_QUOTA_EXHAUSTED)


@app.command()
def inventory(
    region: Optional[str] = typer.Option(None, "--region", "-r", help="AWS region"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Highlight VPCs with this Name tag"),
    quota_max: Optional[int] = typer.Option(None, "--quota-max", help="VPCs allowed in the region"),
):
    """List VPCs in a region with quota usage."""
    try:
        cfg = _loaded_config()
        cfg.apply({"region": region, "quota_max": quota_max})
        if not cfg.region:
            raise ConfigurationError("region is required")
        policy = QuotaPolicy(max_allowed=cfg.normalize_quota())

        session = create_session(profile_name=cfg.aws_profile, region_name=cfg.region)
        client = VpcInventoryClient(
            region=cfg.region,
            session=session,
            connect_timeout=cfg.connect_timeout,
            read_timeout=cfg.read_timeout,
        )
        identity = validate_credentials(cfg.aws_profile)
        expected = name or cfg.expected_name_tag
        tagged = client.find_by_name_tag(expected) if expected else []
        snapshot = InventorySnapshot(tagged_matches=tagged, all_in_region=client.list_all(), region=cfg.region)

    except ConfigurationError as e:
        console.print(f"✗ Configuration error: {e}", style="bold red")
        raise typer.Exit(code=EXIT_CONFIG_ERROR)
    except CredentialValidationError as e:
        console.print(f"✗ {e}", style="bold red")
        raise typer.Exit(code=EXIT_PROVIDER_ERROR)
    except ProviderError as e:
        console.print(f"✗ AWS error during {e.operation} in {e.region}: {e}", style="bold red")
        raise typer.Exit(code=EXIT_PROVIDER_ERROR)

    console.print(f"Account: [cyan]{identity['account_id']}[/cyan]  Region: [cyan]{cfg.region}[/cyan]\n")
    DecisionReporter(console).display_inventory(snapshot, policy)


def cli_main():
    """Entry point for console script."""
    app()


if __name__ == "__main__":
    cli_main()
