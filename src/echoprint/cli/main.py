"""CLI entry point — the `echoprint` command."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from echoprint.core.base import RiskLevel, Severity
from echoprint.core.scoring import get_risk_color, get_risk_description
from echoprint.detection.detector import detect_all, detect_one
from echoprint.detection.results import TargetDetectionResult
from echoprint.signals.bundle import (
    PageContext,
    SignalBundle,
    load_page_context,
    load_signal_bundle,
)
from echoprint.targets.profile import AdversaryProfile, TargetCategory
from echoprint.targets.registry import (
    CatalogError,
    get_all_profiles,
    get_profiles_by_category,
    get_profiles_by_risk,
    get_target_profile,
)

console = Console()

SEVERITY_COLORS = {
    Severity.CRITICAL: "red bold",
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "blue",
}


def _fail(message: str) -> NoReturn:
    console.print(f"[red]{escape(message)}[/red]")
    sys.exit(1)


def _load_catalog() -> tuple[AdversaryProfile, ...]:
    try:
        return get_all_profiles()
    except (FileNotFoundError, CatalogError) as e:
        _fail(str(e))


def _load_bundle(path: Path) -> SignalBundle:
    try:
        return load_signal_bundle(path)
    except ValidationError as e:
        _fail(f"Invalid signal bundle {path}: {e}")


def _load_context(path: Path | None) -> PageContext | None:
    if path is None:
        return None
    try:
        return load_page_context(path)
    except ValidationError as e:
        _fail(f"Invalid page context {path}: {e}")


def _risk_text(level: RiskLevel) -> str:
    color = get_risk_color(level)
    return f"[{color}]{level.value}[/{color}]"


def _render_result(result: TargetDetectionResult) -> None:
    """Render one profile's signals and recommendations with Rich."""
    profile = result.profile
    status = "[red]detected[/red]" if result.detected else "[dim]not detected[/dim]"
    console.print(
        f"\n[bold]{escape(profile.name)}[/bold] ({escape(profile.id)}) — "
        f"risk {result.risk_score}/100, confidence {result.confidence}% — {status}"
    )

    if not result.signals:
        console.print("  [green]No signals found.[/green]")
    for signal in result.signals:
        style = SEVERITY_COLORS.get(signal.severity, "")
        console.print(
            f"  [{style}][{signal.severity.value.upper()}][/{style}] "
            f"{signal.type.value}: {escape(signal.name)}"
        )
        console.print(f"    [dim]{escape(signal.description)}[/dim]")

    for recommendation in result.recommendations:
        console.print(f"  [dim]Recommendation:[/dim] {escape(recommendation)}")


@click.group()
@click.version_option(package_name="echoprint")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """echoprint — estimate which tracking platforms are active on a page."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("bundle_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--page-context",
    "-p",
    "context_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON file with observed domains, scripts, cookies and localStorage keys.",
)
@click.option("--format", "output_format", type=click.Choice(["rich", "json"]), default="rich")
def scan(bundle_path: Path, context_path: Path | None, output_format: str) -> None:
    """Score every known tracking platform against a collected signal bundle."""
    catalog = _load_catalog()
    bundle = _load_bundle(bundle_path)
    page_context = _load_context(context_path)

    report = detect_all(bundle, page_context, catalog=catalog)

    if output_format == "json":
        click.echo(json.dumps(report.model_dump(mode="json"), indent=2))
        return

    console.print(Panel("[bold]Target Detection Results[/bold]", style="blue"))

    table = Table(title="Surfaced Platforms")
    table.add_column("Platform", style="bold")
    table.add_column("Risk Level")
    table.add_column("Score", justify="right")
    table.add_column("Confidence", justify="right")
    table.add_column("Detected", justify="center")

    for result in report.results:
        table.add_row(
            escape(result.profile.name),
            _risk_text(result.profile.risk_level),
            f"{result.risk_score}/100",
            f"{result.confidence}%",
            "[red]yes[/red]" if result.detected else "[dim]no[/dim]",
        )

    if report.results:
        console.print(table)
        for result in report.results:
            _render_result(result)
    else:
        console.print("[green]No tracking platforms surfaced.[/green]")

    if report.critical_targets:
        names = ", ".join(escape(p.name) for p in report.critical_targets)
        console.print(f"\n[bold]Critical targets:[/bold] {names}")

    console.print(
        f"\n[bold]Overall Risk:[/bold] {_risk_text(report.overall_risk)} "
        f"({report.total_risk_score}/100) — {get_risk_description(report.overall_risk)}\n"
    )


@cli.command()
@click.argument("profile_id")
@click.argument("bundle_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--format", "output_format", type=click.Choice(["rich", "json"]), default="rich")
def check(profile_id: str, bundle_path: Path, output_format: str) -> None:
    """Re-check a single platform against a signal bundle (no page context)."""
    catalog = _load_catalog()
    bundle = _load_bundle(bundle_path)

    result = detect_one(bundle, profile_id, catalog=catalog)
    if result is None:
        _fail(f"Unknown profile: {profile_id}")

    if output_format == "json":
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
    else:
        _render_result(result)


@cli.command()
@click.option(
    "--category",
    type=click.Choice([c.value for c in TargetCategory]),
    default=None,
    help="Only list platforms in this category.",
)
@click.option(
    "--risk",
    type=click.Choice([r.value for r in RiskLevel]),
    default=None,
    help="Only list platforms with this risk level.",
)
def profiles(category: str | None, risk: str | None) -> None:
    """List the known tracking platforms."""
    catalog = _load_catalog()
    selected = list(catalog)
    if category:
        selected = get_profiles_by_category(TargetCategory(category), selected)
    if risk:
        selected = get_profiles_by_risk(RiskLevel(risk), selected)

    if not selected:
        console.print("[yellow]No matching profiles.[/yellow]")
        return

    table = Table(title="Tracking Platforms")
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Risk Level")
    table.add_column("Indicators", justify="right")

    for profile in selected:
        infra = profile.tracking_infra
        indicators = (
            len(infra.primary_domains) + len(infra.third_party_trackers) + len(infra.js_libraries)
        )
        table.add_row(
            escape(profile.id),
            escape(profile.name),
            profile.category.value,
            _risk_text(profile.risk_level),
            str(indicators),
        )

    console.print(table)


@cli.command()
@click.argument("profile_id")
def info(profile_id: str) -> None:
    """Show what is known about a tracking platform."""
    profile = get_target_profile(profile_id, _load_catalog())
    if profile is None:
        _fail(f"Unknown profile: {profile_id}")

    header = f"[bold]{escape(profile.name)}[/bold]\n{escape(profile.description)}"
    console.print(Panel(header, style="blue"))
    console.print(
        f"Category: {profile.category.value} · Risk: {_risk_text(profile.risk_level)}"
    )

    infra = profile.tracking_infra
    sections = [
        ("Primary domains", infra.primary_domains),
        ("Third-party trackers", infra.third_party_trackers),
        ("Scripts", infra.js_libraries),
        ("Storage keys", profile.storage_keys),
        ("API endpoints", profile.api_endpoints),
        ("Detection triggers", profile.detection_triggers),
    ]
    for title, values in sections:
        if values:
            console.print(f"\n[bold]{title}:[/bold] {escape(', '.join(values))}")

    methods = [name for name, enabled in profile.fingerprint_methods.model_dump().items() if enabled]
    if methods:
        console.print(f"\n[bold]Fingerprinting:[/bold] {', '.join(methods)}")

    if profile.known_vulnerabilities:
        table = Table(title="Known Issues")
        table.add_column("ID", style="bold")
        table.add_column("Description")
        table.add_column("Status", style="yellow")
        for vuln in profile.known_vulnerabilities:
            table.add_row(escape(vuln.id), escape(vuln.description), escape(vuln.status))
        console.print(table)

    if profile.data_transfer_destination:
        destinations = escape(", ".join(profile.data_transfer_destination))
        console.print(f"\n[bold]Data transferred to:[/bold] {destinations}")
    if profile.region_specific:
        console.print(f"[bold]Regions:[/bold] {escape(', '.join(profile.region_specific))}")
