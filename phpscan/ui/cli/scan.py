"""
CLI commands for project scans — inventory and line counts.

Thin wrappers over ``phpscan.core.use_cases.report``.
"""

from __future__ import annotations

from pathlib import Path

import click

from phpscan.ui.cli._common import emit_report, load_scan_config

_PROJECT = click.argument(
    "project_path",
    type=click.Path(file_okay=False, path_type=Path),
)


@click.group()
def scan() -> None:
    """Scan — file inventory and lines of code."""


@scan.command("inventory")
@_PROJECT
@click.pass_context
def inventory(ctx: click.Context, project_path: Path) -> None:
    """Count scripts, JSON and other files."""
    from phpscan.core.use_cases.report import build_report

    config = load_scan_config(ctx, project_path)
    emit_report(build_report(project_path, sections=["inventory"], config=config))


@scan.command("loc")
@_PROJECT
@click.option(
    "--sniff/--no-sniff",
    "sniff",
    default=None,
    help="Only count .php files that contain a PHP open tag (default: from config).",
)
@click.pass_context
def loc(ctx: click.Context, project_path: Path, sniff: bool | None) -> None:
    """Count lines of code per file and per extension."""
    from phpscan.core.use_cases.report import build_report

    config = load_scan_config(ctx, project_path)
    if sniff is not None:
        config = config.model_copy(update={"content_sniff_php": sniff})
    emit_report(build_report(project_path, sections=["loc"], config=config))


@scan.command("all")
@_PROJECT
@click.pass_context
def scan_all(ctx: click.Context, project_path: Path) -> None:
    """Inventory, line counts and security audit in one report."""
    from phpscan.core.use_cases.report import ALL_SECTIONS, build_report

    config = load_scan_config(ctx, project_path)
    emit_report(build_report(project_path, sections=ALL_SECTIONS, config=config))
