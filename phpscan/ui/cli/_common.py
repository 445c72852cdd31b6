"""Shared helpers for the CLI command modules."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from phpscan.core.config.loader import ConfigError, resolve_config
from phpscan.core.models.config import ScanConfig
from phpscan.core.models.scan import ScanReport


def load_scan_config(ctx: click.Context, project_path: Path) -> ScanConfig:
    """Config from --config or the nearest phpscan.yml; exits 1 if invalid."""
    try:
        return resolve_config(ctx.obj.get("config_path"), project_path)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)


def emit_report(report: ScanReport) -> None:
    """Print the report as JSON on stdout; exit 1 when it failed."""
    click.echo(json.dumps(report.to_dict(), indent=2))
    if not report.ok:
        sys.exit(1)
