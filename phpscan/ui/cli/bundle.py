"""
CLI command for PHAR bundling.

Thin wrapper over ``phpscan.core.services.bundle_ops``.
"""

from __future__ import annotations

from pathlib import Path

import click

from phpscan.ui.cli._common import emit_report, load_scan_config


@click.command()
@click.argument("project_path", type=click.Path(file_okay=False, path_type=Path))
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Archive path (default: <project>/build/bundle.phar).",
)
@click.pass_context
def bundle(ctx: click.Context, project_path: Path, output_path: Path | None) -> None:
    """Build a PHAR archive of the project and report its size."""
    from phpscan.core.services.bundle_ops import run_bundle

    config = load_scan_config(ctx, project_path)
    emit_report(run_bundle(project_path, output_path, config))
