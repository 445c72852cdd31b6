"""
CLI commands for the security audit.

Thin wrappers over ``phpscan.core.services.security_ops``.
"""

from __future__ import annotations

from pathlib import Path

import click

from phpscan.ui.cli._common import emit_report, load_scan_config


@click.group()
def security() -> None:
    """Security — hardcoded secrets, unsafe calls, composer advisories."""


@security.command("audit")
@click.argument("project_path", type=click.Path(file_okay=False, path_type=Path))
@click.option("--timeout", type=int, default=None, help="Seconds allowed per composer call.")
@click.pass_context
def audit(ctx: click.Context, project_path: Path, timeout: int | None) -> None:
    """Run the pattern scan plus composer audit / outdated."""
    from phpscan.core.use_cases.report import build_report

    config = load_scan_config(ctx, project_path)
    if timeout is not None:
        composer = config.composer.model_copy(update={"timeout": timeout})
        config = config.model_copy(update={"composer": composer})

    emit_report(build_report(project_path, sections=["security"], config=config))
