"""
phpscan — CLI entrypoint.

Usage:
    python -m phpscan.main --help
    phpscan scan inventory path/to/project
    phpscan security audit path/to/project
"""

from __future__ import annotations

import os
from pathlib import Path

import click

from phpscan import __version__
from phpscan.core.observability.logging_config import resolve_level, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="phpscan")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Only log errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to phpscan.yml (default: search upward from the project).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """phpscan — inventory, line counts and security audit for PHP projects."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get("PHPSCAN_LOG_FILE"),
        log_file_level=os.environ.get("PHPSCAN_LOG_FILE_LEVEL"),
    )


# ── Register sub-command groups from phpscan/ui/cli/ ──────────────

from phpscan.ui.cli.bundle import bundle  # noqa: E402
from phpscan.ui.cli.scan import scan  # noqa: E402
from phpscan.ui.cli.security import security  # noqa: E402

cli.add_command(scan)
cli.add_command(security)
cli.add_command(bundle)


if __name__ == "__main__":
    cli()
