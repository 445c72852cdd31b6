"""
Composer checks — run ``composer audit`` / ``composer outdated``.

The checkers are opaque subprocesses that print JSON.  This module only
runs them and applies their exit-code conventions; parsing lives in
``advisory``.  Each call is bounded by ``ComposerSettings.timeout`` and
is never retried.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from phpscan.core.models.config import ComposerSettings

logger = logging.getLogger(__name__)


class ToolError(Exception):
    """Raised when an external checker cannot produce usable output."""


def _run(
    args: list[str],
    cwd: Path,
    timeout: int,
) -> subprocess.CompletedProcess[str]:
    """Run a command and return the result, mapping launch failures to ToolError."""
    logger.debug("Running %s (cwd=%s, timeout=%ss)", " ".join(args), cwd, timeout)
    try:
        return subprocess.run(
            args,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise ToolError(f"{' '.join(args)} timed out after {timeout}s") from e
    except OSError as e:
        raise ToolError(f"Failed to run {args[0]}: {e}") from e


def run_composer_audit(project_root: Path, settings: ComposerSettings) -> str:
    """Raw JSON from ``composer audit --format=json``.

    composer exits non-zero when advisories are found, so the exit code
    is not checked; an empty stdout is the failure signal.
    """
    r = _run([*settings.command, "audit", "--format=json"], project_root, settings.timeout)
    if not r.stdout.strip():
        detail = r.stderr.strip()
        message = "composer audit returned empty output"
        raise ToolError(f"{message}: {detail}" if detail else message)
    return r.stdout


def run_composer_outdated(project_root: Path, settings: ComposerSettings) -> str:
    """Raw JSON from ``composer outdated --format=json`` ('' when silent).

    Exit code 1 means "outdated packages found" and is accepted.
    """
    r = _run([*settings.command, "outdated", "--format=json"], project_root, settings.timeout)
    if r.returncode not in (0, 1):
        raise ToolError(
            f"Error running composer outdated (exit {r.returncode}): "
            f"{r.stderr.strip() or r.stdout.strip()}"
        )
    return r.stdout or ""
