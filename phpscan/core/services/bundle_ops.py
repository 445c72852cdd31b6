"""
PHAR bundling — package a PHP project and report the archive size.

A thin wrapper around the ``php`` binary: it generates a build script
inside the project (``Phar::buildFromDirectory`` works from the script's
own directory), runs it under a timeout, and measures the result.  The
build script is always removed afterwards, success or not.
"""

from __future__ import annotations

import json
import logging
import subprocess
import textwrap
from pathlib import Path

from phpscan.core.models.config import BundleSettings, ScanConfig
from phpscan.core.models.scan import ScanReport
from phpscan.core.use_cases.report import new_report

logger = logging.getLogger(__name__)


class BundleError(Exception):
    """Raised when a bundle cannot be built (missing php, no entry point, ...)."""


_BUILD_SCRIPT = textwrap.dedent("""\
    <?php
    if (ini_get('phar.readonly')) {
        fwrite(STDERR, "phar.readonly is enabled. Please disable it in php.ini.\\n");
        exit(1);
    }

    $projectDir = __DIR__;
    $entryPoint = %(entry_point)s;
    $outputPath = %(output_path)s;

    try {
        if (file_exists($outputPath)) {
            unlink($outputPath);
        }
        $phar = new Phar($outputPath, 0, 'bundle.phar');
        $phar->startBuffering();
        $phar->buildFromDirectory($projectDir, '/\\.(php)$/i');
        $phar->setStub("<?php Phar::mapPhar('bundle.phar'); include 'phar://bundle.phar/{$entryPoint}'; __HALT_COMPILER(); ?>");
        $phar->stopBuffering();
        echo "PHAR bundle built successfully at: $outputPath\\n";
    } catch (Exception $e) {
        fwrite(STDERR, "Error building PHAR: " . $e->getMessage() . "\\n");
        exit(1);
    }
""")


def detect_entry_point(project_root: Path, candidates: list[str]) -> str:
    """First candidate file present under the project, as ``./relative``."""
    for candidate in candidates:
        if (project_root / candidate).is_file():
            logger.info("Found entry point: %s", candidate)
            return f"./{candidate}"
    raise BundleError(
        "Unable to detect PHP entry point. Searched common candidate files "
        f"({', '.join(candidates)}) but found none."
    )


def ensure_phar_writable(settings: BundleSettings) -> None:
    """Fail unless ``phar.readonly`` is disabled for the php binary."""
    try:
        r = subprocess.run(
            [*settings.php_command, "-r", "echo ini_get('phar.readonly');"],
            capture_output=True,
            text=True,
            timeout=30,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        raise BundleError(f"Failed to run PHP: {e}") from e

    if r.returncode != 0:
        raise BundleError(f"Failed to run PHP: {r.stderr.strip() or r.returncode}")
    if r.stdout.strip() != "0":
        raise BundleError(
            'PHP configuration "phar.readonly" is enabled. Please disable it '
            "in php.ini (set to 0) before bundling."
        )


def render_build_script(entry_point: str, output_path: Path) -> str:
    return _BUILD_SCRIPT % {
        "entry_point": json.dumps(entry_point),
        "output_path": json.dumps(str(output_path.resolve())),
    }


def run_bundler(project_root: Path, script_path: Path, settings: BundleSettings) -> None:
    logger.info("Starting PHAR bundling in %s", project_root)
    try:
        r = subprocess.run(
            [*settings.php_command, str(script_path)],
            cwd=str(project_root),
            capture_output=True,
            text=True,
            timeout=settings.timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise BundleError(f"PHAR bundling timed out after {settings.timeout}s") from e
    except OSError as e:
        raise BundleError(f"PHAR bundling failed: {e}") from e

    if r.returncode != 0:
        raise BundleError(f"PHAR bundling failed: {r.stdout.strip()}\n{r.stderr.strip()}")
    logger.debug("%s", r.stdout.strip())


def format_size(size: int) -> str:
    return f"{size / 1024:.2f} KB"


def run_bundle(
    project_path: Path | str,
    output_path: Path | str | None = None,
    config: ScanConfig | None = None,
) -> ScanReport:
    """Build a PHAR of the project and report its size.

    Args:
        project_path: PHP project root.
        output_path: Archive path (default: ``<project>/build/bundle.phar``).
        config: Scan configuration (defaults when None).

    Returns:
        ScanReport with ``bundleSize`` / ``bundleSizeFormatted`` on success,
        ``status: failure`` and ``error`` otherwise.
    """
    config = config or ScanConfig()
    settings = config.bundle
    root = Path(project_path)
    output = Path(output_path) if output_path else root / "build" / "bundle.phar"
    report = new_report(project_path)
    script_path = root / settings.build_script_name

    try:
        if not root.is_dir():
            raise BundleError(f"Project path is not a directory: {project_path}")

        ensure_phar_writable(settings)
        entry_point = detect_entry_point(root, settings.entry_candidates)

        output.parent.mkdir(parents=True, exist_ok=True)
        script_path.write_text(render_build_script(entry_point, output), encoding="utf-8")

        run_bundler(root, script_path, settings)

        if not output.is_file():
            raise BundleError("Bundle PHAR file was not created.")
        size = output.stat().st_size
        report.bundle_size = size
        report.bundle_size_formatted = format_size(size)
        report.status = "success"
        logger.info("Bundle complete: %s", report.bundle_size_formatted)
    except (BundleError, OSError) as e:
        report.status = "failure"
        report.error = str(e)
        logger.error("%s", e)
    finally:
        try:
            script_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Failed to remove build script %s: %s", script_path, e)

    return report
