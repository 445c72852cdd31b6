"""
Report use case — run the requested scans and assemble one ScanReport.

The walk feeding inventory / line counts / pattern scan is the dominant
operation: if it cannot run (e.g. the path is not a directory) the
report is ``status: failure`` with the reason in ``error``.  Security
sub-task failures never change ``status``; they stay in-band in the
``security`` block.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path
from typing import Literal

from phpscan.core.models.config import ScanConfig
from phpscan.core.models.scan import ScanReport
from phpscan.core.services.classifier import PathClassifier
from phpscan.core.services.metrics_ops import count_lines, summarize_inventory
from phpscan.core.services.security_ops import run_security_audit
from phpscan.core.services.walker import walk_project

logger = logging.getLogger(__name__)

Section = Literal["inventory", "loc", "security"]
ALL_SECTIONS: tuple[Section, ...] = ("inventory", "loc", "security")


def now_iso() -> str:
    """Current UTC time, ISO-8601 with millisecond precision."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_report(project_path: Path | str) -> ScanReport:
    """Empty envelope, status ``failure`` until the work succeeds."""
    return ScanReport(timestamp=now_iso(), project_path=str(project_path))


def build_report(
    project_path: Path | str,
    *,
    sections: Iterable[Section] = ALL_SECTIONS,
    config: ScanConfig | None = None,
) -> ScanReport:
    """Run the requested sections against ``project_path``.

    Args:
        project_path: Root of the PHP project.
        sections: Any of ``inventory``, ``loc``, ``security``.
        config: Scan configuration (defaults when None).

    Returns:
        A ScanReport; never raises for scan problems.
    """
    config = config or ScanConfig()
    wanted = list(dict.fromkeys(sections))
    root = Path(project_path)
    report = new_report(project_path)

    unknown = [s for s in wanted if s not in ALL_SECTIONS]
    if unknown:
        report.error = f"Unknown report section(s): {', '.join(unknown)}"
        return report

    if not root.is_dir():
        report.error = f"Project path is not a directory: {project_path}"
        logger.error(report.error)
        return report

    try:
        if "inventory" in wanted:
            records = walk_project(root, PathClassifier(config, "inventory"))
            report.inventory = summarize_inventory(records)

        if "loc" in wanted:
            records = walk_project(root, PathClassifier(config, "loc"))
            report.loc = count_lines(records, content_sniff_php=config.content_sniff_php)
    except Exception as e:
        logger.exception("Scan of %s failed", root)
        report.error = str(e) or type(e).__name__
        return report

    if "security" in wanted:
        report.security = run_security_audit(root, config)

    report.status = "success"
    return report
