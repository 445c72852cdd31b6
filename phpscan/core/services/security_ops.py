"""
Security audit — pattern scan plus composer checks.

Three independent sub-tasks run concurrently:

    scan       credential + unsafe-call patterns over the project files
    audit      composer audit       -> vulnerabilities (+ abandoned notices)
    outdated   composer outdated    -> deprecated dependencies

A sub-task that fails contributes one ``"Error during ...: <reason>"``
entry to its report field; the others are unaffected.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any, Callable

from phpscan.core.models.config import ScanConfig
from phpscan.core.models.scan import AuditReport, FileRecord, PatternMatch
from phpscan.core.services.advisory import ComposerAudit, normalize_audit, normalize_outdated
from phpscan.core.services.classifier import PathClassifier
from phpscan.core.services.composer_ops import run_composer_audit, run_composer_outdated
from phpscan.core.services.pattern_scan import scan_files
from phpscan.core.services.security_common import compile_rules
from phpscan.core.services.walker import walk_project

logger = logging.getLogger(__name__)


def audit_files(project_root: Path, config: ScanConfig) -> list[FileRecord]:
    """Walked files whose extension is one the audit reads."""
    wanted = frozenset(config.audit_extensions)
    records = walk_project(project_root, PathClassifier(config, "inventory"))
    return [r for r in records if r.extension in wanted]


def scan_patterns(
    project_root: Path,
    config: ScanConfig,
    records: list[FileRecord] | None = None,
) -> tuple[list[PatternMatch], list[PatternMatch]]:
    """Credential and unsafe-call matches over the project files."""
    if records is None:
        records = audit_files(project_root, config)
    files = [Path(r.absolute_path) for r in records]
    base = Path(os.path.abspath(project_root))

    credentials = scan_files(files, compile_rules(config.secret_patterns), base=base)
    unsafe = scan_files(files, compile_rules(config.unsafe_patterns), base=base)
    logger.info(
        "Pattern scan: %d files, %d credential / %d unsafe matches",
        len(files), len(credentials), len(unsafe),
    )
    return credentials, unsafe


def check_advisories(project_root: Path, config: ScanConfig) -> ComposerAudit:
    return normalize_audit(run_composer_audit(project_root, config.composer))


def check_outdated(project_root: Path, config: ScanConfig) -> list[str]:
    return normalize_outdated(run_composer_outdated(project_root, config.composer))


_ERROR_LABELS = {
    "scan": "pattern scan",
    "audit": "composer audit",
    "outdated": "composer outdated",
}


def run_security_audit(
    project_root: Path,
    config: ScanConfig | None = None,
    *,
    records: list[FileRecord] | None = None,
) -> AuditReport:
    """Run the full security audit.

    Args:
        project_root: PHP project directory.
        config: Scan configuration (defaults when None).
        records: Pre-filtered file set to scan; walked when None.

    Returns:
        AuditReport with in-band error strings for failed sub-tasks.
    """
    config = config or ScanConfig()
    logger.info("Running PHP security audit on %s", project_root)

    tasks: dict[str, Callable[[], Any]] = {
        "scan": lambda: scan_patterns(project_root, config, records),
        "audit": lambda: check_advisories(project_root, config),
        "outdated": lambda: check_outdated(project_root, config),
    }

    results: dict[str, Any] = {}
    errors: dict[str, str] = {}
    with ThreadPoolExecutor(max_workers=len(tasks)) as pool:
        futures = {pool.submit(fn): task_id for task_id, fn in tasks.items()}
        for future in as_completed(futures):
            task_id = futures[future]
            try:
                results[task_id] = future.result()
            except Exception as exc:
                label = _ERROR_LABELS[task_id]
                logger.warning("%s failed: %s", label, exc)
                errors[task_id] = f"Error during {label}: {exc}"

    report = AuditReport()

    if "scan" in errors:
        report.hardcoded_credentials = [errors["scan"]]
        report.unsafe_patterns = [errors["scan"]]
    else:
        credentials, unsafe = results["scan"]
        report.hardcoded_credentials = list(credentials)
        report.unsafe_patterns = list(unsafe)

    deprecated: list[str] = []
    if "audit" in errors:
        report.vulnerabilities = [errors["audit"]]
    else:
        audit: ComposerAudit = results["audit"]
        report.vulnerabilities = list(audit.advisories)
        deprecated.extend(audit.abandoned)

    if "outdated" in errors:
        deprecated.append(errors["outdated"])
    else:
        deprecated.extend(results["outdated"])
    report.deprecated_dependencies = deprecated

    return report
