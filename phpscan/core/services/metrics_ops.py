"""
Metrics — inventory counts and line counts over a walked file set.

Both modes consume the records produced by ``walker.walk_project``;
neither touches the filesystem layout again.

Line counting reads each file's raw bytes first: a NUL byte marks the
file as binary and removes it from every text metric, whatever its
extension says.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from pathlib import Path

from phpscan.core.models.scan import (
    FileRecord,
    FileType,
    InventoryReport,
    LineMetric,
    LocReport,
    PercentageDistribution,
)

logger = logging.getLogger(__name__)

_PHP_OPEN_TAGS = ("<?php", "<?=")


# ═══════════════════════════════════════════════════════════════════
#  Inventory
# ═══════════════════════════════════════════════════════════════════


def percentage(part: int, whole: int) -> int:
    """``part`` as an integer percentage of ``whole``; 0 when whole is 0.

    Halves round up (12.5 -> 13).
    """
    if whole == 0:
        return 0
    return math.floor(100 * part / whole + 0.5)


def summarize_inventory(records: Iterable[FileRecord]) -> InventoryReport:
    """Count records per file type and compute the distribution."""
    records = [r for r in records if r.file_type is not FileType.SKIPPED]

    counts = {kind: 0 for kind in FileType}
    for record in records:
        counts[record.file_type] += 1

    total = len(records)
    scripts = counts[FileType.SCRIPT]
    json_files = counts[FileType.JSON_FILE]
    others = counts[FileType.OTHER]
    # Dependency resolution is not part of the scan
    dependencies = 0

    return InventoryReport(
        total_files=total,
        total_modules=scripts,
        total_scripts=scripts,
        total_json_files=json_files,
        total_other_files=others,
        total_dependencies=dependencies,
        percentage_distribution=PercentageDistribution(
            modules=percentage(scripts, total),
            scripts=percentage(scripts, total),
            json_files=percentage(json_files, total),
            other_files=percentage(others, total),
            dependencies=percentage(dependencies, total),
        ),
        module_metrics=records,
    )


# ═══════════════════════════════════════════════════════════════════
#  Lines of code
# ═══════════════════════════════════════════════════════════════════


def is_probably_binary(data: bytes) -> bool:
    return b"\x00" in data


def looks_like_php(text: str) -> bool:
    """Whether decoded content carries a PHP open tag."""
    return any(tag in text for tag in _PHP_OPEN_TAGS)


def count_text_lines(text: str) -> int:
    """Number of LF-separated segments.

    A trailing newline still opens a (empty) segment, so ``"a\\n"`` is
    2 lines and ``""`` is 1.
    """
    return len(text.split("\n"))


def measure_file(record: FileRecord, *, content_sniff_php: bool = False) -> LineMetric | None:
    """Line metric for one file, or None when it is binary or unreadable."""
    try:
        data = Path(record.absolute_path).read_bytes()
    except OSError as e:
        logger.debug("Cannot read %s: %s", record.relative_path, e)
        return None

    if is_probably_binary(data):
        logger.debug("Skipping binary content in %s", record.relative_path)
        return None

    text = data.decode("utf-8", errors="replace")

    if (
        content_sniff_php
        and record.file_type is FileType.SCRIPT
        and not looks_like_php(text)
    ):
        logger.debug("No PHP open tag in %s, not counted", record.relative_path)
        return None

    ext = record.extension
    return LineMetric(
        file_name=record.relative_path,
        line_count=count_text_lines(text),
        file_type=ext[1:] if ext.startswith(".") else ext,
    )


def count_lines(
    records: Iterable[FileRecord],
    *,
    content_sniff_php: bool = False,
) -> LocReport:
    """Line counts per file and per extension.

    Args:
        records: Files from a walk in ``loc`` mode.
        content_sniff_php: Also require a ``<?php`` / ``<?=`` tag before
            counting a Script file.
    """
    metrics: list[LineMetric] = []
    by_type: dict[str, int] = {}
    total = 0

    for record in records:
        if record.file_type is FileType.SKIPPED:
            continue
        metric = measure_file(record, content_sniff_php=content_sniff_php)
        if metric is None:
            continue
        metrics.append(metric)
        total += metric.line_count
        by_type[metric.file_type] = by_type.get(metric.file_type, 0) + metric.line_count

    average = round(total / len(metrics), 2) if metrics else 0.0

    return LocReport(
        total_loc=total,
        average_loc=average,
        total_files=len(metrics),
        loc_by_type=by_type,
        file_metrics=metrics,
    )
