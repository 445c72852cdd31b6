"""
Pattern scanning — search file contents for compiled regexes.

Only the first match of each pattern in each file is recorded: a file
that repeats the same hardcoded password ten times is one finding.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from phpscan.core.models.scan import PatternMatch

logger = logging.getLogger(__name__)


def scan_files(
    files: Iterable[Path | str],
    patterns: Iterable[tuple[str, re.Pattern[str]]],
    *,
    base: Path | None = None,
) -> list[PatternMatch]:
    """Scan each file against each ``(name, pattern)`` pair.

    Args:
        files: Files to read.  Unreadable ones are skipped.
        patterns: Named compiled patterns, e.g. from
            ``security_common.compile_rules``.
        base: When given, reported paths are relative to it.

    Returns:
        One ``PatternMatch`` per (file, pattern) pair that matched.
    """
    patterns = list(patterns)
    matches: list[PatternMatch] = []

    for file in files:
        path = Path(file)
        try:
            content = path.read_bytes().decode("utf-8", errors="replace")
        except OSError as e:
            logger.debug("Cannot read %s: %s", path, e)
            continue

        shown = _display_path(path, base)
        for name, pattern in patterns:
            match = pattern.search(content)
            if match:
                matches.append(PatternMatch(
                    file_path=shown,
                    matched_text=match.group(0),
                    pattern=name,
                ))

    return matches


def _display_path(path: Path, base: Path | None) -> str:
    if base is None:
        return str(path)
    try:
        return path.relative_to(base).as_posix()
    except ValueError:
        return str(path)
