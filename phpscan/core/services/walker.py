"""
Tree walk — flatten a project directory into FileRecords.

Iterative depth-first traversal with an explicit stack, so deep trees
cannot exhaust the interpreter's recursion limit.  Canonical directory
paths are remembered, so a symlink loop is entered at most once.

Errors on a single entry (permission denied, dangling link, entry
vanished mid-walk) are logged and skipped; they never abort the walk.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from phpscan.core.models.scan import FileRecord, FileType
from phpscan.core.services.classifier import PathClassifier, file_extension

logger = logging.getLogger(__name__)


def walk_project(root: Path, classifier: PathClassifier) -> list[FileRecord]:
    """Walk ``root`` and return one record per non-skipped file.

    Directories named in the exclusion set are pruned with their whole
    subtree, at any depth.  Order is not guaranteed.
    """
    root = Path(root)
    records: list[FileRecord] = []
    visited: set[str] = set()
    pending: list[str] = [str(root)]

    while pending:
        directory = pending.pop()

        real = os.path.realpath(directory)
        if real in visited:
            logger.debug("Already visited %s (symlink loop?), skipping", directory)
            continue
        visited.add(real)

        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as e:
            logger.warning("Cannot list %s: %s", directory, e)
            continue

        for entry in entries:
            try:
                is_dir = entry.is_dir()
                is_file = not is_dir and entry.is_file()
            except OSError as e:
                logger.debug("Cannot stat %s: %s", entry.path, e)
                continue

            if is_dir:
                if classifier.skip_directory(entry.name):
                    logger.debug("Pruned excluded directory %s", entry.path)
                    continue
                pending.append(entry.path)
                continue

            if not is_file:
                continue

            file_type = classifier.classify(entry.name)
            if file_type is FileType.SKIPPED:
                continue

            records.append(FileRecord(
                absolute_path=os.path.abspath(entry.path),
                relative_path=os.path.relpath(entry.path, root),
                extension=file_extension(entry.name),
                file_type=file_type,
            ))

    logger.info("Walked %s: %d dirs, %d files", root, len(visited), len(records))
    return records
