"""
Path classification — decide, from a name alone, what a file is.

Purely lexical: nothing here opens a file.  The binary-content gate
lives in ``metrics_ops`` and runs after classification.
"""

from __future__ import annotations

from phpscan.core.models.config import ScanConfig, ScanMode
from phpscan.core.models.scan import FileType

NO_EXTENSION = "[no-extension]"


def file_extension(name: str) -> str:
    """Lower-cased extension including the dot.

    ``"Index.PHP"`` -> ``".php"``, ``"archive."`` -> ``"."``.
    Names without a dot, or whose only dot leads (``.htaccess``),
    return ``NO_EXTENSION``.
    """
    idx = name.rfind(".")
    if idx <= 0:
        return NO_EXTENSION
    return name[idx:].lower()


class PathClassifier:
    """Classify directory and file names for one scan pipeline.

    The inventory and line-count pipelines differ only in which
    extensions they skip (see ``ScanConfig.skip_extensions_for``).
    """

    def __init__(self, config: ScanConfig, mode: ScanMode = "inventory") -> None:
        self.mode = mode
        self._excluded_dirs = frozenset(config.excluded_dirs)
        self._skip_extensions = config.skip_extensions_for(mode)
        self._extension_map = dict(config.extension_map)

    def skip_directory(self, name: str) -> bool:
        """Exact directory-name match against the exclusion set."""
        return name in self._excluded_dirs

    def classify(self, name: str) -> FileType:
        ext = file_extension(name)
        # Files without an extension are ambiguous: never counted
        if ext == NO_EXTENSION or ext in self._skip_extensions:
            return FileType.SKIPPED
        return self._extension_map.get(ext, FileType.OTHER)
