"""
Scan configuration — every tunable the engine reads.

Loaded from ``phpscan.yml`` by ``phpscan.core.config.loader``; a missing
file means the defaults below.  Nothing in the services hardcodes these
values — they receive a ``ScanConfig``.
"""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from phpscan.core.models.scan import FileType

ScanMode = Literal["inventory", "loc"]


DEFAULT_EXCLUDED_DIRS = [
    "vendor",
    "node_modules",
    "storage",
    "logs",
    "tests",
    "coverage",
    ".git",
]

DEFAULT_SKIP_EXTENSIONS = [
    ".png", ".jpg", ".jpeg", ".gif", ".svg",
    ".mp4", ".mp3",
    ".woff", ".ttf",
    ".zip", ".exe",
    ".ico", ".pdf",
]


class PatternRule(BaseModel):
    """A named regular expression searched for in file contents."""

    name: str
    pattern: str
    ignore_case: bool = True

    @field_validator("pattern")
    @classmethod
    def _must_compile(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"invalid regular expression {value!r}: {e}") from e
        return value

    def compile(self) -> re.Pattern[str]:
        return re.compile(self.pattern, re.IGNORECASE if self.ignore_case else 0)


def _default_secret_patterns() -> list[PatternRule]:
    from phpscan.core.services.security_common import CREDENTIAL_PATTERNS

    return list(CREDENTIAL_PATTERNS)


def _default_unsafe_patterns() -> list[PatternRule]:
    from phpscan.core.services.security_common import UNSAFE_CALL_PATTERNS

    return list(UNSAFE_CALL_PATTERNS)


class ComposerSettings(BaseModel):
    """How to invoke the external dependency checkers."""

    command: list[str] = Field(default_factory=lambda: ["composer"])
    timeout: int = Field(default=300, gt=0)  # seconds, per call


class BundleSettings(BaseModel):
    """PHAR bundling collaborator settings."""

    php_command: list[str] = Field(default_factory=lambda: ["php"])
    entry_candidates: list[str] = Field(
        default_factory=lambda: [
            "public/index.php",
            "index.php",
            "src/index.php",
            "app.php",
        ],
    )
    build_script_name: str = "build-phar.php"
    timeout: int = Field(default=300, gt=0)


class ScanConfig(BaseModel):
    """Root scan configuration."""

    excluded_dirs: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDED_DIRS))
    skip_extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_SKIP_EXTENSIONS))
    # Line counting also skips these on top of skip_extensions
    loc_extra_skip_extensions: list[str] = Field(default_factory=lambda: [".md", "."])
    extension_map: dict[str, FileType] = Field(
        default_factory=lambda: {".php": FileType.SCRIPT, ".json": FileType.JSON_FILE},
    )
    audit_extensions: list[str] = Field(default_factory=lambda: [".php", ".html", ".inc"])
    content_sniff_php: bool = False

    secret_patterns: list[PatternRule] = Field(default_factory=_default_secret_patterns)
    unsafe_patterns: list[PatternRule] = Field(default_factory=_default_unsafe_patterns)

    composer: ComposerSettings = Field(default_factory=ComposerSettings)
    bundle: BundleSettings = Field(default_factory=BundleSettings)

    @field_validator(
        "skip_extensions", "loc_extra_skip_extensions", "audit_extensions",
    )
    @classmethod
    def _lower_extensions(cls, value: list[str]) -> list[str]:
        return [ext.lower() for ext in value]

    @field_validator("extension_map")
    @classmethod
    def _lower_map_keys(cls, value: dict[str, FileType]) -> dict[str, FileType]:
        return {ext.lower(): kind for ext, kind in value.items()}

    def skip_extensions_for(self, mode: ScanMode) -> frozenset[str]:
        """Extensions skipped unconditionally in the given pipeline."""
        if mode == "loc":
            return frozenset(self.skip_extensions) | frozenset(self.loc_extra_skip_extensions)
        return frozenset(self.skip_extensions)
