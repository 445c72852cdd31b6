"""
Scan models — the values a single scan produces.

Every record here is rebuilt from scratch on each invocation and owned
by the caller of the scan.  Field names are snake_case in Python and
camelCase on the wire (``model_dump(by_alias=True)``); the camelCase
names are the public report contract.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    """Base for models serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary (wire names, no Nones)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class FileType(str, Enum):
    """Lexical classification of a file, by extension only."""

    SCRIPT = "Script"
    JSON_FILE = "JSON File"
    OTHER = "Other"
    SKIPPED = "Skipped"


# ── Inventory ───────────────────────────────────────────────────


class FileRecord(_WireModel):
    """One file found by the tree walk."""

    model_config = ConfigDict(frozen=True)

    absolute_path: str
    relative_path: str
    extension: str
    file_type: FileType


class PercentageDistribution(_WireModel):
    """Share of each category in ``totalFiles``, integer-rounded."""

    modules: int = 0
    scripts: int = 0
    json_files: int = 0
    other_files: int = 0
    dependencies: int = 0


class InventoryReport(_WireModel):
    total_files: int = 0
    total_modules: int = 0
    total_scripts: int = 0
    total_json_files: int = Field(default=0, alias="totalJSONFiles")
    total_other_files: int = 0
    total_dependencies: int = 0
    percentage_distribution: PercentageDistribution = Field(
        default_factory=PercentageDistribution,
    )
    module_metrics: list[FileRecord] = Field(default_factory=list)


# ── Lines of code ───────────────────────────────────────────────


class LineMetric(_WireModel):
    """Line count of one text file."""

    model_config = ConfigDict(frozen=True)

    file_name: str
    line_count: int
    file_type: str  # extension without the dot


class LocReport(_WireModel):
    total_loc: int = Field(default=0, alias="totalLOC")
    average_loc: float = Field(default=0.0, alias="averageLOC")
    total_files: int = 0
    loc_by_type: dict[str, int] = Field(default_factory=dict)
    file_metrics: list[LineMetric] = Field(default_factory=list)


# ── Security audit ──────────────────────────────────────────────


class PatternMatch(_WireModel):
    """First match of one pattern within one file."""

    model_config = ConfigDict(frozen=True)

    file_path: str
    matched_text: str
    pattern: str = ""


class AdvisorySource(_WireModel):
    name: str = ""
    remote_id: str = ""


class Advisory(_WireModel):
    """A single reported vulnerability tied to a dependency package."""

    package_name: str
    advisory_id: str | None = None
    title: str = "undefined"
    cve: str | None = None
    link: str = "No URL provided"
    reported_at: str | None = None
    severity: str | None = None
    affected_versions: str | None = None
    sources: list[AdvisorySource] = Field(default_factory=list)

    def describe(self) -> str:
        """One-line human summary: ``pkg - title: link``."""
        return f"{self.package_name} - {self.title}: {self.link}"


class AuditReport(_WireModel):
    """Security audit results.

    A sub-task that failed contributes a single descriptive string to its
    list instead of data.
    """

    hardcoded_credentials: list[PatternMatch | str] = Field(default_factory=list)
    unsafe_patterns: list[PatternMatch | str] = Field(default_factory=list)
    vulnerabilities: list[Advisory | str] = Field(default_factory=list)
    deprecated_dependencies: list[str] = Field(default_factory=list)


# ── Report envelope ─────────────────────────────────────────────


ReportStatus = Literal["success", "failure"]


class ScanReport(_WireModel):
    """Top-level report: status/timestamp envelope plus mode sections."""

    timestamp: str
    project_path: str
    status: ReportStatus = "failure"
    error: str | None = None

    inventory: InventoryReport | None = None
    loc: LocReport | None = None
    security: AuditReport | None = None

    bundle_size: int | None = None
    bundle_size_formatted: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "success"
