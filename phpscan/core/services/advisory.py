"""
Advisory normalization — turn composer's JSON into uniform records.

Composer is not consistent about shapes:

- ``audit``: ``advisories`` maps a package to either a list of
  advisories or an object of advisories keyed by ``"0"``, ``"1"``, ...
  (PHP serializes sparse arrays that way).  An empty map comes out
  as ``[]``.
- ``outdated``: a bare list of packages, ``{"packages": [...]}``, or
  ``{"installed": [...]}`` depending on version and flags.

Both unions are resolved here, at the parse boundary, so the rest of
the code only ever sees ``Advisory`` objects and notice strings.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from phpscan.core.models.scan import Advisory, AdvisorySource

logger = logging.getLogger(__name__)


class AdvisoryParseError(Exception):
    """Raised when checker output is empty, not JSON, or the wrong shape."""


# ── Raw payload shapes ──────────────────────────────────────────


class _RawAdvisory(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    advisory_id: str | None = None
    package_name: str | None = None
    title: str | None = None
    cve: str | None = None
    link: str | None = None
    reported_at: str | None = None
    severity: str | None = None
    affected_versions: str | None = None
    sources: list[AdvisorySource] = Field(default_factory=list)


class _AuditPayload(BaseModel):
    advisories: dict[str, list[_RawAdvisory] | dict[str, _RawAdvisory]] = Field(
        default_factory=dict,
    )
    abandoned: dict[str, str | None] = Field(default_factory=dict)

    @field_validator("advisories", "abandoned", mode="before")
    @classmethod
    def _empty_php_array(cls, value: Any) -> Any:
        # json_encode([]) — an empty map serialized as a list
        if value is None or value == []:
            return {}
        return value


class _OutdatedPackage(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str = ""
    version: str = ""
    latest: str = ""
    abandoned: bool | str = False


class _OutdatedPayload(BaseModel):
    packages: list[_OutdatedPackage] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _accept_list_or_envelope(cls, data: Any) -> Any:
        if isinstance(data, list):
            return {"packages": data}
        if isinstance(data, dict) and "packages" not in data and "installed" in data:
            return {"packages": data["installed"]}
        return data


class ComposerAudit(BaseModel):
    """Normalized ``composer audit`` result."""

    advisories: list[Advisory] = Field(default_factory=list)
    abandoned: list[str] = Field(default_factory=list)


# ── Normalizers ─────────────────────────────────────────────────


def abandoned_notice(package: str, replacement: str | None) -> str:
    if replacement:
        return f"{package} is abandoned. Use {replacement} instead."
    return f"{package} is abandoned. No replacement suggested."


def outdated_notice(name: str, version: str, latest: str) -> str:
    return f"{name} - Current: {version}, Latest: {latest}"


def normalize_audit(raw: str) -> ComposerAudit:
    """Parse ``composer audit --format=json`` output.

    Raises:
        AdvisoryParseError: On empty output, invalid JSON or a payload
            that is not an audit object.
    """
    if not raw or not raw.strip():
        raise AdvisoryParseError("composer audit returned empty output")

    payload = _load(raw, "composer audit")
    try:
        audit = _AuditPayload.model_validate(payload)
    except ValidationError as e:
        raise AdvisoryParseError(f"Unexpected composer audit output: {e}") from e

    advisories: list[Advisory] = []
    for package, entries in audit.advisories.items():
        if isinstance(entries, dict):
            entries = list(entries.values())
        for entry in entries:
            advisories.append(Advisory(
                package_name=entry.package_name or package,
                advisory_id=entry.advisory_id,
                title=entry.title or "undefined",
                cve=entry.cve,
                link=entry.link or "No URL provided",
                reported_at=entry.reported_at,
                severity=entry.severity,
                affected_versions=entry.affected_versions,
                sources=entry.sources,
            ))

    abandoned = [
        abandoned_notice(package, replacement)
        for package, replacement in audit.abandoned.items()
    ]

    logger.debug(
        "composer audit: %d advisories, %d abandoned packages",
        len(advisories), len(abandoned),
    )
    return ComposerAudit(advisories=advisories, abandoned=abandoned)


def normalize_outdated(raw: str) -> list[str]:
    """Parse ``composer outdated --format=json`` output into notices.

    Empty output means nothing is outdated.

    Raises:
        AdvisoryParseError: On invalid JSON or an unexpected shape.
    """
    if not raw or not raw.strip():
        return []

    payload = _load(raw, "composer outdated")
    try:
        outdated = _OutdatedPayload.model_validate(payload)
    except ValidationError as e:
        raise AdvisoryParseError(f"Unexpected composer outdated output: {e}") from e

    notices: list[str] = []
    for pkg in outdated.packages:
        notices.append(outdated_notice(pkg.name, pkg.version, pkg.latest))
        if pkg.abandoned:
            replacement = pkg.abandoned if isinstance(pkg.abandoned, str) else None
            notices.append(abandoned_notice(pkg.name, replacement))
    return notices


def _load(raw: str, source: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise AdvisoryParseError(f"Error parsing {source} output: {e}") from e
