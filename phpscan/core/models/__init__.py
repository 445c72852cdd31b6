"""
Domain models — Pydantic types for the scanner.

All models are re-exported here for convenient access:

    from phpscan.core.models import ScanConfig, FileRecord, ScanReport
"""

from phpscan.core.models.config import (
    BundleSettings,
    ComposerSettings,
    PatternRule,
    ScanConfig,
)
from phpscan.core.models.scan import (
    Advisory,
    AdvisorySource,
    AuditReport,
    FileRecord,
    FileType,
    InventoryReport,
    LineMetric,
    LocReport,
    PatternMatch,
    PercentageDistribution,
    ScanReport,
)

__all__ = [
    # scan.py
    "Advisory",
    "AdvisorySource",
    "AuditReport",
    # config.py
    "BundleSettings",
    "ComposerSettings",
    "FileRecord",
    "FileType",
    "InventoryReport",
    "LineMetric",
    "LocReport",
    "PatternMatch",
    "PatternRule",
    "PercentageDistribution",
    "ScanConfig",
    "ScanReport",
]
