"""
Tests for the security audit — sub-task isolation and merging.
"""

import json
from pathlib import Path

import pytest

from phpscan.core.models import Advisory, PatternMatch, ScanConfig
from phpscan.core.services import security_ops
from phpscan.core.services.composer_ops import ToolError
from phpscan.core.services.security_ops import audit_files, run_security_audit


@pytest.fixture
def audited_project(php_project: Path) -> Path:
    (php_project / "src" / "db.inc").write_text("<?php $password = 'hunter2hunter2';\n")
    (php_project / "src" / "run.php").write_text("<?php eval($a); eval($b); eval($c);\n")
    (php_project / "page.html").write_text("<p>static</p>")
    return php_project


def _stub_composer(monkeypatch, audit=None, outdated=None):
    def fake_audit(root, settings):
        if isinstance(audit, Exception):
            raise audit
        return audit

    def fake_outdated(root, settings):
        if isinstance(outdated, Exception):
            raise outdated
        return outdated

    monkeypatch.setattr(security_ops, "run_composer_audit", fake_audit)
    monkeypatch.setattr(security_ops, "run_composer_outdated", fake_outdated)


_AUDIT = json.dumps({
    "advisories": {"pkg/a": [{"title": "X", "link": "https://example.test/x"}]},
    "abandoned": {"old/pkg": "new/pkg"},
})
_OUTDATED = json.dumps({"packages": [{"name": "x", "version": "1.0", "latest": "2.0"}]})


class TestAuditFiles:
    def test_extensions_filtered(self, audited_project: Path):
        names = sorted(Path(r.relative_path).name for r in audit_files(audited_project, ScanConfig()))
        assert names == ["Router.php", "User.php", "db.inc", "index.php", "page.html", "run.php"]


class TestRunSecurityAudit:
    def test_all_succeed(self, audited_project: Path, monkeypatch):
        _stub_composer(monkeypatch, audit=_AUDIT, outdated=_OUTDATED)
        report = run_security_audit(audited_project, ScanConfig())

        assert len(report.hardcoded_credentials) == 1
        cred = report.hardcoded_credentials[0]
        assert isinstance(cred, PatternMatch)
        assert cred.file_path == "src/db.inc"

        assert len(report.unsafe_patterns) == 1
        assert report.unsafe_patterns[0].matched_text == "eval("

        assert len(report.vulnerabilities) == 1
        assert isinstance(report.vulnerabilities[0], Advisory)
        assert report.vulnerabilities[0].package_name == "pkg/a"

        assert report.deprecated_dependencies == [
            "old/pkg is abandoned. Use new/pkg instead.",
            "x - Current: 1.0, Latest: 2.0",
        ]

    def test_vendor_never_scanned(self, audited_project: Path, monkeypatch):
        _stub_composer(monkeypatch, audit=_AUDIT, outdated="")
        report = run_security_audit(audited_project, ScanConfig())
        assert all("vendor" not in m.file_path for m in report.hardcoded_credentials)

    def test_empty_audit_output_is_one_entry(self, audited_project: Path, monkeypatch):
        _stub_composer(monkeypatch, audit="", outdated=_OUTDATED)
        report = run_security_audit(audited_project, ScanConfig())
        assert len(report.vulnerabilities) == 1
        assert isinstance(report.vulnerabilities[0], str)
        assert report.vulnerabilities[0].startswith("Error during composer audit:")
        assert report.deprecated_dependencies == ["x - Current: 1.0, Latest: 2.0"]
        assert len(report.hardcoded_credentials) == 1

    def test_outdated_failure_isolated(self, audited_project: Path, monkeypatch):
        _stub_composer(monkeypatch, audit=_AUDIT, outdated=ToolError("exit 3"))
        report = run_security_audit(audited_project, ScanConfig())
        assert len(report.vulnerabilities) == 1
        assert report.deprecated_dependencies == [
            "old/pkg is abandoned. Use new/pkg instead.",
            "Error during composer outdated: exit 3",
        ]

    def test_scan_failure_isolated(self, audited_project: Path, monkeypatch):
        _stub_composer(monkeypatch, audit=_AUDIT, outdated=_OUTDATED)

        def broken(*args, **kwargs):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(security_ops, "scan_files", broken)
        report = run_security_audit(audited_project, ScanConfig())
        assert report.hardcoded_credentials == ["Error during pattern scan: disk on fire"]
        assert report.unsafe_patterns == ["Error during pattern scan: disk on fire"]
        assert len(report.vulnerabilities) == 1

    def test_everything_fails(self, audited_project: Path, monkeypatch):
        _stub_composer(monkeypatch, audit=ToolError("no composer"), outdated=ToolError("no composer"))
        report = run_security_audit(audited_project, ScanConfig())
        assert report.vulnerabilities == ["Error during composer audit: no composer"]
        assert report.deprecated_dependencies == ["Error during composer outdated: no composer"]

    def test_wire_shape(self, audited_project: Path, monkeypatch):
        _stub_composer(monkeypatch, audit="", outdated="")
        data = run_security_audit(audited_project, ScanConfig()).to_dict()
        assert set(data) == {
            "hardcodedCredentials", "unsafePatterns", "vulnerabilities", "deprecatedDependencies",
        }
        assert data["hardcodedCredentials"][0]["filePath"] == "src/db.inc"
        assert isinstance(data["vulnerabilities"][0], str)
