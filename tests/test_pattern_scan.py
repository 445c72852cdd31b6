"""
Tests for pattern scanning — first match only, default rule sets.
"""

import re
from pathlib import Path

import pytest

from phpscan.core.models import PatternRule
from phpscan.core.services.pattern_scan import scan_files
from phpscan.core.services.security_common import (
    CREDENTIAL_PATTERNS,
    UNSAFE_CALL_PATTERNS,
    compile_rules,
)

_KEY = "A" * 32


class TestScanFiles:
    def test_one_match_per_file_and_pattern(self, tmp_path: Path):
        path = tmp_path / "config.php"
        path.write_text(
            "<?php\n"
            "$password = 'secret123';\n"
            "$password = 'secret456';\n"
            "$password = 'secret789';\n"
        )
        matches = scan_files([path], compile_rules(CREDENTIAL_PATTERNS), base=tmp_path)
        assert len(matches) == 1
        assert matches[0].matched_text == "password = 'secret123'"
        assert matches[0].file_path == "config.php"
        assert matches[0].pattern == "Password Assignment"

    def test_separate_patterns_each_recorded(self, tmp_path: Path):
        path = tmp_path / "run.php"
        path.write_text("<?php eval($code); exec('ls'); eval($other);")
        matches = scan_files([path], compile_rules(UNSAFE_CALL_PATTERNS))
        assert sorted(m.matched_text for m in matches) == ["eval(", "exec("]
        assert all(m.file_path == str(path) for m in matches)

    def test_case_insensitive(self, tmp_path: Path):
        path = tmp_path / "a.php"
        path.write_text(f'<?php $APIKEY = "{_KEY}";')
        matches = scan_files([path], compile_rules(CREDENTIAL_PATTERNS))
        assert len(matches) == 1
        assert matches[0].pattern == "API Key Assignment"

    def test_short_token_not_flagged(self, tmp_path: Path):
        path = tmp_path / "a.php"
        path.write_text('<?php $token = "abc";')
        assert scan_files([path], compile_rules(CREDENTIAL_PATTERNS)) == []

    def test_short_password_not_flagged(self, tmp_path: Path):
        path = tmp_path / "a.php"
        path.write_text("<?php $password = 'abc';")
        assert scan_files([path], compile_rules(CREDENTIAL_PATTERNS)) == []

    def test_unreadable_file_skipped(self, tmp_path: Path):
        good = tmp_path / "good.php"
        good.write_text("<?php eval($x);")
        matches = scan_files(
            [tmp_path / "missing.php", good],
            compile_rules(UNSAFE_CALL_PATTERNS),
            base=tmp_path,
        )
        assert [m.file_path for m in matches] == ["good.php"]

    def test_custom_patterns(self, tmp_path: Path):
        path = tmp_path / "a.php"
        path.write_text("<?php shell_exec('id'); system('id');")
        rules = [PatternRule(name="system", pattern=r"system\(", ignore_case=False)]
        matches = scan_files([path], compile_rules(rules))
        assert [m.matched_text for m in matches] == ["system("]

    def test_raw_compiled_patterns_accepted(self, tmp_path: Path):
        path = tmp_path / "a.php"
        path.write_text("TODO TODO")
        matches = scan_files([path], [("todo", re.compile("TODO"))])
        assert len(matches) == 1


class TestPatternRule:
    def test_invalid_regex_rejected(self):
        with pytest.raises(ValueError):
            PatternRule(name="bad", pattern="(unclosed")

    def test_ignore_case_flag(self):
        assert PatternRule(name="x", pattern="abc").compile().search("ABC")
        assert not PatternRule(name="x", pattern="abc", ignore_case=False).compile().search("ABC")
