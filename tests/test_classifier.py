"""
Tests for path classification — extensions, skip sets, excluded dirs.
"""

import pytest

from phpscan.core.models import FileType, ScanConfig
from phpscan.core.services.classifier import NO_EXTENSION, PathClassifier, file_extension


class TestFileExtension:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("index.php", ".php"),
            ("Index.PHP", ".php"),
            ("archive.tar.gz", ".gz"),
            ("weird.", "."),
            ("Makefile", NO_EXTENSION),
            (".htaccess", NO_EXTENSION),
        ],
    )
    def test_extension(self, name: str, expected: str):
        assert file_extension(name) == expected


class TestInventoryMode:
    def setup_method(self):
        self.classifier = PathClassifier(ScanConfig(), "inventory")

    def test_php_is_script(self):
        assert self.classifier.classify("index.php") is FileType.SCRIPT

    def test_case_insensitive(self):
        assert self.classifier.classify("LEGACY.PHP") is FileType.SCRIPT

    def test_json(self):
        assert self.classifier.classify("composer.json") is FileType.JSON_FILE

    def test_other(self):
        assert self.classifier.classify("style.css") is FileType.OTHER
        assert self.classifier.classify("README.md") is FileType.OTHER

    def test_binary_extension_skipped(self):
        for name in ("logo.png", "font.woff", "app.exe", "doc.pdf", "icon.ico"):
            assert self.classifier.classify(name) is FileType.SKIPPED

    def test_no_extension_skipped(self):
        assert self.classifier.classify("LICENSE") is FileType.SKIPPED


class TestLocMode:
    def setup_method(self):
        self.classifier = PathClassifier(ScanConfig(), "loc")

    def test_markdown_skipped(self):
        assert self.classifier.classify("README.md") is FileType.SKIPPED

    def test_trailing_dot_skipped(self):
        assert self.classifier.classify("weird.") is FileType.SKIPPED

    def test_php_counted(self):
        assert self.classifier.classify("index.php") is FileType.SCRIPT


class TestExcludedDirs:
    def test_default_exclusions(self):
        classifier = PathClassifier(ScanConfig())
        for name in ("vendor", "node_modules", "storage", "logs", "tests", "coverage", ".git"):
            assert classifier.skip_directory(name)

    def test_exact_match_only(self):
        classifier = PathClassifier(ScanConfig())
        assert not classifier.skip_directory("vendors")
        assert not classifier.skip_directory("Vendor")
        assert not classifier.skip_directory("src")

    def test_configurable(self):
        classifier = PathClassifier(ScanConfig(excluded_dirs=["cache"]))
        assert classifier.skip_directory("cache")
        assert not classifier.skip_directory("vendor")


class TestCustomMap:
    def test_extension_map_override(self):
        config = ScanConfig(extension_map={".INC": "Script", ".php": "Script"})
        classifier = PathClassifier(config)
        assert classifier.classify("header.inc") is FileType.SCRIPT

    def test_skip_extensions_override(self):
        config = ScanConfig(skip_extensions=[".CSS"])
        classifier = PathClassifier(config)
        assert classifier.classify("app.css") is FileType.SKIPPED
        assert classifier.classify("logo.png") is FileType.OTHER
