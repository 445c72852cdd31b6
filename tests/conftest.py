"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest


def write_lines(path: Path, count: int) -> Path:
    """Write ``count`` PHP content lines, each ending with a newline."""
    path.parent.mkdir(parents=True, exist_ok=True)
    body = "<?php\n" + "".join(f"echo {i};\n" for i in range(1, count))
    path.write_text(body)
    return path


@pytest.fixture
def php_project(tmp_path: Path) -> Path:
    """A small PHP project.

    - 3 scripts with 10, 20 and 30 newline-terminated lines
    - composer.json, logo.png
    - vendor/ with 100 scripts that must never be seen
    """
    root = tmp_path / "project"
    write_lines(root / "index.php", 10)
    write_lines(root / "src" / "User.php", 20)
    write_lines(root / "src" / "Http" / "Router.php", 30)
    (root / "composer.json").write_text('{"name": "acme/shop"}')
    (root / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00")
    vendor = root / "vendor" / "acme" / "lib"
    vendor.mkdir(parents=True)
    for i in range(100):
        (vendor / f"Lib{i}.php").write_text("<?php\n$password = 'hunter2hunter2';\n")
    return root


@pytest.fixture(autouse=True)
def restore_root_logger(monkeypatch):
    """Undo ``setup_logging`` side effects; keep CLI stdout free of log lines."""
    monkeypatch.setenv("PHPSCAN_LOG_LEVEL", "CRITICAL")
    monkeypatch.delenv("PHPSCAN_LOG_FILE", raising=False)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
