"""
Security scanning patterns — the default rule sets for the audit.

Two families ship by default:

- credentials: hardcoded API keys, tokens and passwords assigned to a
  quoted literal;
- unsafe calls: dynamic code / command execution.

They are plain ``PatternRule`` values so ``phpscan.yml`` can replace or
extend them (``secret_patterns`` / ``unsafe_patterns``).
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from phpscan.core.models.config import PatternRule

CREDENTIAL_PATTERNS: tuple[PatternRule, ...] = (
    PatternRule(
        name="API Key Assignment",
        pattern=r"""apikey\s*=\s*['"][a-zA-Z0-9_\-]{32,}['"]""",
    ),
    PatternRule(
        name="Token Assignment",
        pattern=r"""token\s*=\s*['"][a-zA-Z0-9_\-]{32,}['"]""",
    ),
    PatternRule(
        name="Password Assignment",
        pattern=r"""password\s*=\s*['"][^'"]{6,}['"]""",
    ),
)

UNSAFE_CALL_PATTERNS: tuple[PatternRule, ...] = (
    PatternRule(name="eval() call", pattern=r"eval\("),
    PatternRule(name="exec() call", pattern=r"exec\("),
)


def compile_rules(rules: Iterable[PatternRule]) -> list[tuple[str, re.Pattern[str]]]:
    """Compile rules into ``(name, pattern)`` pairs for the scanner."""
    return [(rule.name, rule.compile()) for rule in rules]
