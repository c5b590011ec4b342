"""Stylesheet rules: CSS properties that should be utility classes."""

from prcheck.styles.rule_table import (
    EXEMPT_PROPERTIES,
    HARDCODED_PATTERNS,
    STYLE_PROPERTIES,
    StyleFinding,
    StyleRule,
    check_declaration,
    check_stylesheet,
)

__all__ = [
    "EXEMPT_PROPERTIES",
    "HARDCODED_PATTERNS",
    "STYLE_PROPERTIES",
    "StyleFinding",
    "StyleRule",
    "check_declaration",
    "check_stylesheet",
]
