"""Utility-class rule table for stylesheets.

Maps raw CSS properties to the utility classes that should replace them and
flags hard-coded literals (colours, font families) on strict properties.
The table is plain data: add or relax a rule by editing a mapping entry,
not code.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from prcheck.types import Severity


@dataclass(frozen=True)
class StyleRule:
    """Suggested utility for a CSS property."""

    utility: str
    category: str
    strict: bool = False


@dataclass(frozen=True)
class StyleFinding:
    """A stylesheet line that should use a utility class or design token."""

    line_number: int
    property: str
    value: str
    utility: str
    category: str
    severity: Severity
    message: str
    in_host_selector: bool = False


# CSS properties that have direct utility equivalents
STYLE_PROPERTIES: dict[str, StyleRule] = {
    # Colors
    "color": StyleRule("text-{color}", "color", strict=True),
    "background-color": StyleRule("bg-{color}", "color", strict=True),
    "border-color": StyleRule("border-{color}", "color", strict=True),
    # Spacing
    "margin": StyleRule("m-{size}", "spacing"),
    "margin-top": StyleRule("mt-{size}", "spacing"),
    "margin-right": StyleRule("mr-{size}", "spacing"),
    "margin-bottom": StyleRule("mb-{size}", "spacing"),
    "margin-left": StyleRule("ml-{size}", "spacing"),
    "padding": StyleRule("p-{size}", "spacing"),
    "padding-top": StyleRule("pt-{size}", "spacing"),
    "padding-right": StyleRule("pr-{size}", "spacing"),
    "padding-bottom": StyleRule("pb-{size}", "spacing"),
    "padding-left": StyleRule("pl-{size}", "spacing"),
    "gap": StyleRule("gap-{size}", "spacing"),
    # Sizing
    "width": StyleRule("w-{size}", "sizing"),
    "height": StyleRule("h-{size}", "sizing"),
    "min-width": StyleRule("min-w-{size}", "sizing"),
    "min-height": StyleRule("min-h-{size}", "sizing"),
    "max-width": StyleRule("max-w-{size}", "sizing"),
    "max-height": StyleRule("max-h-{size}", "sizing"),
    # Borders
    "border": StyleRule("border border-{color}", "border"),
    "border-radius": StyleRule("rounded-{size}", "border"),
    "border-width": StyleRule("border-{width}", "border"),
    # Layout
    "display": StyleRule("block|flex|grid|hidden|inline", "display"),
    "flex-direction": StyleRule("flex-row|flex-col", "flexbox"),
    "justify-content": StyleRule("justify-{align}", "flexbox"),
    "align-items": StyleRule("items-{align}", "flexbox"),
    "flex-wrap": StyleRule("flex-wrap|flex-nowrap", "flexbox"),
    # Text
    "font-size": StyleRule("text-{size}", "text"),
    "font-weight": StyleRule("font-{weight}", "text"),
    "font-family": StyleRule("font-{family}", "text", strict=True),
    "line-height": StyleRule("leading-{size}", "text"),
    "text-align": StyleRule("text-{align}", "text"),
    # Effects
    "opacity": StyleRule("opacity-{value}", "effects"),
    "box-shadow": StyleRule("shadow-{size}", "effects"),
}

# Properties never enforced: animation, positioning and typography details
# that have no one-to-one utility
EXEMPT_PROPERTIES: frozenset[str] = frozenset(
    {
        "animation",
        "animation-name",
        "animation-duration",
        "animation-timing-function",
        "animation-delay",
        "animation-iteration-count",
        "animation-direction",
        "animation-fill-mode",
        "transition",
        "transition-property",
        "transition-duration",
        "transition-timing-function",
        "transition-delay",
        "transform",
        "transform-origin",
        "perspective",
        "perspective-origin",
        "backface-visibility",
        "clip-path",
        "mask",
        "filter",
        "backdrop-filter",
        "mix-blend-mode",
        "z-index",
        "position",
        "top",
        "right",
        "bottom",
        "left",
        "pointer-events",
        "user-select",
        "cursor",
        "list-style",
        "content",
        "counter-reset",
        "counter-increment",
        "quotes",
        "writing-mode",
        "direction",
        "overflow",
        "overflow-x",
        "overflow-y",
        "white-space",
        "word-break",
        "hyphens",
        "text-transform",
        "text-decoration",
        "text-decoration-color",
        "text-decoration-line",
        "text-decoration-style",
        "text-shadow",
        "letter-spacing",
        "word-spacing",
        "font-style",
        "font-variant",
        "font-feature-settings",
        "outline",
        "outline-width",
        "outline-style",
        "outline-color",
        "outline-offset",
    }
)

# Hard-coded literals that should come from the design system
HARDCODED_PATTERNS: dict[str, re.Pattern[str]] = {
    "hex_color": re.compile(r"^#[0-9A-Fa-f]{3,8}$"),
    "rgb_color": re.compile(r"^rgba?\(", re.IGNORECASE),
    "hsl_color": re.compile(r"^hsla?\(", re.IGNORECASE),
    "named_color": re.compile(
        r"^(red|blue|green|yellow|purple|orange|pink|white|black|gray|grey|brown|navy|teal"
        r"|cyan|magenta|lime|maroon|khaki|salmon|coral|gold|silver|bronze)$",
        re.IGNORECASE,
    ),
    "font_family": re.compile(
        r"^(Arial|Helvetica|Times New Roman|Georgia|Verdana|Courier|Comic Sans|Impact"
        r"|Trebuchet MS|Palatino|Garamond|Bookman|Tahoma|Lucida|Sans-serif|Serif|Monospace)$",
        re.IGNORECASE,
    ),
}

_COLOR_PATTERNS = ("hex_color", "rgb_color", "hsl_color", "named_color")
_COLOR_PROPERTIES = {"color", "background-color", "border-color"}

DECLARATION_RE = re.compile(r"^\s*([a-z-]+)\s*:\s*(.+?)\s*(?:;|$)")
VAR_RE = re.compile(r"^var\s*\(\s*([^)]+)\s*\)")
TOKEN_FUNCTION_RE = re.compile(r"^(theme|var)\s*\(")
THEME_RE = re.compile(r"^theme\s*\(")


def _hardcoded_kind(prop: str, value: str) -> str | None:
    if prop in _COLOR_PROPERTIES:
        if any(HARDCODED_PATTERNS[name].match(value) for name in _COLOR_PATTERNS):
            return "color"
    elif prop == "font-family" and HARDCODED_PATTERNS["font_family"].match(value):
        return "font-family"
    return None


def check_declaration(
    prop: str,
    value: str,
    line_number: int,
    selector: str = "",
) -> StyleFinding | None:
    """Check a single ``property: value`` declaration against the table."""
    if prop in EXEMPT_PROPERTIES or prop not in STYLE_PROPERTIES:
        return None

    rule = STYLE_PROPERTIES[prop]

    def finding(severity: Severity, message: str, in_host: bool = False) -> StyleFinding:
        return StyleFinding(
            line_number=line_number,
            property=prop,
            value=value,
            utility=rule.utility,
            category=rule.category,
            severity=severity,
            message=message,
            in_host_selector=in_host,
        )

    if rule.strict:
        var_match = VAR_RE.match(value)
        if var_match:
            if "," not in var_match.group(1):
                return finding(
                    Severity.ERROR,
                    "STRICT: var() must include a fallback value. "
                    "Example: var(--custom-color, theme('colors.accent.main'))",
                )
            return None
        if THEME_RE.match(value):
            return None
        kind = _hardcoded_kind(prop, value)
        if kind:
            return finding(
                Severity.ERROR,
                f"STRICT: Hardcoded {kind} value '{value}' found. "
                "Must use utilities or global variables.",
            )

    if TOKEN_FUNCTION_RE.match(value):
        return None

    in_host = ":host" in selector
    suggestion = f"@apply {rule.utility}" if in_host else f"utility '{rule.utility}'"
    return finding(Severity.WARNING, f"Property '{prop}' should use {suggestion}", in_host)


def check_stylesheet(content: str) -> list[StyleFinding]:
    """Check every declaration of a stylesheet, tracking the current selector."""
    findings: list[StyleFinding] = []
    selector = ""

    for index, raw_line in enumerate(content.split("\n")):
        line = raw_line.rstrip("\r")
        if "{" in line:
            selector = line.split("{", 1)[0].strip()

        match = DECLARATION_RE.match(line)
        if not match:
            continue

        result = check_declaration(match.group(1), match.group(2).strip(), index + 1, selector)
        if result is not None:
            findings.append(result)

    return findings
