"""Rendering of violations for humans and for review comments.

Two outputs:

- ``render_comment_body`` -> markdown body of one inline review comment
- ``format_text_report`` -> grouped, per-file terminal report for ``check``/``css``
"""

from __future__ import annotations

from collections import OrderedDict
from typing import Any, Iterable, Sequence

from prcheck.types import Severity, Violation

# rule -> (emoji, heading) for inline comment bodies
_RULE_HEADINGS: dict[str, tuple[str, str]] = {
    "console-log": ("⚠️", "Code Standard Violation"),
    "debugger": ("❌", "Critical"),
    "todo": ("📝", "TODO"),
    "fixme": ("🔧", "FIXME"),
    "missing-doc": ("📚", "Missing JSDoc"),
    "missing-access-modifier": ("⚠️", "Code Standard"),
    "missing-return-type": ("⚠️", "Code Standard"),
}
_DOC_HEADING = ("📚", "JSDoc Standard")
_STYLE_ERROR_HEADING = ("❌", "Error")
_STYLE_HEADING = ("🎨", "CSS Standard")

REVIEW_SUMMARY_TITLE = "## 🔍 Code Standards Review"
FALLBACK_SUMMARY_TITLE = "## 🔍 Code Standards Violations"


def _heading(violation: Violation) -> tuple[str, str]:
    if violation.rule in _RULE_HEADINGS:
        return _RULE_HEADINGS[violation.rule]
    if violation.rule.startswith("style-"):
        return _STYLE_ERROR_HEADING if violation.severity is Severity.ERROR else _STYLE_HEADING
    return _DOC_HEADING


def render_comment_body(violation: Violation) -> str:
    """Markdown body for the inline review comment of one violation."""
    emoji, title = _heading(violation)
    body = f"{emoji} **{title}**: {violation.message}"
    if violation.suggestion:
        body += f"\n\nSuggestion: Use `{violation.suggestion}` instead."
    return body


def to_review_record(violation: Violation) -> dict[str, Any]:
    """Structured record ``{path, line, severity, message, body}`` for the review step."""
    record = violation.to_record()
    record["body"] = render_comment_body(violation)
    return record


def review_summary(count: int) -> str:
    """Top-level body of a review carrying inline comments."""
    return (
        f"{REVIEW_SUMMARY_TITLE}\n\n"
        f"Found {count} violation(s) that need to be resolved. See inline comments below."
    )


def fallback_summary(count: int) -> str:
    """Body of the single issue comment posted when the review cannot be created."""
    return f"{FALLBACK_SUMMARY_TITLE}\n\nFound {count} violations. Check logs for details."


def format_text_report(violations: Sequence[Violation], files_checked: int | None = None) -> str:
    """Human-readable report grouped by file, in first-seen file order."""
    if not violations:
        suffix = f" ({files_checked} file(s) checked)" if files_checked is not None else ""
        return f"✅ No violations found{suffix}"

    by_file: "OrderedDict[str, list[Violation]]" = OrderedDict()
    for violation in violations:
        by_file.setdefault(violation.file_path, []).append(violation)

    lines: list[str] = []
    for file_path, items in by_file.items():
        lines.append(f"\n📄 {file_path}")
        for violation in items:
            marker = "❌" if violation.severity is Severity.ERROR else "⚠️"
            lines.append(f"  {marker} Line {violation.line_number}: {violation.message}")
            if violation.suggestion:
                lines.append(f"     → {violation.suggestion}")

    errors = count_by_severity(violations, Severity.ERROR)
    warnings = count_by_severity(violations, Severity.WARNING)
    lines.append("")
    lines.append(f"Found {len(violations)} violation(s): {errors} error(s), {warnings} warning(s)")
    return "\n".join(lines).lstrip("\n")


def count_by_severity(violations: Iterable[Violation], severity: Severity) -> int:
    return sum(1 for v in violations if v.severity is severity)
