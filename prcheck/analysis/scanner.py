"""Change-scoped violation scanning.

The ViolationScanner walks a file line by line and reports only what the
change touched:

- Line detectors (debug statements, TODO/FIXME markers) run on lines inside
  a changed range.
- Declaration checks run on lines inside a changed range or up to
  ``near_change_margin`` lines past one, because editing a documentation
  block moves the declaration below it outside the literal hunk.
- Reactive-property shapes count only at class-body level. The same
  assignment inside a method body is a local, not a field.

Violations come out in file order (line 1 to N), then detector order within
a line. Nothing is sorted afterwards.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from prcheck.analysis.comment_blocks import CommentBlockLocator
from prcheck.analysis.consistency import ConsistencyValidator
from prcheck.analysis.declarations import RegexDeclarationExtractor, member_level_lines
from prcheck.analysis.diff_ranges import is_line_changed, is_near_changed, whole_file_range
from prcheck.analysis.protocols import DeclarationExtractor
from prcheck.constants import NEAR_CHANGE_MARGIN
from prcheck.styles import check_stylesheet
from prcheck.types import (
    DeclarationInfo,
    DeclarationKind,
    LineRange,
    Severity,
    Violation,
    Visibility,
)


@dataclass(frozen=True)
class LineDetector:
    """A literal pattern that must not appear on a changed line."""

    rule: str
    pattern: re.Pattern[str]
    severity: Severity
    message: str


LINE_DETECTORS: tuple[LineDetector, ...] = (
    LineDetector(
        rule="console-log",
        pattern=re.compile(r"console\.log\b"),
        severity=Severity.WARNING,
        message="`console.log()` should not be in production code. Use a logging service instead.",
    ),
    LineDetector(
        rule="debugger",
        pattern=re.compile(r"\bdebugger\b"),
        severity=Severity.ERROR,
        message="`debugger` statement must be removed before merge.",
    ),
    LineDetector(
        rule="todo",
        pattern=re.compile(r"TODO"),
        severity=Severity.WARNING,
        message="Track in issue tracker or resolve before merge.",
    ),
    LineDetector(
        rule="fixme",
        pattern=re.compile(r"FIXME"),
        severity=Severity.WARNING,
        message="This issue needs to be resolved before merge.",
    ),
)


def split_lines(content: str) -> list[str]:
    """Split on ``\\n`` and drop a trailing ``\\r`` from each line."""
    return [line.rstrip("\r") for line in content.split("\n")]


class ViolationScanner:
    """Scans one file's changed lines for standards violations.

    The scanner holds no per-file state; one instance can scan any number of
    files, in any order.

    Usage:
        scanner = ViolationScanner()
        ranges = DiffRangeComputer().compute(diff_text)
        violations = scanner.scan("src/app/cart.ts", content, ranges)
    """

    def __init__(
        self,
        extractor: DeclarationExtractor | None = None,
        locator: CommentBlockLocator | None = None,
        validator: ConsistencyValidator | None = None,
        near_change_margin: int = NEAR_CHANGE_MARGIN,
        detectors: Sequence[LineDetector] = LINE_DETECTORS,
    ) -> None:
        self.extractor = extractor or RegexDeclarationExtractor()
        self.locator = locator or CommentBlockLocator()
        self.validator = validator or ConsistencyValidator()
        self.near_change_margin = near_change_margin
        self.detectors = tuple(detectors)

    # ----------------------------------------------------------------
    # Source files
    # ----------------------------------------------------------------

    def scan(
        self,
        file_path: str,
        content: str,
        changed_ranges: Sequence[LineRange],
    ) -> list[Violation]:
        """Report violations on the changed (and near-changed) lines of a file."""
        if not changed_ranges:
            return []

        lines = split_lines(content)
        member_level = member_level_lines(lines)
        violations: list[Violation] = []

        for index, line in enumerate(lines):
            line_number = index + 1

            if is_line_changed(line_number, changed_ranges):
                violations.extend(self._detect_line(file_path, line, line_number))

            if not is_near_changed(line_number, changed_ranges, self.near_change_margin):
                continue

            declaration = self.extractor.extract(line, line_number)
            if declaration is None:
                continue
            if declaration.kind.is_reactive and not member_level[index]:
                # Local assignment inside a method body, not a class field
                continue
            violations.extend(self._check_declaration(file_path, lines, index, declaration))

        return violations

    def scan_full(self, file_path: str, content: str) -> list[Violation]:
        """Scan every line, as if the whole file were one changed hunk."""
        line_count = len(split_lines(content))
        return self.scan(file_path, content, whole_file_range(line_count))

    def _detect_line(self, file_path: str, line: str, line_number: int) -> list[Violation]:
        return [
            Violation(
                file_path=file_path,
                line_number=line_number,
                severity=detector.severity,
                message=detector.message,
                rule=detector.rule,
            )
            for detector in self.detectors
            if detector.pattern.search(line)
        ]

    def _check_declaration(
        self,
        file_path: str,
        lines: Sequence[str],
        index: int,
        declaration: DeclarationInfo,
    ) -> list[Violation]:
        line_number = index + 1
        block = self.locator.locate(lines, index)
        violations = [
            Violation(
                file_path=file_path,
                line_number=line_number,
                severity=Severity.ERROR if error.critical else Severity.WARNING,
                message=error.message,
                rule=error.code.value,
                metadata={"declaration": declaration.name, "kind": declaration.kind.value},
            )
            for error in self.validator.validate(declaration, block)
        ]

        if declaration.visibility is Visibility.NONE:
            violations.append(
                Violation(
                    file_path=file_path,
                    line_number=line_number,
                    severity=Severity.WARNING,
                    message=f"Missing access modifier on {declaration.kind.value}",
                    rule="missing-access-modifier",
                )
            )

        if declaration.kind is DeclarationKind.METHOD and not declaration.has_declared_return_type:
            violations.append(
                Violation(
                    file_path=file_path,
                    line_number=line_number,
                    severity=Severity.WARNING,
                    message="Method missing return type annotation",
                    rule="missing-return-type",
                )
            )

        return violations

    # ----------------------------------------------------------------
    # Stylesheets
    # ----------------------------------------------------------------

    def scan_stylesheet(
        self,
        file_path: str,
        content: str,
        changed_ranges: Sequence[LineRange],
    ) -> list[Violation]:
        """Report utility-class findings that sit on changed lines."""
        if not changed_ranges:
            return []

        return [
            Violation(
                file_path=file_path,
                line_number=finding.line_number,
                severity=finding.severity,
                message=finding.message,
                rule=f"style-{finding.category}",
                suggestion=finding.utility,
                metadata={"property": finding.property, "value": finding.value},
            )
            for finding in check_stylesheet(content)
            if is_line_changed(finding.line_number, changed_ranges)
        ]
