"""
Core types for change-scoped code review.

These are the value objects that flow through the pipeline: diff ranges,
located documentation blocks, extracted declarations and the violations
reported back to the review collaborator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DeclarationKind(str, Enum):
    """Declaration shapes recognised by the extractor."""

    METHOD = "method"
    COMPUTED_PROPERTY = "computed property"
    SIGNAL = "signal"
    INPUT_PROPERTY = "input"
    OUTPUT_PROPERTY = "output"
    VIEW_CHILD_PROPERTY = "viewChild"

    @property
    def is_reactive(self) -> bool:
        """True for class fields produced by a reactivity factory call."""
        return self is not DeclarationKind.METHOD

    @property
    def label(self) -> str:
        """Capitalised label used at the start of messages."""
        return self.value[0].upper() + self.value[1:]


class Visibility(str, Enum):
    """Access modifier written on a declaration line."""

    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"
    NONE = "none"


class Severity(str, Enum):
    """Severity of a reported violation."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class LineRange:
    """Represents a range of lines in the new version of a file (1-indexed, inclusive)."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 1:
            raise ValueError("start must be >= 1")
        if self.end < self.start:
            raise ValueError("end must be >= start")

    @property
    def line_count(self) -> int:
        """Number of lines in this range."""
        return self.end - self.start + 1

    def contains(self, line: int) -> bool:
        """Check if a line number is within this range (inclusive)."""
        return self.start <= line <= self.end

    def contains_near(self, line: int, margin: int) -> bool:
        """Check if a line is within this range or up to ``margin`` lines past its end."""
        return self.start <= line <= self.end + margin


@dataclass(frozen=True)
class CommentBlock:
    """A documentation block located above a declaration.

    ``start_line`` and ``end_line`` are 0-based indices into the file's
    lines; both are -1 when no block exists.
    """

    exists: bool
    is_single_line: bool = False
    start_line: int = -1
    end_line: int = -1
    raw_text: str = ""

    def __post_init__(self) -> None:
        if self.is_single_line and self.start_line != self.end_line:
            raise ValueError("single-line block must start and end on the same line")
        if not self.exists and (self.start_line != -1 or self.end_line != -1 or self.raw_text):
            raise ValueError("absent block cannot carry boundaries or text")

    @classmethod
    def absent(cls) -> CommentBlock:
        """The canonical 'no documentation block' value."""
        return cls(exists=False)


@dataclass(frozen=True)
class ParameterSignature:
    """One declared parameter, in declaration order."""

    name: str
    declared_type: str = "unknown"

    DESTRUCTURED = "destructured"

    @property
    def is_destructured(self) -> bool:
        return self.name == self.DESTRUCTURED


@dataclass(frozen=True)
class DeclarationInfo:
    """A method or reactive property recognised on a single source line."""

    kind: DeclarationKind
    visibility: Visibility
    name: str = ""
    parameters: tuple[ParameterSignature, ...] = ()
    has_declared_return_type: bool = False
    return_type: str | None = None
    line_number: int = 0
    is_readonly: bool = False
    is_required: bool = False

    @property
    def named_parameters(self) -> list[ParameterSignature]:
        """Parameters that can be matched against documentation tags."""
        return [p for p in self.parameters if not p.is_destructured]


@dataclass
class Violation:
    """A single standards violation on a changed line."""

    file_path: str
    line_number: int
    severity: Severity
    message: str
    rule: str = ""
    suggestion: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_record(self) -> dict[str, Any]:
        """Convert to the structured record consumed by review collaborators."""
        return {
            "path": self.file_path,
            "line": self.line_number,
            "severity": self.severity.value,
            "message": self.message,
        }
