"""Unified diff hunk arithmetic.

Turns the output of ``git diff -U0`` into the line ranges of the new file
version that a change touched, and answers the two window queries the
scanner needs (changed-only and near-changed).
"""

from __future__ import annotations

import re
from typing import Iterable

from prcheck.constants import NEAR_CHANGE_MARGIN
from prcheck.types import LineRange

HUNK_HEADER_RE = re.compile(r"^@@ -\d+(?:,\d+)? \+(\d+)(?:,(\d+))? @@")

# Deletions, "\ No newline at end of file" markers and file headers
_NON_ADVANCING_PREFIXES = ("-", "\\", "+++", "diff --git", "index ")


class DiffRangeComputer:
    """Computes changed line ranges from unified diff text.

    The authoritative range for each hunk comes from its header. A running
    cursor over the hunk body is also maintained (exposed as
    ``last_cursor``) so callers can see where the last hunk ended in the
    new file.

    Usage:
        ranges = DiffRangeComputer().compute(diff_text)
        if not ranges:
            ...  # new, binary or unchanged file: skip it
    """

    def __init__(self) -> None:
        self.last_cursor = 0

    def compute(self, diff_text: str) -> list[LineRange]:
        """Parse hunk headers into changed ranges of the new file."""
        ranges: list[LineRange] = []
        cursor = 0

        for raw_line in diff_text.split("\n"):
            line = raw_line.rstrip("\r")
            match = HUNK_HEADER_RE.match(line)
            if match:
                new_start = int(match.group(1))
                new_count = int(match.group(2)) if match.group(2) else 1
                # Pure deletions report a count of 0; anchor them on one line.
                new_count = max(new_count, 1)
                start = max(new_start, 1)
                ranges.append(LineRange(start=start, end=start + new_count - 1))
                cursor = new_start
                continue

            if not ranges or not line:
                continue
            if line.startswith(_NON_ADVANCING_PREFIXES):
                continue
            cursor += 1

        self.last_cursor = cursor
        return ranges


def is_line_changed(line_number: int, ranges: Iterable[LineRange]) -> bool:
    """True when the line falls strictly inside a changed range."""
    return any(r.contains(line_number) for r in ranges)


def is_near_changed(
    line_number: int,
    ranges: Iterable[LineRange],
    margin: int = NEAR_CHANGE_MARGIN,
) -> bool:
    """True when the line is inside a changed range or up to ``margin`` lines past one."""
    return any(r.contains_near(line_number, margin) for r in ranges)


def whole_file_range(line_count: int) -> list[LineRange]:
    """A single range covering every line of a file, for full-file checks."""
    return [LineRange(start=1, end=max(line_count, 1))]
