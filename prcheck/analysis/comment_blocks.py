"""Documentation block location.

Finds the ``/** ... */`` block that documents the declaration on a given
line by scanning backward through the file. There is no parser behind this:
association is decided by line patterns only.

The scan is a small state machine:

    SCANNING  - skip blank and decorator lines, then classify the first
                remaining line
    IN_BLOCK  - walk backward from a closing / mid-block line to the opener
    DONE      - a documentation block was found
    REJECTED  - no documentation block is associated with the target

A block separated from its declaration by anything other than blank lines or
decorators is not associated with it.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Sequence

from prcheck.types import CommentBlock

# /** ... */ on one line
DOC_SINGLE_LINE_RE = re.compile(r"^\s*/\*\*(?!/).*\*/\s*$")
# /** opener (not the empty plain comment /**/)
DOC_OPEN_RE = re.compile(r"^\s*/\*\*(?!/)")
# /* opener of a plain, non-documentation block
PLAIN_OPEN_RE = re.compile(r"^\s*/\*(?!\*(?!/))")
# */ alone on its line
BLOCK_CLOSE_RE = re.compile(r"^\s*\*/\s*$")
# " * text" continuation line
MID_BLOCK_RE = re.compile(r"^\s*\*(?!/)")
# any line ending a block
CLOSE_MARKER_RE = re.compile(r"\*/\s*$")
# @Component({ / @HostListener('x') / @Input()
DECORATOR_RE = re.compile(r"^\s*@[A-Z]\w*\s*[({]")


class ScanState(str, Enum):
    """States of the backward scan."""

    SCANNING = "scanning"
    IN_BLOCK = "in_block"
    DONE = "done"
    REJECTED = "rejected"


def is_inside_open_block(lines: Sequence[str], index: int) -> bool:
    """True when ``lines[index]`` sits inside a ``/* ... */`` block opened above it."""
    for j in range(index - 1, -1, -1):
        text = lines[j]
        close = text.rfind("*/")
        opened = text.rfind("/*")
        if close == -1 and opened == -1:
            continue
        return opened > close
    return False


def is_decorator_line(lines: Sequence[str], index: int) -> bool:
    """True for a platform annotation line that is not part of a comment block."""
    return bool(DECORATOR_RE.match(lines[index])) and not is_inside_open_block(lines, index)


def _is_closing_line(line: str) -> bool:
    """A line that ends a block without opening one: ``*/`` or ``text */``."""
    if BLOCK_CLOSE_RE.match(line):
        return True
    return bool(CLOSE_MARKER_RE.search(line)) and "/*" not in line


class _BackwardScan:
    """One run of the locator state machine over a file's lines."""

    def __init__(self, lines: Sequence[str], target_index: int) -> None:
        self.lines = lines
        self.target_index = min(target_index, len(lines))
        self.state = ScanState.SCANNING
        self.cursor = self.target_index - 1
        self.start = -1
        self.end = -1
        self.single_line = False

    def run(self) -> CommentBlock:
        handlers = {
            ScanState.SCANNING: self._scan,
            ScanState.IN_BLOCK: self._walk_block,
        }
        while self.state in handlers:
            handlers[self.state]()
        return self._result()

    # ----------------------------------------------------------------
    # States
    # ----------------------------------------------------------------

    def _scan(self) -> None:
        self._skip_preamble()
        if self.cursor < 0:
            self.state = ScanState.REJECTED
            return

        line = self.lines[self.cursor]

        if DOC_SINGLE_LINE_RE.match(line):
            self._finish(self.cursor, self.cursor, single_line=True)
        elif _is_closing_line(line) or MID_BLOCK_RE.match(line):
            self.end = self.cursor
            self.state = ScanState.IN_BLOCK
        elif DOC_OPEN_RE.match(line):
            self._close_forward(self.cursor)
        else:
            self.state = ScanState.REJECTED

    def _walk_block(self) -> None:
        j = self.cursor
        line = self.lines[j]

        if DOC_OPEN_RE.match(line):
            self._finish(j, self.end, single_line=False)
            return
        if PLAIN_OPEN_RE.match(line):
            # Closing line belongs to a plain /* */ comment
            self.state = ScanState.REJECTED
            return
        if j != self.end and CLOSE_MARKER_RE.search(line) and not MID_BLOCK_RE.match(line):
            # Reached the end of an earlier block without seeing our opener.
            # " * text /* x */" is still our block, quoting a comment.
            self.state = ScanState.REJECTED
            return

        self.cursor -= 1
        if self.cursor < 0:
            self.state = ScanState.REJECTED

    # ----------------------------------------------------------------
    # Helpers
    # ----------------------------------------------------------------

    def _skip_preamble(self) -> None:
        """Skip blank lines and decorators between the declaration and its docs."""
        while self.cursor >= 0:
            if not self.lines[self.cursor].strip():
                self.cursor -= 1
            elif is_decorator_line(self.lines, self.cursor):
                self.cursor -= 1
            else:
                break

    def _close_forward(self, opener: int) -> None:
        """Bound a block whose opener is the first line above the declaration."""
        for k in range(opener, self.target_index):
            if CLOSE_MARKER_RE.search(self.lines[k]):
                self._finish(opener, k, single_line=False)
                return
        self.state = ScanState.REJECTED

    def _finish(self, start: int, end: int, single_line: bool) -> None:
        self.start = start
        self.end = end
        self.single_line = single_line
        self.state = ScanState.DONE

    def _result(self) -> CommentBlock:
        if self.state is not ScanState.DONE:
            return CommentBlock.absent()
        text = "\n".join(line.rstrip("\r") for line in self.lines[self.start : self.end + 1])
        return CommentBlock(
            exists=True,
            is_single_line=self.single_line,
            start_line=self.start,
            end_line=self.end,
            raw_text=text,
        )


class CommentBlockLocator:
    """Locates the documentation block immediately preceding a line.

    Stateless: ``locate`` is a pure function of its arguments, so one
    locator can be shared across files.

    Usage:
        block = CommentBlockLocator().locate(lines, index)
        if block.exists and block.is_single_line:
            ...
    """

    def locate(self, lines: Sequence[str], target_index: int) -> CommentBlock:
        """Find the documentation block above ``lines[target_index]``.

        Args:
            lines: File content split on newlines.
            target_index: 0-based index of the declaration line.

        Returns:
            The located block, or ``CommentBlock.absent()``.
        """
        if target_index <= 0 or not lines:
            return CommentBlock.absent()
        return _BackwardScan(lines, target_index).run()
