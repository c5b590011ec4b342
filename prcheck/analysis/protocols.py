"""Extractor protocol for the review pipeline.

Declaration recognition is a line-pattern heuristic today. The scanner only
depends on this Protocol, so a syntax-tree backed extractor can replace the
regex one without changing the locator, validator or scanner.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from prcheck.types import DeclarationInfo


@runtime_checkable
class DeclarationExtractor(Protocol):
    """Recognises declarations on single source lines."""

    @property
    def name(self) -> str:
        """Extractor identifier (e.g., 'regex')."""
        ...

    def extract(self, line: str, line_number: int = 0) -> DeclarationInfo | None:
        """Return the declaration on ``line``, or None if the line declares nothing."""
        ...
