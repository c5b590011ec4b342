"""
Service layer for prcheck.

Services coordinate the analysis engine with git, the file system and the
review configuration, and are what the CLI talks to.
"""

from .review_service import ReviewReport, ReviewService, SkippedFile

__all__ = [
    "ReviewReport",
    "ReviewService",
    "SkippedFile",
]
