"""Output formatting and review publishing."""

from prcheck.reporting.formatter import (
    count_by_severity,
    fallback_summary,
    format_text_report,
    render_comment_body,
    review_summary,
    to_review_record,
)
from prcheck.reporting.github import GitHubReviewPublisher, PublishMode, PublishResult

__all__ = [
    "GitHubReviewPublisher",
    "PublishMode",
    "PublishResult",
    "count_by_severity",
    "fallback_summary",
    "format_text_report",
    "render_comment_body",
    "review_summary",
    "to_review_record",
]
