"""Publishing violation records as a GitHub pull request review."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence

import requests

from prcheck.constants import MAX_REVIEW_COMMENTS
from prcheck.reporting.formatter import fallback_summary, review_summary
from prcheck.types import ErrorCode, ErrorContext, PublishError
from prcheck.utils.logger import logger


class PublishMode(str, Enum):
    """How the feedback ended up on the pull request."""

    NOTHING_TO_POST = "nothing-to-post"
    REVIEW = "review"
    SUMMARY_COMMENT = "summary-comment"
    FAILED = "failed"


@dataclass
class PublishResult:
    """Outcome of a publish attempt."""

    mode: PublishMode
    total_violations: int = 0
    comments_posted: int = 0
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.mode is not PublishMode.FAILED

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "mode": self.mode.value,
            "success": self.success,
            "total_violations": self.total_violations,
            "comments_posted": self.comments_posted,
            "error": self.error,
        }


class GitHubReviewPublisher:
    """Posts violation records to a pull request.

    One ``REQUEST_CHANGES`` review carries up to ``max_comments`` inline
    comments on the right (new) side of the diff. If the review cannot be
    created, a single summary comment is posted on the pull request instead.
    Neither path raises: failures are logged and reported in the result.

    Usage:
        publisher = GitHubReviewPublisher(token, "acme/shop", 42)
        result = publisher.publish(records)
    """

    def __init__(
        self,
        token: str,
        repository: str,
        pull_number: int,
        api_url: str = "https://api.github.com",
        max_comments: int = MAX_REVIEW_COMMENTS,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
    ):
        self.repository = repository
        self.pull_number = pull_number
        self.api_url = api_url.rstrip("/")
        self.max_comments = max_comments
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            }
        )

    def publish(self, records: Sequence[dict[str, Any]]) -> PublishResult:
        """Publish records of the form ``{path, line, body}``."""
        total = len(records)
        if total == 0:
            logger.info("No violations to post")
            return PublishResult(PublishMode.NOTHING_TO_POST)

        comments = [self._to_comment(r) for r in records[: self.max_comments]]
        if total > self.max_comments:
            logger.warning(f"Posting the first {self.max_comments} of {total} violations")

        try:
            self._post(
                f"/repos/{self.repository}/pulls/{self.pull_number}/reviews",
                {
                    "body": review_summary(total),
                    "event": "REQUEST_CHANGES",
                    "comments": comments,
                },
                operation="create_review",
            )
            logger.info(f"Review posted with {len(comments)} inline comment(s)")
            return PublishResult(PublishMode.REVIEW, total, len(comments))
        except PublishError as e:
            logger.warning(f"Could not post review: {e}")

        try:
            self._post(
                f"/repos/{self.repository}/issues/{self.pull_number}/comments",
                {"body": fallback_summary(total)},
                operation="create_summary_comment",
            )
            logger.info("Posted summary comment instead of review")
            return PublishResult(PublishMode.SUMMARY_COMMENT, total, 0)
        except PublishError as e:
            logger.error(f"Could not post summary comment: {e}")
            return PublishResult(PublishMode.FAILED, total, 0, error=str(e))

    @staticmethod
    def _to_comment(record: dict[str, Any]) -> dict[str, Any]:
        return {
            "path": record["path"],
            "line": record["line"],
            "side": "RIGHT",
            "body": record.get("body") or record.get("message", ""),
        }

    def _post(self, endpoint: str, payload: dict[str, Any], operation: str) -> dict[str, Any]:
        url = f"{self.api_url}{endpoint}"
        context = ErrorContext(operation=operation, component="github", additional_info={"url": url})
        try:
            response = self._session.post(url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.Timeout as e:
            raise PublishError(
                f"{operation} timed out after {self.timeout}s",
                code=ErrorCode.NETWORK_TIMEOUT,
                context=context,
                original_error=e,
            ) from e
        except requests.RequestException as e:
            raise PublishError(f"{operation} failed: {e}", context=context, original_error=e) from e

        try:
            return response.json()
        except ValueError:
            return {}
