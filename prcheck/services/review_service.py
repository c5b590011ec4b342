"""Review service coordinating git, file access and the violation scanner."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Sequence

from prcheck.analysis import (
    ConsistencyValidator,
    DiffRangeComputer,
    ViolationScanner,
    whole_file_range,
)
from prcheck.config import ReviewConfig
from prcheck.constants import MAX_FILE_SIZE
from prcheck.reporting.formatter import to_review_record
from prcheck.types import (
    DiffUnavailableError,
    ErrorCode,
    ErrorContext,
    FileReadError,
    Severity,
    Violation,
)
from prcheck.utils.logger import generate_run_id, logger, with_run_id
from prcheck.utils.serialization import serialize_to_primitives
from prcheck.vcs import GitClient, is_source_file, is_style_file


@dataclass
class SkippedFile:
    """A file that contributed nothing because it could not be processed."""

    file_path: str
    reason: str

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"file_path": self.file_path, "reason": self.reason}


@dataclass
class ReviewReport:
    """Result of one review run."""

    run_id: str
    violations: list[Violation] = field(default_factory=list)
    files_checked: list[str] = field(default_factory=list)
    files_skipped: list[SkippedFile] = field(default_factory=list)

    @property
    def has_violations(self) -> bool:
        return bool(self.violations)

    @property
    def error_count(self) -> int:
        return sum(1 for v in self.violations if v.severity is Severity.ERROR)

    def to_records(self) -> list[dict[str, Any]]:
        """Violation records ``{path, line, severity, message, body}`` in scan order."""
        return [to_review_record(v) for v in self.violations]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "run_id": self.run_id,
            "violations": [serialize_to_primitives(v) for v in self.violations],
            "files_checked": self.files_checked,
            "files_skipped": [s.to_dict() for s in self.files_skipped],
        }


class ReviewService:
    """Service for change-scoped and full-file standards reviews.

    Provides:
    - Diff-scoped review of a branch against a base reference
    - Full-file checks of explicit source files
    - Full-file checks of stylesheets

    A file whose diff or content cannot be obtained is logged and skipped;
    it never aborts the run.

    Usage:
        service = ReviewService(load_config())
        report = service.review_changes()
        print(json.dumps(report.to_records()))
    """

    def __init__(
        self,
        config: Optional[ReviewConfig] = None,
        git: Optional[GitClient] = None,
        scanner: Optional[ViolationScanner] = None,
        root: str | Path = ".",
    ):
        """Initialize review service.

        Args:
            config: Review settings (defaults when omitted)
            git: Git client (one rooted at ``root`` when omitted)
            scanner: Violation scanner (built from ``config`` when omitted)
            root: Directory file paths are resolved against
        """
        self._config = config or ReviewConfig()
        self._root = Path(root)
        self._git = git or GitClient(self._root)
        self._scanner = scanner or ViolationScanner(
            validator=ConsistencyValidator(self._config.return_tag_policy),
            near_change_margin=self._config.near_change_margin,
        )
        self._diff_ranges = DiffRangeComputer()

    @property
    def config(self) -> ReviewConfig:
        """Get review configuration."""
        return self._config

    @property
    def git(self) -> GitClient:
        """Get git client."""
        return self._git

    # ----------------------------------------------------------------
    # File selection
    # ----------------------------------------------------------------

    def _is_source(self, path: str) -> bool:
        return is_source_file(path, self._config.source_extensions, self._config.excluded_suffixes)

    def _is_style(self, path: str) -> bool:
        return is_style_file(path, self._config.style_extensions)

    def select_source_files(self, paths: Sequence[str]) -> list[str]:
        """Reviewable source files from ``paths``, order preserved."""
        return [p for p in paths if self._is_source(p)]

    def select_style_files(self, paths: Sequence[str]) -> list[str]:
        """Stylesheets from ``paths``, order preserved."""
        return [p for p in paths if self._is_style(p)]

    # ----------------------------------------------------------------
    # Runs
    # ----------------------------------------------------------------

    def review_changes(self, base_ref: Optional[str] = None) -> ReviewReport:
        """Scan the lines this branch changed relative to ``base_ref``.

        Source files are reported first, then stylesheets, each in the order
        git lists them.

        Raises:
            DiffUnavailableError: The changed-file list itself cannot be obtained
        """
        base_ref = base_ref or self._config.base_ref
        report = ReviewReport(run_id=generate_run_id())

        with with_run_id(report.run_id):
            changed = self._git.changed_files(base_ref)
            logger.info(f"Reviewing {len(changed)} changed file(s) against {base_ref}")

            for path in self.select_source_files(changed):
                self._review_file(report, path, base_ref, stylesheet=False)
            for path in self.select_style_files(changed):
                self._review_file(report, path, base_ref, stylesheet=True)

            logger.info(f"Found {len(report.violations)} violation(s)")
        return report

    def check_files(self, paths: Sequence[str]) -> ReviewReport:
        """Check every line of the given source files."""
        report = ReviewReport(run_id=generate_run_id())
        with with_run_id(report.run_id):
            for path in self.select_source_files(paths):
                with with_run_id(report.run_id, path):
                    content = self._read_or_skip(report, path)
                    if content is None:
                        continue
                    report.files_checked.append(path)
                    report.violations.extend(self._scanner.scan_full(path, content))
        return report

    def check_stylesheets(self, paths: Sequence[str]) -> ReviewReport:
        """Check every declaration of the given stylesheets."""
        report = ReviewReport(run_id=generate_run_id())
        with with_run_id(report.run_id):
            for path in self.select_style_files(paths):
                with with_run_id(report.run_id, path):
                    content = self._read_or_skip(report, path)
                    if content is None:
                        continue
                    report.files_checked.append(path)
                    ranges = whole_file_range(content.count("\n") + 1)
                    report.violations.extend(self._scanner.scan_stylesheet(path, content, ranges))
        return report

    # ----------------------------------------------------------------
    # Per-file helpers
    # ----------------------------------------------------------------

    def _review_file(self, report: ReviewReport, path: str, base_ref: str, stylesheet: bool) -> None:
        with with_run_id(report.run_id, path):
            try:
                diff_text = self._git.unified_diff(path, base_ref)
            except DiffUnavailableError as e:
                logger.warning(f"Skipping {path}: {e}")
                report.files_skipped.append(SkippedFile(path, str(e)))
                return

            ranges = self._diff_ranges.compute(diff_text)
            if not ranges:
                logger.debug(f"No added lines in {path}")
                return

            content = self._read_or_skip(report, path)
            if content is None:
                return

            report.files_checked.append(path)
            if stylesheet:
                found = self._scanner.scan_stylesheet(path, content, ranges)
            else:
                found = self._scanner.scan(path, content, ranges)
            logger.debug(f"{len(found)} violation(s) in {path}")
            report.violations.extend(found)

    def _read_or_skip(self, report: ReviewReport, path: str) -> Optional[str]:
        try:
            return self.read_file(path)
        except FileReadError as e:
            logger.warning(f"Skipping {path}: {e}")
            report.files_skipped.append(SkippedFile(path, str(e)))
            return None

    def read_file(self, path: str) -> str:
        """Read a file relative to the service root.

        Raises:
            FileReadError: Missing, too large, or unreadable
        """
        full_path = self._root / path
        context = ErrorContext(operation="read_file", file_path=path, component="review_service")

        if not full_path.is_file():
            raise FileReadError(f"File not found: {path}", code=ErrorCode.FILE_NOT_FOUND, context=context)

        try:
            size = full_path.stat().st_size
            if size > MAX_FILE_SIZE:
                raise FileReadError(
                    f"File too large ({size} bytes): {path}",
                    code=ErrorCode.FILE_TOO_LARGE,
                    context=context,
                )
            return full_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileReadError(f"Could not read {path}: {e}", context=context, original_error=e) from e
