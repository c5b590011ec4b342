"""Thin git wrapper used to find changed files and their diffs.

Every call shells out to the ``git`` binary with ``subprocess.run``. A
non-zero exit or a missing binary raises ``DiffUnavailableError``; callers
decide whether that means "skip this file" or "abort".
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from prcheck.types import DiffUnavailableError, ErrorCode, ErrorContext, RecoveryAction
from prcheck.utils.logger import logger

# Added, copied, modified, type-changed, unmerged. Deleted files have nothing to review.
REVIEW_DIFF_FILTER = "ACMTU"
STAGED_DIFF_FILTER = "ACMRTUXB"


def parse_porcelain_status(output: str) -> list[str]:
    """File paths from ``git status --porcelain`` output.

    Renames (``R  old -> new``) resolve to the new path.
    """
    paths: list[str] = []
    for raw in output.splitlines():
        line = raw.strip()
        if not line:
            continue
        if line.startswith("R") and "->" in line:
            paths.append(line.split("->", 1)[1].strip())
            continue
        parts = line.split()
        if parts:
            paths.append(parts[-1])
    return paths


def _split_names(output: str) -> list[str]:
    return [name.strip() for name in output.splitlines() if name.strip()]


class GitClient:
    """Runs git commands in a working directory.

    Usage:
        git = GitClient(".")
        for path in git.changed_files("origin/main"):
            diff = git.unified_diff(path, "origin/main")
    """

    def __init__(self, cwd: str | Path = ".", git_binary: str = "git", timeout: float = 30.0):
        self.cwd = Path(cwd)
        self.git_binary = git_binary
        self.timeout = timeout

    def _run(self, *args: str, operation: str, file_path: str | None = None) -> str:
        command = [self.git_binary, *args]
        logger.debug(f"git {' '.join(args)}")
        context = ErrorContext(operation=operation, file_path=file_path, component="git")

        try:
            completed = subprocess.run(
                command,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise DiffUnavailableError(
                f"git executable not found: {self.git_binary}",
                user_message="git is not installed or not on PATH.",
                code=ErrorCode.GIT_NOT_INSTALLED,
                context=context,
                recovery_actions=[RecoveryAction("Install git and make sure it is on PATH")],
                original_error=e,
            ) from e
        except subprocess.TimeoutExpired as e:
            raise DiffUnavailableError(
                f"git {args[0]} timed out after {self.timeout}s",
                context=context,
                original_error=e,
            ) from e

        if completed.returncode != 0:
            stderr = completed.stderr.strip()
            if "not a git repository" in stderr.lower():
                raise DiffUnavailableError(
                    f"{self.cwd} is not inside a git repository",
                    user_message="Run prcheck from inside a git work tree.",
                    code=ErrorCode.NOT_A_REPOSITORY,
                    context=context,
                )
            raise DiffUnavailableError(
                f"git {args[0]} failed ({completed.returncode}): {stderr}",
                context=context,
                recovery_actions=[
                    RecoveryAction(
                        "Make sure the base reference has been fetched",
                        command="git fetch origin",
                    )
                ],
            )
        return completed.stdout

    def is_repository(self) -> bool:
        """True when ``cwd`` is inside a git work tree."""
        try:
            output = self._run("rev-parse", "--is-inside-work-tree", operation="is_repository")
        except DiffUnavailableError:
            return False
        return output.strip() == "true"

    def unified_diff(self, path: str, base_ref: str) -> str:
        """Zero-context diff of ``path`` between the merge base of ``base_ref`` and HEAD."""
        return self._run(
            "diff", "-U0", f"{base_ref}...HEAD", "--", path,
            operation="unified_diff",
            file_path=path,
        )

    def changed_files(self, base_ref: str, diff_filter: str = REVIEW_DIFF_FILTER) -> list[str]:
        """Paths changed on this branch since it diverged from ``base_ref``."""
        output = self._run(
            "diff", "--name-only", f"--diff-filter={diff_filter}", f"{base_ref}...HEAD",
            operation="changed_files",
        )
        return _split_names(output)

    def staged_files(self) -> list[str]:
        """Paths staged in the index."""
        output = self._run(
            "diff", "--name-only", "--cached", f"--diff-filter={STAGED_DIFF_FILTER}",
            operation="staged_files",
        )
        return _split_names(output)

    def working_tree_files(self) -> list[str]:
        """Paths with uncommitted changes, untracked files included."""
        output = self._run("status", "--porcelain", operation="working_tree_files")
        return parse_porcelain_status(output)
