"""
Source Control and Discovery

Tests for the git wrapper (subprocess mocked) and for source file discovery.
"""

import subprocess
from unittest.mock import patch

import pytest

from prcheck.types import DiffUnavailableError, ErrorCode
from prcheck.vcs import GitClient, discover_source_files, is_source_file, is_style_file, parse_porcelain_status


def completed(stdout="", returncode=0, stderr=""):
    return subprocess.CompletedProcess(args=["git"], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def git(tmp_path):
    return GitClient(tmp_path)


class TestGitClient:
    """Tests for GitClient command construction and error mapping."""

    def test_unified_diff_command(self, git):
        with patch("prcheck.vcs.git_client.subprocess.run", return_value=completed("@@ -1 +1 @@\n")) as run:
            assert git.unified_diff("src/a.ts", "origin/main") == "@@ -1 +1 @@\n"
        command = run.call_args.args[0]
        assert command == ["git", "diff", "-U0", "origin/main...HEAD", "--", "src/a.ts"]

    def test_changed_files(self, git):
        output = "src/a.ts\nsrc/b.css\n\n"
        with patch("prcheck.vcs.git_client.subprocess.run", return_value=completed(output)) as run:
            assert git.changed_files("origin/main") == ["src/a.ts", "src/b.css"]
        assert "--diff-filter=ACMTU" in run.call_args.args[0]

    def test_staged_files(self, git):
        with patch("prcheck.vcs.git_client.subprocess.run", return_value=completed("src/a.ts\n")) as run:
            assert git.staged_files() == ["src/a.ts"]
        assert "--cached" in run.call_args.args[0]

    def test_working_tree_files(self, git):
        output = " M src/a.ts\nA  src/b.ts\n?? src/c.ts\nR  src/old.ts -> src/new.ts\n"
        with patch("prcheck.vcs.git_client.subprocess.run", return_value=completed(output)):
            assert git.working_tree_files() == ["src/a.ts", "src/b.ts", "src/c.ts", "src/new.ts"]

    def test_failure_raises_diff_unavailable(self, git):
        failed = completed(returncode=128, stderr="fatal: bad revision")
        with patch("prcheck.vcs.git_client.subprocess.run", return_value=failed):
            with pytest.raises(DiffUnavailableError, match="bad revision") as exc_info:
                git.unified_diff("src/a.ts", "origin/nope")
        assert exc_info.value.context.file_path == "src/a.ts"

    def test_missing_binary(self, git):
        with patch("prcheck.vcs.git_client.subprocess.run", side_effect=FileNotFoundError("git")):
            with pytest.raises(DiffUnavailableError) as exc_info:
                git.changed_files("origin/main")
        assert exc_info.value.code == ErrorCode.GIT_NOT_INSTALLED

    def test_timeout(self, git):
        with patch(
            "prcheck.vcs.git_client.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="git", timeout=30),
        ):
            with pytest.raises(DiffUnavailableError, match="timed out"):
                git.staged_files()

    def test_is_repository(self, git):
        with patch("prcheck.vcs.git_client.subprocess.run", return_value=completed("true\n")):
            assert git.is_repository() is True
        with patch("prcheck.vcs.git_client.subprocess.run", return_value=completed(returncode=128)):
            assert git.is_repository() is False

    def test_outside_repository(self, git):
        failed = completed(returncode=128, stderr="fatal: not a git repository (or any of the parent directories): .git")
        with patch("prcheck.vcs.git_client.subprocess.run", return_value=failed):
            with pytest.raises(DiffUnavailableError) as exc_info:
                git.changed_files("origin/main")
            assert git.is_repository() is False
        assert exc_info.value.code == ErrorCode.NOT_A_REPOSITORY


class TestPorcelain:
    def test_blank_lines_ignored(self):
        assert parse_porcelain_status("\n M a.ts\n\n") == ["a.ts"]


class TestFiltering:
    """Tests for reviewable-file predicates."""

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("src/app/cart.ts", True),
            ("src/app/cart.spec.ts", False),
            ("src/app/cart.stories.ts", False),
            ("src/app/cart.css", False),
            ("src/app/cart.tsx", False),
        ],
    )
    def test_is_source_file(self, path, expected):
        assert is_source_file(path) is expected

    def test_is_style_file(self):
        assert is_style_file("src/app/cart.css") is True
        assert is_style_file("src/app/cart.scss") is False


class TestDiscovery:
    """Tests for source-root discovery."""

    def test_conventional_roots(self, tmp_path):
        for relative in [
            "src/main.ts",
            "apps/shop/src/app.ts",
            "libs/ui/src/button.ts",
            "projects/admin/src/admin.ts",
            "projects/group/portal/src/portal.ts",
            "src/node_modules/dep/index.ts",
            "src/readme.md",
            "tools/script.ts",
        ]:
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("export {};\n")

        files = discover_source_files(tmp_path)

        assert files == [
            "src/main.ts",
            "apps/shop/src/app.ts",
            "libs/ui/src/button.ts",
            "projects/admin/src/admin.ts",
            "projects/group/portal/src/portal.ts",
        ]

    def test_no_roots(self, tmp_path):
        assert discover_source_files(tmp_path) == []
