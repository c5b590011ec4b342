"""File discovery and filtering for review runs."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

from prcheck.constants import (
    DEFAULT_IGNORE_DIRS,
    EXCLUDED_SUFFIXES,
    SOURCE_EXTENSIONS,
    SOURCE_ROOT_GLOBS,
    STYLE_EXTENSIONS,
)


def is_source_file(
    path: str,
    extensions: Sequence[str] = SOURCE_EXTENSIONS,
    excluded_suffixes: Sequence[str] = EXCLUDED_SUFFIXES,
) -> bool:
    """True for reviewable source files (tests and stories excluded)."""
    return path.endswith(tuple(extensions)) and not path.endswith(tuple(excluded_suffixes))


def is_style_file(path: str, extensions: Sequence[str] = STYLE_EXTENSIONS) -> bool:
    """True for stylesheets checked against the utility rule table."""
    return path.endswith(tuple(extensions))


def _walk(directory: Path, extensions: tuple[str, ...], ignore_dirs: set[str]) -> Iterable[Path]:
    for entry in sorted(directory.iterdir()):
        if entry.is_dir():
            if entry.name in ignore_dirs:
                continue
            yield from _walk(entry, extensions, ignore_dirs)
        elif entry.is_file() and entry.name.endswith(extensions):
            yield entry


def discover_source_files(
    root: str | Path = ".",
    extensions: Sequence[str] = SOURCE_EXTENSIONS,
    source_roots: Sequence[str] = SOURCE_ROOT_GLOBS,
    ignore_dirs: set[str] | None = None,
) -> list[str]:
    """Collect files under the conventional source roots of a workspace.

    Args:
        root: Workspace root
        extensions: File suffixes to collect
        source_roots: Glob patterns, relative to ``root``, naming source directories
        ignore_dirs: Directory names never descended into

    Returns:
        Paths relative to ``root`` in POSIX form, without duplicates
    """
    root = Path(root)
    ignore = DEFAULT_IGNORE_DIRS if ignore_dirs is None else ignore_dirs
    suffixes = tuple(extensions)

    seen: set[str] = set()
    files: list[str] = []
    for pattern in source_roots:
        for directory in sorted(root.glob(pattern)):
            if not directory.is_dir():
                continue
            for path in _walk(directory, suffixes, ignore):
                relative = path.relative_to(root).as_posix()
                if relative not in seen:
                    seen.add(relative)
                    files.append(relative)
    return files
