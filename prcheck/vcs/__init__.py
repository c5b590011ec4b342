"""Source control access and file discovery."""

from prcheck.vcs.discovery import discover_source_files, is_source_file, is_style_file
from prcheck.vcs.git_client import GitClient, parse_porcelain_status

__all__ = [
    "GitClient",
    "discover_source_files",
    "is_source_file",
    "is_style_file",
    "parse_porcelain_status",
]
