"""Shared constants for prcheck.

Centralizes default file filters, ignore directories, review limits and the
window sizes used by the change-scoped scanner.
"""

# Base reference the pull request is compared against when none is given.
DEFAULT_BASE_REF: str = "origin/main"

# Declarations up to this many lines past a changed hunk are still checked.
# Editing a documentation block shifts the declaration below it out of the
# literal hunk.
NEAR_CHANGE_MARGIN: int = 5

# Maximum inline comments attached to a single review.
MAX_REVIEW_COMMENTS: int = 30

# Maximum file size to scan (1 MB). Larger files are skipped.
MAX_FILE_SIZE: int = 1_000_000

# Source files checked for documentation and debug statements
SOURCE_EXTENSIONS: tuple[str, ...] = (".ts",)

# Test specs and generated story files are never reviewed
EXCLUDED_SUFFIXES: tuple[str, ...] = (".spec.ts", ".stories.ts")

# Stylesheets checked against the utility rule table
STYLE_EXTENSIONS: tuple[str, ...] = (".css",)

# Directories to skip during file discovery.
# Single canonical set; import it rather than re-defining.
DEFAULT_IGNORE_DIRS: set[str] = {
    "node_modules",
    ".git",
    "dist",
    "coverage",
    "build",
    "tmp",
    ".angular",
    ".cache",
    ".storybook",
    "out-tsc",
}

# Conventional source roots in Nx-style and Angular workspaces
SOURCE_ROOT_GLOBS: tuple[str, ...] = (
    "src",
    "apps/*/src",
    "libs/*/src",
    "projects/*/src",
    "projects/*/*/src",
)
