"""Change-scoped static analysis engine.

Components, leaf first:

    DiffRangeComputer    -> changed line ranges from a unified diff
    CommentBlockLocator  -> documentation block above a declaration
    RegexDeclarationExtractor -> visibility, parameters, return type
    ConsistencyValidator -> tags vs. declaration
    ViolationScanner     -> per-file orchestration

Usage:
    from prcheck.analysis import DiffRangeComputer, ViolationScanner
    ranges = DiffRangeComputer().compute(diff_text)
    violations = ViolationScanner().scan(path, content, ranges)
"""

from prcheck.analysis.comment_blocks import CommentBlockLocator, ScanState
from prcheck.analysis.consistency import (
    ConsistencyValidator,
    ReturnTagPolicy,
    ValidationCode,
    ValidationError,
)
from prcheck.analysis.declarations import (
    RegexDeclarationExtractor,
    extract_visibility,
    member_level_lines,
    parse_parameters,
    split_top_level,
)
from prcheck.analysis.diff_ranges import (
    DiffRangeComputer,
    is_line_changed,
    is_near_changed,
    whole_file_range,
)
from prcheck.analysis.protocols import DeclarationExtractor
from prcheck.analysis.scanner import LINE_DETECTORS, LineDetector, ViolationScanner, split_lines

__all__ = [
    "CommentBlockLocator",
    "ConsistencyValidator",
    "DeclarationExtractor",
    "DiffRangeComputer",
    "LINE_DETECTORS",
    "LineDetector",
    "RegexDeclarationExtractor",
    "ReturnTagPolicy",
    "ScanState",
    "ValidationCode",
    "ValidationError",
    "ViolationScanner",
    "extract_visibility",
    "member_level_lines",
    "is_line_changed",
    "is_near_changed",
    "parse_parameters",
    "split_lines",
    "split_top_level",
    "whole_file_range",
]
