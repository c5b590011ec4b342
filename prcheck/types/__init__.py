"""
prcheck type definitions.

This module exports the value types and error types shared by every stage
of the review pipeline.
"""

# Core types
from .core import (
    CommentBlock,
    DeclarationInfo,
    DeclarationKind,
    LineRange,
    ParameterSignature,
    Severity,
    Violation,
    Visibility,
)

# Error types
from .errors import (
    ConfigurationError,
    DiffUnavailableError,
    ErrorCode,
    ErrorContext,
    ErrorSeverity,
    FileReadError,
    PrcheckError,
    PublishError,
    RecoveryAction,
)

__all__ = [
    # Core types
    "CommentBlock",
    "DeclarationInfo",
    "DeclarationKind",
    "LineRange",
    "ParameterSignature",
    "Severity",
    "Violation",
    "Visibility",
    # Error types
    "ErrorCode",
    "ErrorSeverity",
    "RecoveryAction",
    "ErrorContext",
    "PrcheckError",
    "ConfigurationError",
    "DiffUnavailableError",
    "FileReadError",
    "PublishError",
]
