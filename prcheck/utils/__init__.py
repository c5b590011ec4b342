"""
prcheck utility modules.

This package provides shared utilities used across the prcheck codebase:
- Logging (stderr-only, run-scoped)
- Serialization of dataclass results to JSON primitives
"""

# Logger
from .logger import (
    base36_encode,
    configure_logging,
    generate_run_id,
    is_debug_enabled,
    logger,
    with_run_id,
)

# Serialization
from .serialization import serialize_to_primitives

__all__ = [
    "base36_encode",
    "configure_logging",
    "generate_run_id",
    "is_debug_enabled",
    "logger",
    "with_run_id",
    "serialize_to_primitives",
]
