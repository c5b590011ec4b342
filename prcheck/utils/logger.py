"""
Logging utility for prcheck.

Output Streams:
- STDOUT: Reserved for JSON violation records (piped into the posting step)
- STDERR: All log output

Run ID Support:
- Every review run gets a short run ID bound into the log context
- Use with_run_id() to scope log lines to a run and, optionally, a file
"""

import os
import secrets
import sys
import time
from contextlib import contextmanager
from typing import Generator

from loguru import logger as loguru_logger

_LOG_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "{extra[run_id]} | <level>{message}</level>"
)


def generate_run_id() -> str:
    """
    Generate a unique run ID for log correlation.

    Format: run_<timestamp_base36>_<random_hex>
    """
    timestamp = int(time.time() * 1000)
    random_part = secrets.token_hex(4)
    return f"run_{base36_encode(timestamp)}_{random_part}"


def base36_encode(number: int) -> str:
    """Encode an integer to base36 string."""
    if number == 0:
        return "0"

    chars = "0123456789abcdefghijklmnopqrstuvwxyz"
    result = []
    while number:
        result.append(chars[number % 36])
        number //= 36
    return "".join(reversed(result))


@contextmanager
def with_run_id(run_id: str, file_path: str | None = None) -> Generator[str, None, None]:
    """
    Context manager binding a run ID (and optional file path) to log records.

    Args:
        run_id: The run ID to attach
        file_path: Optional file currently being reviewed

    Yields:
        The run ID
    """
    extra = {"run_id": run_id}
    if file_path:
        extra["file_path"] = file_path
    with loguru_logger.contextualize(**extra):
        yield run_id


def is_debug_enabled() -> bool:
    """Check if debug mode is enabled."""
    return os.environ.get("PRCHECK_DEBUG", "").lower() == "true"


def configure_logging(debug: bool = False) -> None:
    """Route all log output to stderr at INFO, or DEBUG when requested."""
    level = "DEBUG" if debug or is_debug_enabled() else "INFO"
    loguru_logger.remove()
    loguru_logger.configure(extra={"run_id": "-"})
    loguru_logger.add(sys.stderr, level=level, format=_LOG_FORMAT)


# Export loguru logger for direct use
logger = loguru_logger
