"""CLI service context.

All CLI commands that need the review service should use
``cli_review_scope(ctx)`` instead of building services directly. This
provides:
- Config loading from ``--config``, ``.prcheck.json`` and the environment
- Configuration errors mapped to usage errors (exit code 2)
- Other structured errors mapped to a formatted message (exit code 1)
"""

from __future__ import annotations

import contextlib
from collections.abc import Generator

import click

from prcheck.config import ReviewConfig, load_config
from prcheck.services import ReviewService
from prcheck.types import ConfigurationError, PrcheckError
from prcheck.utils.logger import logger


def get_config(ctx: click.Context) -> ReviewConfig:
    """Load the review configuration for a CLI command."""
    config_path = (ctx.obj or {}).get("config_path")
    try:
        return load_config(config_path)
    except ConfigurationError as e:
        raise click.UsageError(e.get_formatted_message(), ctx=ctx) from e


@contextlib.contextmanager
def cli_review_scope(ctx: click.Context) -> Generator[ReviewService, None, None]:
    """Context manager providing a ReviewService, translating errors on exit."""
    service = ReviewService(get_config(ctx))
    try:
        yield service
    except ConfigurationError as e:
        raise click.UsageError(e.get_formatted_message(), ctx=ctx) from e
    except PrcheckError as e:
        logger.debug(f"{type(e).__name__}: {e}")
        raise click.ClickException(e.get_formatted_message()) from e
