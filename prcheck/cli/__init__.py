"""Command line interface for prcheck."""

from prcheck.cli.main import cli, main

__all__ = ["cli", "main"]
