"""prcheck command line interface.

Commands:
- review: diff-scoped review of the current branch, JSON records on stdout
- check: full-file standards check of TypeScript sources
- css: utility-class check of stylesheets
- post: publish review records to a GitHub pull request
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Optional

import click

from prcheck import __version__
from prcheck.cli._context import cli_review_scope, get_config
from prcheck.config import missing_publish_settings
from prcheck.reporting import GitHubReviewPublisher, PublishMode, format_text_report
from prcheck.services import ReviewReport
from prcheck.utils.logger import configure_logging, logger
from prcheck.vcs import discover_source_files

_JSON_ARRAY_RE = re.compile(r"\[[\s\S]*\]")


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="prcheck", message="%(prog)s v%(version)s")
@click.option("--debug", is_flag=True, help="Enable debug logging (stderr).")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to a JSON config file (default: .prcheck.json if present).",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, config_path: Optional[str]) -> None:
    """prcheck - Change-scoped code standards review for pull requests.

    Checks only the lines a pull request touched: debug statements,
    TODO/FIXME markers, documentation that drifted from its declaration,
    and stylesheet properties that should be utility classes.
    """
    configure_logging(debug)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.option("--base-ref", default=None, help="Reference to compare HEAD against (default: origin/main).")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write JSON records to FILE instead of stdout.",
)
@click.option(
    "--fail-on-violations",
    is_flag=True,
    help="Exit with status 1 when any violation is found.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["records", "report"]),
    default="records",
    show_default=True,
    help="records: one JSON object per violation. report: run id, full violations and skipped files.",
)
@click.pass_context
def review(
    ctx: click.Context,
    base_ref: Optional[str],
    output: Optional[str],
    fail_on_violations: bool,
    output_format: str,
) -> None:
    """Review changed lines of this branch against a base reference.

    Prints one JSON record per violation: path, line, severity, message and
    the markdown body of the inline comment. With --format report, prints the
    whole run instead, including rule ids and skipped files.
    """
    with cli_review_scope(ctx) as service:
        report = service.review_changes(base_ref)

    data = report.to_records() if output_format == "records" else report.to_dict()
    payload = json.dumps(data, indent=2, ensure_ascii=False)
    if output:
        Path(output).write_text(payload + "\n", encoding="utf-8")
        logger.info(f"Wrote {len(report.violations)} record(s) to {output}")
    else:
        click.echo(payload)

    if fail_on_violations and report.has_violations:
        ctx.exit(1)


@cli.command()
@click.argument("files", nargs=-1, type=click.Path())
@click.option("--all", "scan_all", is_flag=True, help="Scan all TypeScript files under source roots.")
@click.option("--staged", is_flag=True, help="Check staged files only.")
@click.option("--diff", "diff_ref", default=None, metavar="REF", help="Check files changed since REF.")
@click.pass_context
def check(ctx: click.Context, files: tuple[str, ...], scan_all: bool, staged: bool, diff_ref: Optional[str]) -> None:
    """Check TypeScript files for documentation and code standards.

    With no FILES, checks the files git reports as changed in the working
    tree (or the index with --staged, or since REF with --diff).
    """
    with cli_review_scope(ctx) as service:
        paths = list(files)

        if not paths and scan_all:
            paths = discover_source_files(".", service.config.source_extensions)
            if not paths:
                click.echo("ℹ️ No source directories found. Provide file paths as args.")
                return
            click.echo(f"📁 Found {len(paths)} TypeScript file(s) to check.")
        elif not paths:
            if not service.git.is_repository():
                click.echo("ℹ️ Provide file paths, use --staged/--diff, or pass --all to scan sources.")
                return
            if staged:
                paths = service.git.staged_files()
            elif diff_ref:
                paths = service.git.changed_files(diff_ref)
            else:
                paths = service.git.working_tree_files()

        paths = service.select_source_files(paths)
        if not paths:
            click.echo("ℹ️ No changed TypeScript files detected.")
            return

        report = service.check_files(paths)

    _finish(ctx, report, "✅ All code complies with documentation, access modifier and return type rules!")


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path())
@click.pass_context
def css(ctx: click.Context, files: tuple[str, ...]) -> None:
    """Check stylesheets for properties that should be utility classes."""
    with cli_review_scope(ctx) as service:
        report = service.check_stylesheets(list(files))

    _finish(ctx, report, "✅ No utility-class compliance issues found!")


@cli.command()
@click.argument("violations_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def post(ctx: click.Context, violations_file: str) -> None:
    """Publish VIOLATIONS_FILE (output of review) as a pull request review.

    Needs GITHUB_TOKEN, GITHUB_REPOSITORY and PR_NUMBER in the environment
    or config file.
    """
    config = get_config(ctx)
    missing = missing_publish_settings(config)
    if missing:
        raise click.UsageError(f"Missing settings for posting: {', '.join(missing)}", ctx=ctx)

    records = read_records(Path(violations_file))
    click.echo(f"Found {len(records)} violation(s) to post")

    publisher = GitHubReviewPublisher(
        token=config.github_token,
        repository=config.repository,
        pull_number=config.pull_number,
        api_url=config.api_url,
        max_comments=config.max_review_comments,
    )
    result = publisher.publish(records)

    if result.mode is PublishMode.REVIEW:
        click.echo(f"✓ Review posted with {result.comments_posted} inline comment(s)")
    elif result.mode is PublishMode.SUMMARY_COMMENT:
        click.echo("✓ Review could not be created; posted a summary comment instead")
    elif result.mode is PublishMode.NOTHING_TO_POST:
        click.echo("✓ No violations found!")
    else:
        click.echo(f"✗ Could not post feedback: {result.error}", err=True)
        ctx.exit(1)


def read_records(path: Path) -> list[dict[str, Any]]:
    """Load violation records, tolerating log noise around the JSON array."""
    text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        match = _JSON_ARRAY_RE.search(text)
        if not match:
            logger.warning(f"No violation records found in {path}")
            return []
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            logger.warning(f"Could not parse violations in {path}: {e}")
            return []

    if not isinstance(data, list):
        logger.warning(f"Expected a JSON array in {path}")
        return []
    return [r for r in data if isinstance(r, dict) and "path" in r and "line" in r]


def _finish(ctx: click.Context, report: ReviewReport, success_message: str) -> None:
    if report.has_violations:
        click.echo(format_text_report(report.violations, len(report.files_checked)))
        click.echo("\n⚠️ Code standard violations found. Please fix and recommit.")
        ctx.exit(1)
    click.echo(success_message)


def main() -> None:
    """Entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
