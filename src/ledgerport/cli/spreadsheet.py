"""Shared output for the spreadsheet import, export and template commands."""

from pathlib import Path
from typing import Callable

import click

from ledgerport.cli.error_handling import handle_domain_error
from ledgerport.domain.batch_import import format_summary
from ledgerport.domain.entities import ExportResult, ImportSummary, RowOutcome
from ledgerport.domain.errors import DomainError, ImportFileError


def run_import(ctx: click.Context, run: Callable[[], ImportSummary], noun: str) -> None:
    """Run an import and print its summary.

    Row errors are reported but still exit 0; only an unusable file fails.
    """
    try:
        summary = run()
    except ImportFileError as e:
        handle_domain_error(ctx, e)

    click.echo(format_summary(summary, noun))


def run_dry_run(ctx: click.Context, run: Callable[[], list[RowOutcome]], noun: str) -> None:
    """Validate a workbook and report what an import would do."""
    try:
        outcomes = run()
    except ImportFileError as e:
        handle_domain_error(ctx, e)

    valid = sum(1 for outcome in outcomes if outcome.is_ok)
    click.echo(f"{valid} of {len(outcomes)} {noun} are valid. Nothing was imported.")
    for outcome in outcomes:
        for message in outcome.messages:
            click.echo(f"  {message}", err=True)


def run_export(ctx: click.Context, run: Callable[[], ExportResult], noun: str) -> None:
    try:
        result = run()
    except (DomainError, OSError) as e:
        handle_domain_error(ctx, e)

    if result.record_count == 0:
        click.echo(f"No {noun} matched; wrote headers only to {result.file_name}")
        return
    click.echo(f"Exported {result.record_count} {noun} to {result.file_name}")


def output_dir_option(f):
    return click.option(
        "--output-dir",
        type=click.Path(file_okay=False, path_type=Path),
        default=".",
        show_default=True,
        help="Directory for the exported workbook",
    )(f)
