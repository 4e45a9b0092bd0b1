"""Expense import, export and listing commands."""

from pathlib import Path

import click

from ledgerport.cli.date_filters import date_range_options, resolve_cli_date_range
from ledgerport.cli.reference_resolution import (
    resolve_account_or_exit,
    resolve_tags_or_exit,
    resolve_user_or_exit,
)
from ledgerport.cli.spreadsheet import output_dir_option, run_dry_run, run_export, run_import
from ledgerport.domain.batch_import import ImportService
from ledgerport.domain.entities import ExpenseQuery
from ledgerport.domain.expense import ExpenseService
from ledgerport.domain.export import ExportService
from ledgerport.domain.layouts import EXPENSE_LAYOUT
from ledgerport.domain.resolver import ReferenceCatalog


@click.group()
def expense_group():
    """Import, export and list expenses."""
    pass


def _expense_filters(f):
    f = click.option("--tag", "tags", multiple=True, help="Tag name (repeatable; matches any)")(f)
    f = click.option("--created-by", help="User name")(f)
    f = click.option("--currency", help="Currency code")(f)
    f = click.option("--account", help="Account name or ID")(f)
    return date_range_options(f)


def _build_query(ctx, account, currency, created_by, tags, start_date, end_date, period_flags) -> ExpenseQuery:
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags
    )
    catalog = ReferenceCatalog.from_database(ctx.obj["db"])
    return ExpenseQuery(
        date_from=start,
        date_to=end,
        account_id=resolve_account_or_exit(ctx, catalog, account),
        currency_code=currency.strip().upper() if currency else None,
        created_by=resolve_user_or_exit(ctx, catalog, created_by),
        tag_ids=resolve_tags_or_exit(ctx, catalog, tags),
    )


@expense_group.command("import")
@click.argument("xlsx_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--dry-run", is_flag=True, help="Validate the file without importing anything")
@click.pass_context
def import_expenses(ctx, xlsx_file: str, dry_run: bool):
    """Import expenses from the "Expenses" sheet of an xlsx file.

    Rows with problems are reported and skipped; the rest are imported.

    Examples:
        ledgerport expense import expenses.xlsx
        ledgerport expense import expenses.xlsx --dry-run
    """
    service = ImportService(ctx.obj["db"])
    if dry_run:
        run_dry_run(ctx, lambda: service.validate_expenses(xlsx_file), "expenses")
        return
    run_import(ctx, lambda: service.import_expenses(xlsx_file), "expenses")


@expense_group.command("export")
@_expense_filters
@output_dir_option
@click.option("--file-name", help="Workbook file name (default: expenses_export_<today>.xlsx)")
@click.pass_context
def export_expenses(
    ctx,
    account: str | None,
    currency: str | None,
    created_by: str | None,
    tags: tuple[str, ...],
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    output_dir: Path,
    file_name: str | None,
):
    """Export expenses to an xlsx file that can be imported again.

    Examples:
        ledgerport expense export --this-month
        ledgerport expense export --account "Main USD" --tag Office --tag Travel
    """
    query = _build_query(ctx, account, currency, created_by, tags, start_date, end_date, period_flags)
    service = ExportService(ctx.obj["db"])
    run_export(
        ctx,
        lambda: service.export_expenses(query, output_dir=output_dir, file_name=file_name),
        "expenses",
    )


@expense_group.command("template")
@click.argument(
    "output", type=click.Path(dir_okay=False), default="expenses_template.xlsx", required=False
)
@click.pass_context
def expense_template(ctx, output: str):
    """Write an example expense workbook to fill in and import."""
    run_export(ctx, lambda: ExportService.write_template(EXPENSE_LAYOUT, output), "example expenses")


@expense_group.command("list")
@_expense_filters
@click.pass_context
def list_expenses(
    ctx,
    account: str | None,
    currency: str | None,
    created_by: str | None,
    tags: tuple[str, ...],
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
):
    """List expenses with optional filters."""
    query = _build_query(ctx, account, currency, created_by, tags, start_date, end_date, period_flags)
    expenses = ExpenseService(ctx.obj["db"]).list_expenses(query)
    if not expenses:
        click.echo("No expenses found.")
        return

    click.echo(f"\nFound {len(expenses)} expense(s):")
    click.echo("-" * 100)
    click.echo(f"{'ID':<12} {'Date':<12} {'Account':<20} {'Amount':>14} {'Cur':<4} {'Description':<30}")
    click.echo("-" * 100)
    for expense in expenses:
        identifier = expense.external_id or str(expense.id)
        description = (expense.description or "")[:30]
        click.echo(
            f"{identifier:<12} {expense.created_at.date().isoformat():<12} {expense.account_name[:20]:<20} "
            f"{expense.amount:>14,.2f} {expense.currency_code:<4} {description:<30}"
        )


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
