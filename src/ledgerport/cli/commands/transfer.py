"""Transfer import, export and listing commands."""

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
from ledgerport.domain.entities import TransferQuery
from ledgerport.domain.export import ExportService
from ledgerport.domain.layouts import TRANSFER_LAYOUT
from ledgerport.domain.resolver import ReferenceCatalog
from ledgerport.domain.transfer import TransferService


@click.group()
def transfer_group():
    """Import, export and list transfers between accounts."""
    pass


def _transfer_filters(f):
    f = click.option("--tag", "tags", multiple=True, help="Tag name (repeatable; matches any)")(f)
    f = click.option("--created-by", help="User name")(f)
    f = click.option("--currency", help="Currency code")(f)
    f = click.option("--to-account", help="Destination account name or ID")(f)
    f = click.option("--from-account", help="Source account name or ID")(f)
    return date_range_options(f)


def _build_query(
    ctx, from_account, to_account, currency, created_by, tags, start_date, end_date, period_flags
) -> TransferQuery:
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags
    )
    catalog = ReferenceCatalog.from_database(ctx.obj["db"])
    return TransferQuery(
        date_from=start,
        date_to=end,
        from_account_id=resolve_account_or_exit(ctx, catalog, from_account, label="From Account"),
        to_account_id=resolve_account_or_exit(ctx, catalog, to_account, label="To Account"),
        currency_code=currency.strip().upper() if currency else None,
        created_by=resolve_user_or_exit(ctx, catalog, created_by),
        tag_ids=resolve_tags_or_exit(ctx, catalog, tags),
    )


@transfer_group.command("import")
@click.argument("xlsx_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--dry-run", is_flag=True, help="Validate the file without importing anything")
@click.pass_context
def import_transfers(ctx, xlsx_file: str, dry_run: bool):
    """Import transfers from the "Transfers" sheet of an xlsx file.

    Examples:
        ledgerport transfer import transfers.xlsx
    """
    service = ImportService(ctx.obj["db"])
    if dry_run:
        run_dry_run(ctx, lambda: service.validate_transfers(xlsx_file), "transfers")
        return
    run_import(ctx, lambda: service.import_transfers(xlsx_file), "transfers")


@transfer_group.command("export")
@_transfer_filters
@output_dir_option
@click.option("--file-name", help="Workbook file name (default: transfers_export_<today>.xlsx)")
@click.pass_context
def export_transfers(
    ctx,
    from_account: str | None,
    to_account: str | None,
    currency: str | None,
    created_by: str | None,
    tags: tuple[str, ...],
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    output_dir: Path,
    file_name: str | None,
):
    """Export transfers to an xlsx file that can be imported again.

    Examples:
        ledgerport transfer export --last-month --from-account "Main USD"
    """
    query = _build_query(
        ctx, from_account, to_account, currency, created_by, tags, start_date, end_date, period_flags
    )
    service = ExportService(ctx.obj["db"])
    run_export(
        ctx,
        lambda: service.export_transfers(query, output_dir=output_dir, file_name=file_name),
        "transfers",
    )


@transfer_group.command("template")
@click.argument(
    "output", type=click.Path(dir_okay=False), default="transfers_template.xlsx", required=False
)
@click.pass_context
def transfer_template(ctx, output: str):
    """Write an example transfer workbook to fill in and import."""
    run_export(ctx, lambda: ExportService.write_template(TRANSFER_LAYOUT, output), "example transfers")


@transfer_group.command("list")
@_transfer_filters
@click.pass_context
def list_transfers(
    ctx,
    from_account: str | None,
    to_account: str | None,
    currency: str | None,
    created_by: str | None,
    tags: tuple[str, ...],
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
):
    """List transfers with optional filters."""
    query = _build_query(
        ctx, from_account, to_account, currency, created_by, tags, start_date, end_date, period_flags
    )
    transfers = TransferService(ctx.obj["db"]).list_transfers(query)
    if not transfers:
        click.echo("No transfers found.")
        return

    click.echo(f"\nFound {len(transfers)} transfer(s):")
    click.echo("-" * 100)
    click.echo(f"{'ID':<12} {'Date':<12} {'From':<18} {'To':<18} {'Amount':>14} {'Fee':>8} {'Cur':<4}")
    click.echo("-" * 100)
    for transfer in transfers:
        identifier = transfer.external_id or str(transfer.id)
        fee = f"{transfer.transaction_fee:,.2f}" if transfer.transaction_fee is not None else ""
        click.echo(
            f"{identifier:<12} {transfer.created_at.date().isoformat():<12} "
            f"{transfer.from_account_name[:18]:<18} {transfer.to_account_name[:18]:<18} "
            f"{transfer.amount:>14,.2f} {fee:>8} {transfer.currency_code:<4}"
        )


def register_commands(cli):
    """Register transfer commands with main CLI."""
    cli.add_command(transfer_group, name="transfer")
