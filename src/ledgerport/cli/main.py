"""Main CLI entry point."""

import logging

import click
from ledgerport.database.factories import create_sqlite_database

# Import and register all commands at module level
from ledgerport.cli.commands import (
    account,
    expense,
    tag,
    transfer,
    user,
)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERPORT_DB_PATH environment variable)",
    envvar="LEDGERPORT_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="LEDGERPORT_LOG_LEVEL",
    help="Logging verbosity (log lines go to stderr)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Ledgerport - Spreadsheet import and export for expenses and transfers.

    Keep accounts, tags and users in a local ledger, then bulk-load expenses
    and transfers from xlsx workbooks and export them back for editing.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(level=log_level.upper(), format=LOG_FORMAT)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
tag.register_commands(cli)
user.register_commands(cli)
expense.register_commands(cli)
transfer.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
