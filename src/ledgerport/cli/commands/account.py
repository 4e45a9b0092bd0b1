"""Account management commands."""

import click

from ledgerport.cli.error_handling import handle_domain_error
from ledgerport.domain.account import AccountService
from ledgerport.domain.errors import DomainError
from ledgerport.utils.amount_parser import parse_amount


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--currency", required=True, help="Three-letter currency code (e.g. USD)")
@click.option("--balance", default="0", show_default=True, help="Opening balance")
@click.pass_context
def create_account(ctx, name: str, currency: str, balance: str):
    """Create a new account.

    Examples:
        ledgerport account create "Main USD" --currency USD
        ledgerport account create "Main HKD" --currency hkd --balance 2500
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    try:
        opening = parse_amount(balance)
    except ValueError as e:
        click.echo(f"Error: Invalid balance: {e}", err=True)
        ctx.exit(1)

    try:
        account_id = service.create_account(name=name, currency_code=currency, balance=opening)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created account '{name.strip()}' (ID: {account_id})")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        click.echo(f"ID: {acc.id:3d} | {acc.name:20s} | {acc.currency_code} {acc.balance:>14,.2f}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
