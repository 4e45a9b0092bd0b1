"""User management commands."""

import click

from ledgerport.cli.error_handling import handle_domain_error
from ledgerport.domain.errors import DomainError
from ledgerport.domain.reference import UserService


@click.group()
def user_group():
    """Manage users (the "Created By" column)."""
    pass


@user_group.command("create")
@click.argument("name", metavar="USER_NAME")
@click.pass_context
def create_user(ctx, name: str):
    """Create a new user."""
    service = UserService(ctx.obj["db"])

    try:
        user_id = service.create_user(name=name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created user '{name.strip()}' (ID: {user_id})")


@user_group.command("list")
@click.pass_context
def list_users(ctx):
    """List all users."""
    users = UserService(ctx.obj["db"]).list_users()
    if not users:
        click.echo("No users found.")
        return

    click.echo("\nUsers:")
    click.echo("-" * 40)
    for user in users:
        click.echo(f"ID: {user.id:3d} | {user.name}")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
