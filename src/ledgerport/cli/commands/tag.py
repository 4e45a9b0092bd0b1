"""Tag management commands."""

import click

from ledgerport.cli.error_handling import handle_domain_error
from ledgerport.domain.errors import DomainError
from ledgerport.domain.reference import DEFAULT_TAG_COLOR, TagService


@click.group()
def tag_group():
    """Manage tags."""
    pass


@tag_group.command("create")
@click.argument("name", metavar="TAG_NAME")
@click.option("--color", default=DEFAULT_TAG_COLOR, show_default=True, help="Display color")
@click.pass_context
def create_tag(ctx, name: str, color: str):
    """Create a new tag.

    Examples:
        ledgerport tag create Office
        ledgerport tag create Travel --color "#2563eb"
    """
    service = TagService(ctx.obj["db"])

    try:
        tag_id = service.create_tag(name=name, color=color)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created tag '{name.strip()}' (ID: {tag_id})")


@tag_group.command("list")
@click.pass_context
def list_tags(ctx):
    """List all tags."""
    tags = TagService(ctx.obj["db"]).list_tags()
    if not tags:
        click.echo("No tags found.")
        return

    click.echo("\nTags:")
    click.echo("-" * 40)
    for tag in tags:
        click.echo(f"ID: {tag.id:3d} | {tag.name:20s} | {tag.color}")


def register_commands(cli):
    """Register tag commands with main CLI."""
    cli.add_command(tag_group, name="tag")
