"""CLI helpers for turning account, tag and user names into IDs."""

from __future__ import annotations

import click

from ledgerport.domain.resolver import ReferenceCatalog


def _exit_with(ctx: click.Context, message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    ctx.exit(1)


def resolve_account_or_exit(
    ctx: click.Context, catalog: ReferenceCatalog, account: str | None, label: str = "Account"
) -> int | None:
    """Resolve an account name (or numeric ID) to its ID, or exit with a CLI error.

    Names are matched the same way spreadsheet imports match them.
    """
    if account is None:
        return None
    if account.strip().isdigit():
        account_id = int(account)
        if any(acc.id == account_id for acc in catalog.accounts):
            return account_id
    resolution = catalog.resolve_account(account, label=label)
    if not resolution.found:
        _exit_with(ctx, resolution.error)
    return resolution.entity.id


def resolve_user_or_exit(ctx: click.Context, catalog: ReferenceCatalog, user: str | None) -> int | None:
    if user is None:
        return None
    resolution = catalog.resolve_user(user)
    if not resolution.found:
        _exit_with(ctx, resolution.error)
    return resolution.entity.id


def resolve_tags_or_exit(ctx: click.Context, catalog: ReferenceCatalog, tags: tuple[str, ...]) -> tuple[int, ...]:
    tag_ids = []
    for name in tags:
        resolution = catalog.resolve_tag(name)
        if not resolution.found:
            _exit_with(ctx, resolution.error)
        tag_ids.append(resolution.entity.id)
    return tuple(tag_ids)
