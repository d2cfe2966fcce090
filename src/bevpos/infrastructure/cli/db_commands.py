"""CLI commands for the database."""

from __future__ import annotations

import click

from bevpos.domain.exceptions import DomainException
from bevpos.infrastructure.cli.output import fail, get_container, respond


@click.command("init")
@click.pass_context
def db_init(ctx: click.Context) -> None:
    """Create any missing tables."""
    try:
        tables = get_container(ctx).install_schema()
    except DomainException as exc:
        fail(ctx, exc)

    respond(ctx, f"Schema ready: {', '.join(tables)}", {"tables": tables})
