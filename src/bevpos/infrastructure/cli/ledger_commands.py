"""CLI commands for the cash book."""

from __future__ import annotations

import click

from bevpos.application.delete_ledger_entry import DeleteLedgerEntryHandler
from bevpos.application.list_ledger import ListLedgerHandler
from bevpos.application.record_ledger_entry import RecordLedgerEntryHandler
from bevpos.domain.exceptions import DomainException
from bevpos.infrastructure.cli.output import fail, get_container, respond


@click.command("add")
@click.option("--direction", required=True, type=click.Choice(["in", "out"]), help="Money in or out.")
@click.option("--description", required=True)
@click.option("--category", required=True, help="e.g. Supplies, Rent.")
@click.option("--amount", required=True)
@click.option("--method", "payment_method", default="cash", show_default=True)
@click.pass_context
def ledger_add(
    ctx: click.Context,
    direction: str,
    description: str,
    category: str,
    amount: str,
    payment_method: str,
) -> None:
    """Record a manual ledger entry."""
    try:
        container = get_container(ctx)
        handler = RecordLedgerEntryHandler(uow=container.uow(), calendar=container.calendar)
        entry = handler.handle(
            direction=direction,
            description=description,
            category=category,
            amount=amount,
            payment_method=payment_method,
        )
    except DomainException as exc:
        fail(ctx, exc)

    respond(ctx, f"Ledger entry {entry.id} recorded ({entry.direction} {entry.amount})", entry)


@click.command("list")
@click.option("--limit", default=100, show_default=True, type=click.IntRange(min=1))
@click.pass_context
def ledger_list(ctx: click.Context, limit: int) -> None:
    """List recent ledger entries, newest first."""
    try:
        handler = ListLedgerHandler(uow=get_container(ctx).uow())
        entries = handler.handle(limit=limit)
    except DomainException as exc:
        fail(ctx, exc)

    def render() -> None:
        if not entries:
            click.echo("No ledger entries.")
            return
        for e in entries:
            sign = "+" if e.direction == "in" else "-"
            click.echo(f"{e.created_at[:16]}  {sign}{e.amount:>10}  {e.category:<12} {e.description}")

    respond(ctx, "", entries, render=render)


@click.command("delete")
@click.option("--id", "entry_id", required=True, help="Ledger entry ID.")
@click.pass_context
def ledger_delete(ctx: click.Context, entry_id: str) -> None:
    """Delete a manual ledger entry."""
    try:
        handler = DeleteLedgerEntryHandler(uow=get_container(ctx).uow())
        result = handler.handle(entry_id)
    except DomainException as exc:
        fail(ctx, exc)

    respond(ctx, result.message, result)
