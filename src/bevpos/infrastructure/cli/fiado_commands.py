"""CLI commands for on-credit (fiado) debts."""

from __future__ import annotations

from datetime import datetime

import click

from bevpos.application.delete_fiado_receipt import DeleteFiadoReceiptHandler
from bevpos.application.list_fiado import ListOpenFiadoHandler
from bevpos.application.record_fiado_receipt import RecordFiadoReceiptHandler
from bevpos.application.settle_fiado import MarkFiadoSettledHandler
from bevpos.domain.exceptions import DomainException
from bevpos.infrastructure.cli.output import fail, get_container, respond


@click.command("list")
@click.pass_context
def fiado_list(ctx: click.Context) -> None:
    """List open debts: pending on-credit orders and unpaid receipts."""
    try:
        handler = ListOpenFiadoHandler(uow=get_container(ctx).uow())
        items = handler.handle()
    except DomainException as exc:
        fail(ctx, exc)

    def render() -> None:
        if not items:
            click.echo("No open fiado.")
            return
        click.echo(f"{'ID':<32} {'Kind':<8} {'Customer':<20} {'Total':>10}  Date")
        click.echo("-" * 90)
        for item in items:
            click.echo(
                f"{item.id:<32} {item.kind:<8} {item.customer_name[:20]:<20} {item.total:>10}  {item.date[:10]}"
            )

    respond(ctx, "", items, render=render)


@click.command("settle")
@click.option("--id", "target_id", required=True, help="Order or receipt ID.")
@click.option("--paid/--unpaid", default=True, show_default=True, help="Mark as paid or reopen.")
@click.pass_context
def fiado_settle(ctx: click.Context, target_id: str, paid: bool) -> None:
    """Mark an on-credit order or receipt as paid (or unpaid)."""
    try:
        container = get_container(ctx)
        handler = MarkFiadoSettledHandler(uow=container.uow(), calendar=container.calendar)
        result = handler.handle(target_id, paid)
    except DomainException as exc:
        fail(ctx, exc)

    respond(ctx, result.message, result)


@click.command("add")
@click.option("--customer", "customer_name", required=True, help="Customer name.")
@click.option("--total", required=True, help="Amount owed.")
@click.option("--due", "due_date", type=click.DateTime(formats=["%Y-%m-%d"]), default=None, help="Due date (YYYY-MM-DD).")
@click.option("--phone", default=None)
@click.option("--notes", default=None)
@click.pass_context
def fiado_add(
    ctx: click.Context,
    customer_name: str,
    total: str,
    due_date: datetime | None,
    phone: str | None,
    notes: str | None,
) -> None:
    """Record a fiado receipt outside the order flow."""
    try:
        container = get_container(ctx)
        handler = RecordFiadoReceiptHandler(uow=container.uow(), calendar=container.calendar)
        item = handler.handle(
            customer_name=customer_name,
            total=total,
            due_date=due_date.date() if due_date else None,
            phone=phone,
            notes=notes,
        )
    except DomainException as exc:
        fail(ctx, exc)

    respond(ctx, f"Receipt {item.id} recorded for {item.customer_name} ({item.total})", item)


@click.command("delete")
@click.option("--id", "receipt_id", required=True, help="Receipt ID.")
@click.pass_context
def fiado_delete(ctx: click.Context, receipt_id: str) -> None:
    """Delete an unpaid fiado receipt."""
    try:
        handler = DeleteFiadoReceiptHandler(uow=get_container(ctx).uow())
        result = handler.handle(receipt_id)
    except DomainException as exc:
        fail(ctx, exc)

    respond(ctx, result.message, result)
