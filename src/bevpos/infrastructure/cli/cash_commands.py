"""CLI commands for the cash register."""

from __future__ import annotations

import click

from bevpos.application.close_cash_session import CloseCashSessionHandler
from bevpos.application.current_cash_session import CurrentCashSessionHandler
from bevpos.application.dto import CashSessionDTO
from bevpos.application.open_cash_session import OpenCashSessionHandler
from bevpos.domain.exceptions import DomainException
from bevpos.infrastructure.cli.output import fail, get_container, respond


def _display_session(dto: CashSessionDTO) -> None:
    click.echo(f"Register {dto.session_id}  ({dto.status}, day {dto.business_day})")
    click.echo(f"  Opened:        {dto.opened_at}")
    if dto.closed_at:
        click.echo(f"  Closed:        {dto.closed_at}")
    click.echo(f"  Opening float: {dto.opening_float:>10}")
    click.echo(f"  Sales:         {dto.accumulated_sales:>10}  ({dto.order_count} orders)")
    click.echo(f"  Balance:       {dto.current_balance:>10}")


@click.command("open")
@click.option("--float", "initial_float", default="0", show_default=True, help="Cash in the drawer.")
@click.pass_context
def cash_open(ctx: click.Context, initial_float: str) -> None:
    """Open today's cash register."""
    try:
        container = get_container(ctx)
        handler = OpenCashSessionHandler(uow=container.uow(), calendar=container.calendar)
        dto = handler.handle(initial_float)
    except DomainException as exc:
        fail(ctx, exc)

    respond(ctx, dto.message, dto)


@click.command("close")
@click.pass_context
def cash_close(ctx: click.Context) -> None:
    """Close the open cash register and record the day's totals."""
    try:
        container = get_container(ctx)
        handler = CloseCashSessionHandler(uow=container.uow(), calendar=container.calendar)
        dto = handler.handle()
    except DomainException as exc:
        fail(ctx, exc)

    respond(ctx, dto.message, dto, render=lambda: _display_session(dto))


@click.command("status")
@click.pass_context
def cash_status(ctx: click.Context) -> None:
    """Show today's register with live totals."""
    try:
        container = get_container(ctx)
        handler = CurrentCashSessionHandler(uow=container.uow(), calendar=container.calendar)
        dto = handler.handle()
    except DomainException as exc:
        fail(ctx, exc)

    if dto is None:
        respond(ctx, "No cash register opened today.", None)
        return
    respond(ctx, "", dto, render=lambda: _display_session(dto))
