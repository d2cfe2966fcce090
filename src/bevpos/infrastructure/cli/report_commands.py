"""CLI commands for reports."""

from __future__ import annotations

from datetime import datetime

import click

from bevpos.application.daily_report import GetDailyReportHandler
from bevpos.application.dto import DailyReportDTO
from bevpos.application.today_sales import TodaySalesHandler
from bevpos.domain.exceptions import DomainException
from bevpos.infrastructure.cli.output import fail, get_container, respond


def _display_report(dto: DailyReportDTO) -> None:
    register = dto.cash_register
    click.echo(f"Daily report {dto.date}  [{dto.status}]")
    click.echo(f"  {dto.message}")
    click.echo()
    click.echo(f"  Revenue:        {dto.revenue:>10}")
    click.echo(f"  Paid orders:    {dto.order_count:>10}")
    click.echo(f"  All orders:     {dto.total_orders:>10}")
    click.echo(f"  Average ticket: {dto.average_ticket:>10}")
    click.echo(f"  Top product:    {dto.top_product}")
    if register.opened:
        state = "closed" if register.closed else "open"
        click.echo(f"  Register:       {state}, {register.initial_amount} -> {register.final_amount}")
    else:
        click.echo("  Register:       not opened")


@click.command("daily")
@click.option("--date", "day", type=click.DateTime(formats=["%Y-%m-%d"]), default=None, help="Day (YYYY-MM-DD); default today.")
@click.pass_context
def report_daily(ctx: click.Context, day: datetime | None) -> None:
    """Revenue, ticket, best seller and register summary for one day."""
    try:
        container = get_container(ctx)
        handler = GetDailyReportHandler(uow=container.uow(), calendar=container.calendar)
        dto = handler.handle(day.date() if day else None)
    except DomainException as exc:
        fail(ctx, exc)

    respond(ctx, "", dto, render=lambda: _display_report(dto))


@click.command("today")
@click.pass_context
def report_today(ctx: click.Context) -> None:
    """Paid sales of the current business day."""
    try:
        container = get_container(ctx)
        handler = TodaySalesHandler(uow=container.uow(), calendar=container.calendar)
        dto = handler.handle()
    except DomainException as exc:
        fail(ctx, exc)

    first = f", first at {dto.first_order_time}" if dto.first_order_time else ""
    respond(ctx, f"{dto.date}: {dto.count} paid order(s), total {dto.total}{first}", dto)
