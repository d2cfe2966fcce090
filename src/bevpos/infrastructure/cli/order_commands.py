"""CLI commands for the Order aggregate."""

from __future__ import annotations

from datetime import datetime

import click

from bevpos.application.cancel_order import CancelOrderHandler
from bevpos.application.dto import CustomerSpec, OrderDTO, OrderItemSpec, PlaceOrderRequest
from bevpos.application.list_orders import ListOrdersHandler
from bevpos.application.place_order import PlaceOrderHandler
from bevpos.application.show_order import ShowOrderHandler
from bevpos.domain.exceptions import DomainException
from bevpos.infrastructure.cli.output import fail, get_container, respond


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'p1:3,p2:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.number}  (status={dto.status}, payment={dto.payment_method})")
    click.echo(f"Customer: {dto.customer_name}")
    click.echo(f"Placed:   {dto.placed_at}")
    if dto.notes:
        click.echo(f"Notes:    {dto.notes}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_name:<20} {line.quantity:>5} {line.unit_price:>10} {line.subtotal:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("place")
@click.option("--customer", "customer_name", default=None, help="Customer name.")
@click.option("--customer-id", default=None, help="Registered customer id.")
@click.option("--phone", default=None, help="Customer phone.")
@click.option("--address", default=None, help="Delivery address.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option("--payment", required=True, help="cash, card, pix or on_credit (fiado).")
@click.option("--notes", default=None, help="Free-text notes.")
@click.option(
    "--placed-at",
    type=click.DateTime(formats=["%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d"]),
    default=None,
    help="Retroactive sale time, in store-local time.",
)
@click.pass_context
def order_place(
    ctx: click.Context,
    customer_name: str | None,
    customer_id: str | None,
    phone: str | None,
    address: str | None,
    items: str,
    payment: str,
    notes: str | None,
    placed_at: datetime | None,
) -> None:
    """Place a sale: check stock, take it out and book the payment."""
    request = PlaceOrderRequest(
        customer=CustomerSpec(id=customer_id, name=customer_name, phone=phone, address=address),
        items=_parse_items(items),
        payment_method=payment,
        notes=notes,
        placed_at=placed_at,
    )

    try:
        container = get_container(ctx)
        handler = PlaceOrderHandler(uow=container.uow(), calendar=container.calendar)
        result = handler.handle(request)
    except DomainException as exc:
        fail(ctx, exc)

    respond(ctx, result.message, result)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.pass_context
def order_show(ctx: click.Context, order_id: str) -> None:
    """Show details of an existing order."""
    try:
        handler = ShowOrderHandler(uow=get_container(ctx).uow())
        dto = handler.handle(order_id)
    except DomainException as exc:
        fail(ctx, exc)

    respond(ctx, "", dto, render=lambda: _display_order(dto))


@click.command("list")
@click.option("--status", default=None, help="pending, paid or canceled.")
@click.option("--limit", default=50, show_default=True, type=click.IntRange(min=1))
@click.pass_context
def order_list(ctx: click.Context, status: str | None, limit: int) -> None:
    """List recent orders, newest first."""
    try:
        handler = ListOrdersHandler(uow=get_container(ctx).uow())
        orders = handler.handle(status=status, limit=limit)
    except DomainException as exc:
        fail(ctx, exc)

    def render() -> None:
        if not orders:
            click.echo("No orders found.")
            return
        click.echo(f"{'Number':<12} {'Customer':<20} {'Payment':<10} {'Status':<9} {'Total':>10}")
        click.echo("-" * 65)
        for o in orders:
            click.echo(
                f"{o.number:<12} {o.customer_name[:20]:<20} {o.payment_method:<10} {o.status:<9} {o.total:>10}"
            )

    respond(ctx, f"{len(orders)} order(s)", orders, render=render)


@click.command("cancel")
@click.option("--id", "order_id", required=True, help="Order ID to cancel.")
@click.pass_context
def order_cancel(ctx: click.Context, order_id: str) -> None:
    """Cancel an order (restores stock and removes its ledger entry)."""
    try:
        container = get_container(ctx)
        handler = CancelOrderHandler(uow=container.uow(), calendar=container.calendar)
        dto = handler.handle(order_id)
    except DomainException as exc:
        fail(ctx, exc)

    respond(ctx, f"Order {dto.number} canceled.", dto)
