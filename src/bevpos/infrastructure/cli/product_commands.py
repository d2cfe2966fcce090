"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from bevpos.application.add_product import AddProductHandler
from bevpos.application.list_products import ListProductsHandler
from bevpos.application.set_stock import SetStockHandler
from bevpos.domain.exceptions import DomainException
from bevpos.infrastructure.cli.output import fail, get_container, respond


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Sale price (e.g. 4.90).")
@click.option("--cost", "cost_price", default="0", help="Cost price.")
@click.option("--stock", default=0, type=int, help="Initial stock.")
@click.option("--threshold", "low_stock_threshold", default=0, type=int, help="Low-stock threshold.")
@click.option("--category", default=None, help="Category (e.g. Cerveja).")
@click.pass_context
def product_add(
    ctx: click.Context,
    name: str,
    price: str,
    cost_price: str,
    stock: int,
    low_stock_threshold: int,
    category: str | None,
) -> None:
    """Add a new product to the catalog."""
    try:
        handler = AddProductHandler(uow=get_container(ctx).uow())
        product = handler.handle(
            name=name,
            price=price,
            cost_price=cost_price,
            stock=stock,
            low_stock_threshold=low_stock_threshold,
            category=category,
        )
    except DomainException as exc:
        fail(ctx, exc)

    respond(ctx, f"Product {product.id} '{product.name}' added at {product.price}", product)


@click.command("list")
@click.option("--low-stock", is_flag=True, default=False, help="Only products at or below threshold.")
@click.pass_context
def product_list(ctx: click.Context, low_stock: bool) -> None:
    """List all products in the catalog."""
    try:
        handler = ListProductsHandler(uow=get_container(ctx).uow())
        products = handler.handle(low_stock_only=low_stock)
    except DomainException as exc:
        fail(ctx, exc)

    def render() -> None:
        if not products:
            click.echo("No products found.")
            return
        click.echo(f"{'ID':<32} {'Name':<20} {'Price':>10} {'Stock':>6}")
        click.echo("-" * 71)
        for p in products:
            flag = "  LOW" if p.low_stock else ""
            click.echo(f"{p.id:<32} {p.name[:20]:<20} {p.price:>10} {p.stock:>6}{flag}")

    respond(ctx, "", products, render=render)


@click.command("set-stock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="New stock level.")
@click.pass_context
def product_set_stock(ctx: click.Context, product_id: str, quantity: int) -> None:
    """Set the stock level of a product (restock or count correction)."""
    try:
        handler = SetStockHandler(uow=get_container(ctx).uow())
        product = handler.handle(product_id=product_id, quantity=quantity)
    except DomainException as exc:
        fail(ctx, exc)

    respond(ctx, f"Stock for '{product.name}' set to {product.stock}", product)
