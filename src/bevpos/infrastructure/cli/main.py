import click

from bevpos.infrastructure.cli.cash_commands import cash_close, cash_open, cash_status
from bevpos.infrastructure.cli.db_commands import db_init
from bevpos.infrastructure.cli.fiado_commands import fiado_add, fiado_delete, fiado_list, fiado_settle
from bevpos.infrastructure.cli.ledger_commands import ledger_add, ledger_delete, ledger_list
from bevpos.infrastructure.cli.order_commands import order_cancel, order_list, order_place, order_show
from bevpos.infrastructure.cli.product_commands import product_add, product_list, product_set_stock
from bevpos.infrastructure.cli.report_commands import report_daily, report_today


@click.group()
@click.option("--json", "as_json", is_flag=True, default=False, help="Print results as JSON.")
@click.pass_context
def cli(ctx: click.Context, as_json: bool) -> None:
    """bevpos: beverage delivery point of sale"""
    ctx.ensure_object(dict)["json"] = as_json


@cli.group()
def order() -> None:
    """Place and manage sales."""


@cli.group()
def product() -> None:
    """Manage the catalog and stock."""


@cli.group()
def cash() -> None:
    """Open and close the cash register."""


@cli.group()
def report() -> None:
    """Sales reports."""


@cli.group()
def fiado() -> None:
    """On-credit debts."""


@cli.group()
def ledger() -> None:
    """Cash book entries."""


@cli.group()
def db() -> None:
    """Database maintenance."""


# Register subcommands
order.add_command(order_cancel)
order.add_command(order_list)
order.add_command(order_place)
order.add_command(order_show)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_set_stock)
cash.add_command(cash_open)
cash.add_command(cash_close)
cash.add_command(cash_status)
report.add_command(report_daily)
report.add_command(report_today)
fiado.add_command(fiado_add)
fiado.add_command(fiado_delete)
fiado.add_command(fiado_list)
fiado.add_command(fiado_settle)
ledger.add_command(ledger_add)
ledger.add_command(ledger_delete)
ledger.add_command(ledger_list)
db.add_command(db_init)
