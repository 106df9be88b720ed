"""CLI commands for the stock ledger."""

from __future__ import annotations

import click

from wms.application.adjust_stock import AdjustStockHandler
from wms.application.create_stock import CreateStockHandler
from wms.application.delete_stock import DeleteStockHandler
from wms.application.show_availability import ShowAvailabilityHandler
from wms.application.show_stock import ShowStockHandler
from wms.application.update_stock import UpdateStockHandler
from wms.domain.exceptions import DomainException
from wms.infrastructure.bootstrap import unit_of_work


def _echo_item(item) -> None:
    click.echo(
        f"Stock {item.id}: product={item.product_id} warehouse={item.warehouse_id} "
        f"quantity={item.quantity} reserved={item.reserved} "
        f"available={item.available} min={item.min_quantity} ({item.level.value})"
    )


@click.command("create")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--warehouse", "warehouse_id", required=True, help="Warehouse ID.")
@click.option("--quantity", required=True, type=int, help="Units to add.")
@click.option("--min", "min_quantity", type=int, default=None, help="Low-stock threshold.")
def stock_create(product_id: str, warehouse_id: str, quantity: int, min_quantity: int | None) -> None:
    """Add units for a product at a warehouse (creates the record if needed)."""
    handler = CreateStockHandler(uow=unit_of_work())

    try:
        item = handler.handle(product_id, warehouse_id, quantity, min_quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_item(item)


@click.command("adjust")
@click.option("--id", "stock_id", required=True, help="Stock record ID.")
@click.option("--delta", required=True, type=int, help="Signed change, e.g. -2.")
@click.option("--allow-negative", is_flag=True, help="Permit available stock to go below zero.")
def stock_adjust(stock_id: str, delta: int, allow_negative: bool) -> None:
    """Apply a signed correction to on-hand quantity."""
    handler = AdjustStockHandler(uow=unit_of_work())

    try:
        item = handler.handle(stock_id, delta, allow_negative=allow_negative)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_item(item)


@click.command("update")
@click.option("--id", "stock_id", required=True, help="Stock record ID.")
@click.option("--min", "min_quantity", type=int, default=None, help="New low-stock threshold.")
@click.option("--reserved", type=int, default=None, help="New reserved quantity.")
def stock_update(stock_id: str, min_quantity: int | None, reserved: int | None) -> None:
    """Change the threshold or reserved quantity of a stock record."""
    handler = UpdateStockHandler(uow=unit_of_work())

    try:
        item = handler.handle(stock_id, min_quantity=min_quantity, reserved=reserved)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_item(item)


@click.command("delete")
@click.option("--id", "stock_id", required=True, help="Stock record ID.")
def stock_delete(stock_id: str) -> None:
    """Delete a stock record."""
    handler = DeleteStockHandler(uow=unit_of_work())

    try:
        handler.handle(stock_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock {stock_id} deleted")


@click.command("list")
@click.option("--warehouse", "warehouse_id", default=None, help="Only this warehouse.")
@click.option("--low", "low_only", is_flag=True, help="Only LOW and OUT positions.")
def stock_list(warehouse_id: str | None, low_only: bool) -> None:
    """Show stock levels."""
    lines = ShowStockHandler(uow=unit_of_work()).handle(warehouse_id, low_only=low_only)

    if not lines:
        click.echo("No stock records found.")
        return

    click.echo(
        f"{'ID':<14} {'Product':<20} {'Warehouse':<16} {'Qty':>6} "
        f"{'Reserved':>9} {'Available':>10} {'Min':>5}  Level"
    )
    click.echo("-" * 92)
    for line in lines:
        click.echo(
            f"{line.id:<14} {line.product_name:<20} {line.warehouse_name:<16} "
            f"{line.quantity:>6} {line.reserved:>9} {line.available:>10} "
            f"{line.min_quantity:>5}  {line.level}"
        )


@click.command("availability")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--warehouse", "warehouse_id", default=None, help="Only this warehouse.")
def stock_availability(product_id: str, warehouse_id: str | None) -> None:
    """Show available-to-promise for a product."""
    handler = ShowAvailabilityHandler(uow=unit_of_work())

    try:
        dto = handler.handle(product_id, warehouse_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{dto.product_name} ({dto.product_id})")
    click.echo(f"  Stock available:  {dto.stock_available}")
    click.echo(f"  Assets available: {dto.assets_available}")
    click.echo(f"  Total:            {dto.total}")
