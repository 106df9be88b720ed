import click

from wms.infrastructure.bootstrap import settings
from wms.infrastructure.cli.asset_commands import (
    asset_condition,
    asset_install_from_stock,
    asset_register,
    asset_replace,
    asset_show,
    asset_uninstall,
)
from wms.infrastructure.cli.delivery_commands import delivery_show, delivery_status
from wms.infrastructure.cli.receiving_commands import (
    receiving_add_line,
    receiving_commit,
    receiving_create,
    receiving_delete,
    receiving_delete_scan,
    receiving_list,
    receiving_manual,
    receiving_map,
    receiving_scan,
    receiving_show,
    receiving_station,
)
from wms.infrastructure.cli.reference_commands import reference_list, reference_load
from wms.infrastructure.cli.shipment_commands import (
    shipment_add_item,
    shipment_create,
    shipment_pick,
    shipment_show,
    shipment_status,
)
from wms.infrastructure.cli.stock_commands import (
    stock_adjust,
    stock_availability,
    stock_create,
    stock_delete,
    stock_list,
    stock_update,
)
from wms.logging_config import configure_logging


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log at DEBUG level.")
def cli(verbose: bool) -> None:
    """WMS — warehouse receiving, stock and shipment operations"""
    config = settings()
    configure_logging("DEBUG" if verbose else config.log_level, config.log_file)


@cli.group()
def reference() -> None:
    """Load and list products, warehouses and stores."""


@cli.group()
def stock() -> None:
    """Manage the stock ledger."""


@cli.group()
def asset() -> None:
    """Manage serialized equipment units."""


@cli.group()
def receiving() -> None:
    """Scan-driven receiving sessions."""


@cli.group()
def shipment() -> None:
    """Assemble and ship assets to stores."""


@cli.group()
def delivery() -> None:
    """Track deliveries of shipped shipments."""


# Register subcommands
reference.add_command(reference_load)
reference.add_command(reference_list)
stock.add_command(stock_create)
stock.add_command(stock_adjust)
stock.add_command(stock_update)
stock.add_command(stock_delete)
stock.add_command(stock_list)
stock.add_command(stock_availability)
asset.add_command(asset_register)
asset.add_command(asset_show)
asset.add_command(asset_condition)
asset.add_command(asset_uninstall)
asset.add_command(asset_replace)
asset.add_command(asset_install_from_stock)
receiving.add_command(receiving_create)
receiving.add_command(receiving_add_line)
receiving.add_command(receiving_map)
receiving.add_command(receiving_scan)
receiving.add_command(receiving_manual)
receiving.add_command(receiving_delete_scan)
receiving.add_command(receiving_commit)
receiving.add_command(receiving_delete)
receiving.add_command(receiving_show)
receiving.add_command(receiving_list)
receiving.add_command(receiving_station)
shipment.add_command(shipment_create)
shipment.add_command(shipment_add_item)
shipment.add_command(shipment_pick)
shipment.add_command(shipment_status)
shipment.add_command(shipment_show)
delivery.add_command(delivery_status)
delivery.add_command(delivery_show)
