"""CLI commands for the asset registry."""

from __future__ import annotations

import click

from wms.application.install_from_stock import InstallFromStockHandler
from wms.application.register_asset import RegisterAssetHandler
from wms.application.replace_asset import ReplaceAssetHandler
from wms.application.show_asset import ShowAssetHandler
from wms.application.uninstall_asset import UninstallAssetHandler
from wms.application.update_asset_condition import UpdateAssetConditionHandler
from wms.domain.exceptions import DomainException
from wms.infrastructure.bootstrap import notification_sink, unit_of_work


def _summary(asset) -> str:
    return (
        f"Asset {asset.id}  SN {asset.serial_number}  "
        f"{asset.process_status.value}/{asset.condition.value}  {asset.location_label}"
    )


@click.command("register")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--warehouse", "warehouse_id", required=True, help="Warehouse holding the unit.")
@click.option("--serial", "serial_number", default=None, help="Serial number (generated if omitted).")
@click.option("--condition", default="NEW", show_default=True, help="Physical condition.")
def asset_register(
    product_id: str, warehouse_id: str, serial_number: str | None, condition: str
) -> None:
    """Register a physical unit at a warehouse."""
    handler = RegisterAssetHandler(uow=unit_of_work(), notifications=notification_sink())

    try:
        asset = handler.handle(product_id, warehouse_id, serial_number, condition)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(_summary(asset))


@click.command("show")
@click.argument("asset_ref")
def asset_show(asset_ref: str) -> None:
    """Show an asset (by ID or serial number) with its history."""
    handler = ShowAssetHandler(uow=unit_of_work())

    try:
        dto = handler.handle(asset_ref)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Asset {dto.id}  SN {dto.serial_number}")
    click.echo(f"Product:   {dto.product_id}")
    click.echo(f"Status:    {dto.process_status}")
    click.echo(f"Condition: {dto.condition}")
    click.echo(f"Location:  {dto.location}")
    if dto.notes:
        click.echo(f"Notes:     {dto.notes}")
    click.echo()
    click.echo("History:")
    for entry in dto.history:
        where = f"  @ {entry.location}" if entry.location else ""
        click.echo(f"  {entry.timestamp}  {entry.action}{where}")


@click.command("condition")
@click.option("--id", "asset_id", required=True, help="Asset ID.")
@click.option("--condition", required=True, help="New condition, e.g. WORKING or BROKEN.")
@click.option("--note", default=None, help="Optional note.")
def asset_condition(asset_id: str, condition: str, note: str | None) -> None:
    """Record a change in physical condition."""
    handler = UpdateAssetConditionHandler(uow=unit_of_work())

    try:
        asset = handler.handle(asset_id, condition, note)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(_summary(asset))


@click.command("uninstall")
@click.option("--id", "asset_id", required=True, help="Asset ID.")
@click.option("--warehouse", "warehouse_id", default=None, help="Warehouse receiving the unit.")
@click.option("--note", default=None, help="Reason or comment.")
@click.option("--yes", "confirmed", is_flag=True, help="Do not ask for confirmation.")
def asset_uninstall(asset_id: str, warehouse_id: str | None, note: str | None, confirmed: bool) -> None:
    """Remove an installed unit from its store."""
    if not confirmed:
        confirmed = click.confirm(f"Uninstall asset {asset_id}?", default=False)
    if not confirmed:
        click.echo("Aborted.")
        return

    handler = UninstallAssetHandler(uow=unit_of_work(), notifications=notification_sink())
    try:
        asset = handler.handle(asset_id, confirmed=True, warehouse_id=warehouse_id, note=note)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(_summary(asset))


@click.command("replace")
@click.option("--id", "asset_id", required=True, help="Installed asset being replaced.")
@click.option("--new-serial", required=True, help="Serial number of the replacement unit.")
@click.option("--old-condition", default="BROKEN", show_default=True, help="Condition of the removed unit.")
@click.option("--reason", required=True, help="Why the unit is replaced.")
def asset_replace(asset_id: str, new_serial: str, old_condition: str, reason: str) -> None:
    """Swap an installed unit for another serial at the same store."""
    handler = ReplaceAssetHandler(uow=unit_of_work(), notifications=notification_sink())

    try:
        result = handler.handle(asset_id, new_serial, old_condition, reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Removed:   {_summary(result.retired)}")
    click.echo(f"Installed: {_summary(result.installed)}")


@click.command("install-from-stock")
@click.option("--store", "store_id", required=True, help="Store being equipped.")
@click.option("--stock", "stock_id", required=True, help="Stock record to take one unit from.")
@click.option("--skip-inventory", is_flag=True, help="Do not decrement stock.")
@click.option("--note", default=None, help="Optional note.")
def asset_install_from_stock(store_id: str, stock_id: str, skip_inventory: bool, note: str | None) -> None:
    """Equip a store with one unit taken from warehouse stock."""
    handler = InstallFromStockHandler(uow=unit_of_work(), notifications=notification_sink())

    try:
        asset = handler.handle(store_id, stock_id, skip_inventory=skip_inventory, note=note)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(_summary(asset))
