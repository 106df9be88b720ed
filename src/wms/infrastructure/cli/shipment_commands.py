"""CLI commands for the Shipment aggregate."""

from __future__ import annotations

import click

from wms.application.add_shipment_item import AddShipmentItemHandler
from wms.application.create_shipment import CreateShipmentHandler
from wms.application.pick_shipment_item import PickShipmentItemHandler
from wms.application.show_shipment import ShowShipmentHandler
from wms.application.update_shipment_status import UpdateShipmentStatusHandler
from wms.domain.exceptions import DomainException
from wms.infrastructure.bootstrap import notification_sink, settings, unit_of_work


def _display_shipment(dto) -> None:
    click.echo(f"Shipment {dto.id}  (status={dto.status})")
    click.echo(f"Request:  {dto.request_id}")
    click.echo(f"Route:    {dto.warehouse_id} -> {dto.store_id}")
    if dto.assembled_by:
        click.echo(f"Assembled by: {dto.assembled_by}")
    if dto.delivery_id:
        click.echo(f"Delivery: {dto.delivery_id}")
    click.echo(f"Picked:   {dto.picked_count}/{len(dto.items)}")
    click.echo()
    for item in dto.items:
        mark = "x" if item.picked else " "
        click.echo(f"  [{mark}] {item.id:<14} asset {item.asset_id}")


@click.command("create")
@click.option("--request", "request_id", required=True, help="Request being fulfilled.")
@click.option("--warehouse", "warehouse_id", required=True, help="Source warehouse.")
@click.option("--store", "store_id", required=True, help="Destination store.")
def shipment_create(request_id: str, warehouse_id: str, store_id: str) -> None:
    """Open a new shipment in DRAFT."""
    handler = CreateShipmentHandler(uow=unit_of_work())

    try:
        dto = handler.handle(request_id, warehouse_id, store_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Shipment {dto.id} created  (status={dto.status})")


@click.command("add-item")
@click.option("--id", "shipment_id", required=True, help="Shipment ID.")
@click.option("--asset", "asset_id", required=True, help="AVAILABLE asset to reserve.")
def shipment_add_item(shipment_id: str, asset_id: str) -> None:
    """Reserve an asset and add it to the shipment."""
    handler = AddShipmentItemHandler(uow=unit_of_work())

    try:
        item = handler.handle(shipment_id, asset_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item {item.id} added; asset {item.asset_id} reserved")


@click.command("pick")
@click.option("--item", "item_id", required=True, help="Shipment item ID.")
def shipment_pick(item_id: str) -> None:
    """Mark a shipment item as picked."""
    handler = PickShipmentItemHandler(uow=unit_of_work())

    try:
        item = handler.handle(item_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item {item.id} picked at {item.picked_at}")


@click.command("status")
@click.option("--id", "shipment_id", required=True, help="Shipment ID.")
@click.option("--status", required=True, help="PICKING, PACKED, SHIPPED or CANCELLED.")
@click.option("--assembled-by", default=None, help="Who assembled the shipment.")
def shipment_status(shipment_id: str, status: str, assembled_by: str | None) -> None:
    """Move a shipment to a new status."""
    handler = UpdateShipmentStatusHandler(
        uow=unit_of_work(),
        notifications=notification_sink(),
        delivery_provider=settings().delivery_provider,
    )

    try:
        dto = handler.handle(shipment_id, status, assembled_by)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_shipment(dto)


@click.command("show")
@click.option("--id", "shipment_id", required=True, help="Shipment ID.")
def shipment_show(shipment_id: str) -> None:
    """Show a shipment and its items."""
    handler = ShowShipmentHandler(uow=unit_of_work())

    try:
        dto = handler.handle(shipment_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_shipment(dto)
