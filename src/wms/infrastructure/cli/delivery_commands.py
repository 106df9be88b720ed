"""CLI commands for the Delivery aggregate."""

from __future__ import annotations

import click

from wms.application.show_delivery import ShowDeliveryHandler
from wms.application.update_delivery_status import UpdateDeliveryStatusHandler
from wms.domain.exceptions import DomainException
from wms.infrastructure.bootstrap import notification_sink, unit_of_work


def _display_delivery(dto) -> None:
    click.echo(f"Delivery {dto.id}  (status={dto.status})")
    click.echo(f"Shipment: {dto.shipment_id}")
    click.echo(f"Store:    {dto.store_id}")
    click.echo(f"Provider: {dto.provider}")
    if dto.courier_name:
        phone = f" ({dto.courier_phone})" if dto.courier_phone else ""
        click.echo(f"Courier:  {dto.courier_name}{phone}")
    if dto.delivered_at:
        click.echo(f"Delivered: {dto.delivered_at}")
    click.echo()
    for event in dto.events:
        detail = f": {event.description}" if event.description else ""
        click.echo(f"  {event.timestamp}  {event.title}{detail}")


@click.command("status")
@click.option("--id", "delivery_id", required=True, help="Delivery ID.")
@click.option("--status", required=True, help="New delivery status.")
@click.option("--courier", "courier_name", default=None, help="Courier name.")
@click.option("--phone", "courier_phone", default=None, help="Courier phone.")
@click.option("--note", "description", default=None, help="Event description.")
def delivery_status(
    delivery_id: str,
    status: str,
    courier_name: str | None,
    courier_phone: str | None,
    description: str | None,
) -> None:
    """Record a carrier status update."""
    handler = UpdateDeliveryStatusHandler(uow=unit_of_work(), notifications=notification_sink())

    try:
        dto = handler.handle(delivery_id, status, courier_name, courier_phone, description)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_delivery(dto)


@click.command("show")
@click.argument("ref")
def delivery_show(ref: str) -> None:
    """Show a delivery by its ID or by its shipment ID."""
    handler = ShowDeliveryHandler(uow=unit_of_work())

    try:
        dto = handler.handle(ref)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_delivery(dto)
