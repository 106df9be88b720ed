"""CLI commands for reference data (catalog and locations)."""

from __future__ import annotations

import json

import click

from wms.application.load_reference_data import LoadReferenceDataHandler
from wms.application.show_reference_data import ShowReferenceDataHandler
from wms.domain.exceptions import DomainException
from wms.infrastructure.bootstrap import unit_of_work


@click.command("load")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def reference_load(path: str) -> None:
    """Import products, warehouses and stores from a JSON file."""
    try:
        with open(path, encoding="utf-8") as handle:
            payload = json.load(handle)
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"Invalid JSON in {path}: {exc}")

    handler = LoadReferenceDataHandler(uow=unit_of_work())
    try:
        counts = handler.handle(payload)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Loaded {counts.products} products, {counts.warehouses} warehouses, "
        f"{counts.stores} stores"
    )


@click.command("list")
def reference_list() -> None:
    """List products, warehouses and stores."""
    data = ShowReferenceDataHandler(uow=unit_of_work()).handle()

    click.echo("Products:")
    if not data.products:
        click.echo("  (none)")
    for product in data.products:
        click.echo(f"  {product.id:<12} {product.sku:<14} {product.name}")

    click.echo("Warehouses:")
    if not data.warehouses:
        click.echo("  (none)")
    for warehouse in data.warehouses:
        click.echo(f"  {warehouse.id:<12} {warehouse.name}")

    click.echo("Stores:")
    if not data.stores:
        click.echo("  (none)")
    for store in data.stores:
        click.echo(f"  {store.id:<12} {store.name}  {store.address or ''}".rstrip())
