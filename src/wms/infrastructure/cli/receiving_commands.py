"""CLI commands for receiving sessions, including the interactive station."""

from __future__ import annotations

import click

from wms.application.add_receiving_line import AddReceivingLineHandler
from wms.application.commit_receiving import CommitReceivingHandler
from wms.application.create_receiving_session import CreateReceivingSessionHandler
from wms.application.delete_receiving_session import DeleteReceivingSessionHandler
from wms.application.delete_scan import DeleteScanHandler
from wms.application.dto import ReceivingLineSpec, ScanResultDTO
from wms.application.manual_entry import ManualEntryHandler
from wms.application.map_receiving_item import MapReceivingItemHandler
from wms.application.scan_code import ScanCodeHandler
from wms.application.show_receiving_session import (
    ListReceivingSessionsHandler,
    ShowReceivingSessionHandler,
)
from wms.domain.exceptions import DomainException
from wms.domain.model.scan_mode import ScanMode, ScanModeSelector
from wms.infrastructure.bootstrap import notification_sink, scan_mode_selector, unit_of_work


def _parse_line(raw: str) -> ReceivingLineSpec:
    """Parse 'Name:Qty' or 'Name:Qty:SKU' into a ReceivingLineSpec."""
    parts = [part.strip() for part in raw.split(":")]
    if len(parts) >= 3 and parts[-2].lstrip("-").isdigit():
        name, qty_str, sku = ":".join(parts[:-2]), parts[-2], parts[-1]
    elif len(parts) >= 2:
        name, qty_str, sku = ":".join(parts[:-1]), parts[-1], None
    else:
        raise click.BadParameter(
            f"Invalid line format '{raw}'. Expected 'Name:Qty' or 'Name:Qty:SKU'."
        )
    try:
        qty = int(qty_str)
    except ValueError:
        raise click.BadParameter(f"Invalid quantity '{qty_str}' for line '{name}'.")
    return ReceivingLineSpec(name=name, expected_quantity=qty, sku=sku or None)


def _display_session(dto) -> None:
    click.echo(f"Receiving {dto.id}  (status={dto.status})")
    click.echo(f"Warehouse: {dto.warehouse_id}")
    if dto.invoice_number:
        click.echo(f"Invoice:   {dto.invoice_number}")
    if dto.supplier:
        click.echo(f"Supplier:  {dto.supplier}")
    click.echo(
        f"Progress:  {dto.total_scanned}/{dto.total_expected} ({dto.progress_percent}%)"
    )
    click.echo()
    click.echo(f"  {'Line':<14} {'Name':<24} {'SKU':<12} {'Product':<12} {'Exp':>5} {'Scan':>5}")
    click.echo(f"  {'-'*77}")
    for item in dto.items:
        click.echo(
            f"  {item.id:<14} {item.name:<24} {item.sku or '-':<12} "
            f"{item.product_id or '-':<12} {item.expected_quantity:>5} {item.scanned_quantity:>5}"
        )
        for scan in item.scans:
            label = "manual" if scan.is_manual else scan.code
            click.echo(f"      {scan.id:<14} {scan.quantity:>+5}  {label}  {scan.timestamp}")
    for warning in dto.warnings:
        click.echo(f"! {warning}")


def _echo_scan(result: ScanResultDTO) -> None:
    if not result.matched:
        click.echo(result.message, err=True)
        return
    click.echo(
        f"{result.message}  [{result.scanned_quantity}/{result.expected_quantity}]"
    )


@click.command("create")
@click.option("--warehouse", "warehouse_id", required=True, help="Receiving warehouse ID.")
@click.option("--line", "lines", multiple=True, required=True, help="Line as 'Name:Qty[:SKU]'.")
@click.option("--invoice", "invoice_number", default=None, help="Invoice number.")
@click.option("--supplier", default=None, help="Supplier name.")
def receiving_create(
    warehouse_id: str, lines: tuple[str, ...], invoice_number: str | None, supplier: str | None
) -> None:
    """Open a receiving session for an invoice."""
    specs = [_parse_line(raw) for raw in lines]
    handler = CreateReceivingSessionHandler(uow=unit_of_work())

    try:
        dto = handler.handle(warehouse_id, specs, invoice_number, supplier)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_session(dto)


@click.command("add-line")
@click.option("--id", "session_id", required=True, help="Receiving session ID.")
@click.option("--line", "line", required=True, help="Line as 'Name:Qty[:SKU]'.")
def receiving_add_line(session_id: str, line: str) -> None:
    """Add an expected line to an open session."""
    handler = AddReceivingLineHandler(uow=unit_of_work())

    try:
        dto = handler.handle(session_id, _parse_line(line))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_session(dto)


@click.command("map")
@click.option("--id", "session_id", required=True, help="Receiving session ID.")
@click.option("--item", "item_id", required=True, help="Line ID.")
@click.option("--product", "product_id", required=True, help="Catalog product ID.")
def receiving_map(session_id: str, item_id: str, product_id: str) -> None:
    """Map a line to a catalog product."""
    handler = MapReceivingItemHandler(uow=unit_of_work())

    try:
        handler.handle(session_id, item_id, product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Line {item_id} mapped to product {product_id}")


@click.command("scan")
@click.option("--id", "session_id", required=True, help="Receiving session ID.")
@click.option("--box", "box", type=int, default=None, help="Units per scan (box mode).")
@click.argument("codes", nargs=-1, required=True)
def receiving_scan(session_id: str, box: int | None, codes: tuple[str, ...]) -> None:
    """Record one scan per CODE."""
    handler = ScanCodeHandler(uow=unit_of_work())

    try:
        mode = ScanMode.boxed(box) if box is not None else ScanMode.single()
        for code in codes:
            _echo_scan(handler.handle(session_id, code, mode))
    except DomainException as exc:
        raise click.ClickException(str(exc))


@click.command("manual")
@click.option("--id", "session_id", required=True, help="Receiving session ID.")
@click.option("--item", "item_id", required=True, help="Line ID.")
@click.option("--quantity", required=True, help="Signed non-zero quantity, e.g. -2.")
def receiving_manual(session_id: str, item_id: str, quantity: str) -> None:
    """Record a manual signed quantity against a line."""
    handler = ManualEntryHandler(uow=unit_of_work())

    try:
        result = handler.handle(session_id, item_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo_scan(result)


@click.command("delete-scan")
@click.option("--id", "session_id", required=True, help="Receiving session ID.")
@click.option("--item", "item_id", required=True, help="Line ID.")
@click.option("--scan", "scan_id", required=True, help="Scan ID to remove.")
def receiving_delete_scan(session_id: str, item_id: str, scan_id: str) -> None:
    """Remove one entry from a line's scan log."""
    handler = DeleteScanHandler(uow=unit_of_work())

    try:
        item = handler.handle(session_id, item_id, scan_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Scan {scan_id} removed; {item.name} now {item.scanned_quantity}/{item.expected_quantity}")


@click.command("commit")
@click.option("--id", "session_id", required=True, help="Receiving session ID.")
def receiving_commit(session_id: str) -> None:
    """Post scanned quantities to stock and complete the session."""
    handler = CommitReceivingHandler(uow=unit_of_work(), notifications=notification_sink())

    try:
        result = handler.handle(session_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Receiving {result.session_id} completed: {result.updated_count} stock records updated")
    for line in result.lines:
        click.echo(f"  {line.product_id:<12} {line.quantity:>+6}  -> {line.new_quantity} ({line.stock_id})")
    for warning in result.warnings:
        click.echo(f"! {warning}")


@click.command("delete")
@click.option("--id", "session_id", required=True, help="Receiving session ID.")
def receiving_delete(session_id: str) -> None:
    """Delete a session that has not been completed."""
    handler = DeleteReceivingSessionHandler(uow=unit_of_work())

    try:
        handler.handle(session_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Receiving {session_id} deleted")


@click.command("show")
@click.option("--id", "session_id", required=True, help="Receiving session ID.")
def receiving_show(session_id: str) -> None:
    """Show a session with its lines and scan logs."""
    handler = ShowReceivingSessionHandler(uow=unit_of_work())

    try:
        dto = handler.handle(session_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_session(dto)


@click.command("list")
def receiving_list() -> None:
    """List receiving sessions."""
    sessions = ListReceivingSessionsHandler(uow=unit_of_work()).handle()

    if not sessions:
        click.echo("No receiving sessions found.")
        return

    for dto in sessions:
        click.echo(
            f"{dto.id:<14} {dto.status:<12} {dto.warehouse_id:<12} "
            f"{dto.total_scanned:>5}/{dto.total_expected:<5} {dto.invoice_number or ''}"
        )


# --- Interactive station ------------------------------------------------------


def _configure_box(selector: ScanModeSelector, arg: str | None) -> None:
    current = selector.begin_box_configuration()
    if arg is None:
        presets = ", ".join(str(n) for n in selector.presets)
        value = click.prompt(f"Units per box ({presets})", type=int, default=current)
    else:
        try:
            value = int(arg)
        except ValueError:
            selector.cancel()
            click.echo(f"Not a number: {arg}", err=True)
            return

    selector.propose(value)
    if not click.confirm(f"Scan in boxes of {value}?", default=True):
        selector.cancel()
        click.echo(f"Mode unchanged: {selector.mode}")
        return

    try:
        mode = selector.confirm()
    except DomainException as exc:
        selector.cancel()
        click.echo(str(exc), err=True)
        return
    click.echo(f"Mode: {mode}")


@click.command("station")
@click.option("--id", "session_id", required=True, help="Receiving session ID.")
def receiving_station(session_id: str) -> None:
    """Read barcodes from the terminal, one per line.

    \b
    :box [N]      switch to box mode (asks for confirmation)
    :single       back to single-unit scanning
    :manual N     signed quantity for the last matched line
    :undo         remove the last recorded scan
    :show         print the session
    :quit         leave the station
    """
    uow = unit_of_work()
    selector = scan_mode_selector()
    scan_handler = ScanCodeHandler(uow)
    manual_handler = ManualEntryHandler(uow)
    show_handler = ShowReceivingSessionHandler(uow)

    try:
        _display_session(show_handler.handle(session_id))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    last_item_id: str | None = None
    last_scan_id: str | None = None

    while True:
        try:
            line = click.prompt(f"[{selector.mode}]", default="", show_default=False)
        except click.Abort:
            break
        line = line.strip()
        if not line:
            continue
        if line == ":quit":
            break

        command, _, arg = line.partition(" ")
        arg = arg.strip() or None
        try:
            if command == ":box":
                _configure_box(selector, arg)
            elif command == ":single":
                click.echo(f"Mode: {selector.disable_box_mode()}")
            elif command == ":manual":
                if last_item_id is None:
                    click.echo("Scan an item first", err=True)
                    continue
                if arg is None:
                    click.echo("Usage: :manual N", err=True)
                    continue
                result = manual_handler.handle(session_id, last_item_id, arg)
                last_scan_id = result.scan_id
                _echo_scan(result)
            elif command == ":undo":
                if last_item_id is None or last_scan_id is None:
                    click.echo("Nothing to undo", err=True)
                    continue
                item = DeleteScanHandler(uow).handle(session_id, last_item_id, last_scan_id)
                last_scan_id = None
                click.echo(f"Undone; {item.name} now {item.scanned_quantity}/{item.expected_quantity}")
            elif command == ":show":
                _display_session(show_handler.handle(session_id))
            elif command.startswith(":"):
                click.echo(f"Unknown command: {command}", err=True)
            else:
                result = scan_handler.handle(session_id, line, selector.mode)
                if result.matched:
                    last_item_id = result.item_id
                    last_scan_id = result.scan_id
                _echo_scan(result)
        except DomainException as exc:
            click.echo(f"Error: {exc}", err=True)

    click.echo("Station closed.")
