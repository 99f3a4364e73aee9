"""CLI commands for warehouses and locations."""

from __future__ import annotations

import click

from ims.application.manage_warehouses import (
    AddLocationHandler,
    AddWarehouseHandler,
    ListLocationsHandler,
    ListWarehousesHandler,
)
from ims.domain.exceptions import DomainException
from ims.domain.model.warehouse import LocationType
from ims.infrastructure.bootstrap import unit_of_work


@click.command("add")
@click.option("--code", required=True, help="Short unique warehouse code.")
@click.option("--name", required=True, help="Warehouse name.")
@click.option("--address", default=None, help="Postal address.")
def warehouse_add(code: str, name: str, address: str | None) -> None:
    """Add a warehouse."""
    handler = AddWarehouseHandler(unit_of_work())

    try:
        warehouse = handler.handle(code=code, name=name, address=address)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Warehouse #{warehouse.id} '{warehouse.code}' added")


@click.command("list")
def warehouse_list() -> None:
    """List active warehouses and their locations."""
    warehouses = ListWarehousesHandler(unit_of_work()).handle()

    if not warehouses:
        click.echo("No warehouses found.")
        return

    for w in warehouses:
        click.echo(f"#{w.id} {w.code}  {w.name}")
        for loc in w.locations:
            click.echo(f"    #{loc.id:<5} {loc.code:<12} {loc.name:<24} {loc.type.value}")


@click.command("add")
@click.option("--warehouse", "warehouse_id", required=True, type=int, help="Warehouse ID.")
@click.option("--code", required=True, help="Location code, unique within the warehouse.")
@click.option("--name", required=True, help="Location name.")
@click.option(
    "--type", "location_type",
    type=click.Choice([t.value for t in LocationType]),
    default=LocationType.INTERNAL.value, show_default=True,
    help="Location classification.",
)
def location_add(warehouse_id: int, code: str, name: str, location_type: str) -> None:
    """Add a location to a warehouse."""
    handler = AddLocationHandler(unit_of_work())

    try:
        location = handler.handle(
            warehouse_id=warehouse_id,
            code=code,
            name=name,
            type=LocationType(location_type),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Location #{location.id} '{location.code}' added to warehouse #{warehouse_id}")


@click.command("list")
@click.option("--warehouse", "warehouse_id", type=int, default=None, help="Only this warehouse.")
def location_list(warehouse_id: int | None) -> None:
    """List active locations."""
    locations = ListLocationsHandler(unit_of_work()).handle(warehouse_id=warehouse_id)

    if not locations:
        click.echo("No locations found.")
        return

    click.echo(f"{'ID':<6} {'Whs':<6} {'Code':<12} {'Name':<24} {'Type':<10}")
    click.echo("-" * 62)
    for loc in locations:
        click.echo(
            f"{loc.id:<6} {loc.warehouse_id:<6} {loc.code:<12} {loc.name:<24} {loc.type.value:<10}"
        )
