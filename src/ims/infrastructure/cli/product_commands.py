"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from ims.application.add_product import AddProductHandler
from ims.application.show_stock import ListProductsHandler, ShowProductStockHandler
from ims.application.update_product import DeactivateProductHandler, UpdateProductHandler
from ims.domain.exceptions import DomainException
from ims.infrastructure.bootstrap import unit_of_work


@click.command("add")
@click.option("--sku", required=True, help="Unique stock keeping unit.")
@click.option("--name", required=True, help="Product name.")
@click.option("--description", default=None, help="Free-text description.")
@click.option("--uom", "unit_of_measure", default=None, help="Unit of measure (default 'Unit').")
@click.option("--reorder-point", type=int, default=0, show_default=True, help="Low-stock threshold.")
@click.option("--optimal-stock", type=int, default=0, show_default=True, help="Target stock level.")
@click.option("--category", "category_id", type=int, default=None, help="Category ID.")
def product_add(
    sku: str,
    name: str,
    description: str | None,
    unit_of_measure: str | None,
    reorder_point: int,
    optimal_stock: int,
    category_id: int | None,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(unit_of_work())

    try:
        product = handler.handle(
            sku=sku,
            name=name,
            description=description,
            unit_of_measure=unit_of_measure,
            reorder_point=reorder_point,
            optimal_stock=optimal_stock,
            category_id=category_id,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.sku}' ({product.name}) added")


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--description", default=None, help="New description.")
@click.option("--uom", "unit_of_measure", default=None, help="New unit of measure.")
@click.option("--reorder-point", type=int, default=None, help="New low-stock threshold.")
@click.option("--optimal-stock", type=int, default=None, help="New target stock level.")
@click.option("--category", "category_id", type=int, default=None, help="New category ID.")
def product_update(
    product_id: int,
    name: str | None,
    description: str | None,
    unit_of_measure: str | None,
    reorder_point: int | None,
    optimal_stock: int | None,
    category_id: int | None,
) -> None:
    """Update a product (the SKU cannot be changed)."""
    handler = UpdateProductHandler(unit_of_work())

    try:
        handler.handle(
            product_id,
            name=name,
            description=description,
            unit_of_measure=unit_of_measure,
            reorder_point=reorder_point,
            optimal_stock=optimal_stock,
            category_id=category_id,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} updated")


@click.command("delete")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_delete(product_id: int) -> None:
    """Deactivate a product (its history is kept)."""
    handler = DeactivateProductHandler(unit_of_work())

    try:
        product = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} '{product.sku}' deactivated")


@click.command("list")
@click.option("--search", default=None, help="Match against name or SKU.")
@click.option("--low-stock", is_flag=True, default=False, help="Only products at or below reorder point.")
@click.option("--category", "category_id", type=int, default=None, help="Only products in this category.")
def product_list(search: str | None, low_stock: bool, category_id: int | None) -> None:
    """List active products with their total stock."""
    handler = ListProductsHandler(unit_of_work())
    products = handler.handle(search=search, low_stock_only=low_stock, category_id=category_id)

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'SKU':<14} {'Name':<24} {'Stock':>8} {'Avail':>8}  Flags")
    click.echo("-" * 72)
    for p in products:
        flags = "OUT" if p.is_out_of_stock else ("LOW" if p.is_low_stock else "")
        click.echo(
            f"{p.id:<6} {p.sku:<14} {p.name:<24} {p.total_stock:>8} {p.total_available:>8}  {flags}"
        )


@click.command("stock")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_stock(product_id: int) -> None:
    """Show the stock of a product per location."""
    handler = ShowProductStockHandler(unit_of_work())

    try:
        levels = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not levels:
        click.echo("No stock recorded for this product.")
        return

    click.echo(f"{'Warehouse':<10} {'Location':<20} {'Qty':>8} {'Reserved':>10} {'Available':>10}")
    click.echo("-" * 62)
    for lvl in levels:
        click.echo(
            f"{lvl.warehouse_code:<10} {lvl.location_name:<20} {lvl.quantity:>8} "
            f"{lvl.reserved:>10} {lvl.available:>10}"
        )
