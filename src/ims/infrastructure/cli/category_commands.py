"""CLI commands for product categories."""

from __future__ import annotations

import click

from ims.application.manage_categories import AddCategoryHandler, ListCategoriesHandler
from ims.domain.exceptions import DomainException
from ims.infrastructure.bootstrap import unit_of_work


@click.command("add")
@click.option("--name", required=True, help="Unique category name.")
@click.option("--description", default=None, help="Free-text description.")
def category_add(name: str, description: str | None) -> None:
    """Add a product category."""
    handler = AddCategoryHandler(unit_of_work())

    try:
        category = handler.handle(name=name, description=description)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category #{category.id} '{category.name}' added")


@click.command("list")
def category_list() -> None:
    """List categories with their product counts."""
    categories = ListCategoriesHandler(unit_of_work()).handle()

    if not categories:
        click.echo("No categories found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Products':>8}  Description")
    click.echo("-" * 62)
    for c in categories:
        click.echo(f"{c.id:<6} {c.name:<24} {c.product_count:>8}  {c.description or ''}")
