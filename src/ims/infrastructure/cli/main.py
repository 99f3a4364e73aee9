import click

from ims.domain.exceptions import ValidationError
from ims.domain.model.document import DocumentType
from ims.domain.model.value_objects import Actor, Role
from ims.infrastructure.cli.category_commands import category_add, category_list
from ims.infrastructure.cli.document_commands import (
    adjustment_create,
    delivery_create,
    document_group,
    receipt_create,
    transfer_create,
)
from ims.infrastructure.cli.move_commands import move_list
from ims.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_stock,
    product_update,
)
from ims.infrastructure.cli.warehouse_commands import (
    location_add,
    location_list,
    warehouse_add,
    warehouse_list,
)
from ims.infrastructure.config import get_settings
from ims.infrastructure.logging_config import configure_logging


@click.group()
@click.option(
    "--user-id", type=int, default=1, envvar="IMS_USER_ID", show_default=True,
    help="ID of the acting user, as issued by the auth layer.",
)
@click.option(
    "--role", type=click.Choice([r.value for r in Role]), default=Role.STAFF.value,
    envvar="IMS_USER_ROLE", show_default=True, help="Role of the acting user.",
)
@click.pass_context
def cli(ctx: click.Context, user_id: int, role: str) -> None:
    """IMS: multi-warehouse inventory management."""
    configure_logging(get_settings().log_level)
    try:
        ctx.obj = Actor(id=user_id, role=Role(role))
    except ValidationError as exc:
        raise click.BadParameter(str(exc), param_hint="--user-id")


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def category() -> None:
    """Manage product categories."""


@cli.group()
def warehouse() -> None:
    """Manage warehouses."""


@cli.group()
def location() -> None:
    """Manage warehouse locations."""


@cli.group()
def move() -> None:
    """Browse the stock move history."""


receipt = document_group(DocumentType.RECEIPT, "Incoming stock from suppliers.")
delivery = document_group(DocumentType.DELIVERY, "Outgoing stock to customers.")
transfer = document_group(DocumentType.TRANSFER, "Stock moved between locations.")
adjustment = document_group(DocumentType.ADJUSTMENT, "Physical inventory counts.")

# Register subcommands
category.add_command(category_add)
category.add_command(category_list)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_stock)
product.add_command(product_update)
warehouse.add_command(warehouse_add)
warehouse.add_command(warehouse_list)
location.add_command(location_add)
location.add_command(location_list)
move.add_command(move_list)
receipt.add_command(receipt_create)
delivery.add_command(delivery_create)
transfer.add_command(transfer_create)
adjustment.add_command(adjustment_create)
for group in (receipt, delivery, transfer, adjustment):
    cli.add_command(group)
