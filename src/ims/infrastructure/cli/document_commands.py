"""CLI commands for receipts, deliveries, transfers and adjustments.

Every document type gets the same ``validate``, ``cancel``, ``show``
and ``list`` commands; only ``create`` differs per type.
"""

from __future__ import annotations

from datetime import timezone

import click

from ims.application.cancel_document import CancelDocumentHandler
from ims.application.create_document import CreateDocumentHandler
from ims.application.dto import DocumentDTO, DocumentHeader, LineSpec
from ims.application.show_document import ListDocumentsHandler, ShowDocumentHandler
from ims.application.validate_document import ValidateDocumentHandler
from ims.domain.exceptions import DomainException
from ims.domain.model.document import DocumentStatus, DocumentType
from ims.domain.model.value_objects import Actor
from ims.infrastructure.bootstrap import unit_of_work


def _parse_lines(raw: str, field: str = "quantity") -> list[LineSpec]:
    """Parse '1:10,2:5' (product id : amount) into LineSpec list."""
    specs: list[LineSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid line format '{pair}'. Expected 'ProductId:Quantity'."
            )
        pid_str, qty_str = pair.split(":", 1)
        try:
            product_id = int(pid_str)
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(f"Invalid line '{pair}': both parts must be integers.")
        specs.append(LineSpec(product_id=product_id, **{field: qty}))
    return specs


_SCHEDULED = click.option(
    "--scheduled", type=click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%d %H:%M"]),
    default=None, help="Planned date (UTC).",
)


def _utc(value):
    return value.replace(tzinfo=timezone.utc) if value is not None else None


def _create(document_type: DocumentType, header: DocumentHeader, lines: list[LineSpec], actor: Actor) -> None:
    handler = CreateDocumentHandler(unit_of_work())

    try:
        dto = handler.handle(document_type, header, lines, actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{document_type.label.capitalize()} {dto.reference} created  (id={dto.id}, status={dto.status})")
    _print_lines(dto)


def _print_lines(dto: DocumentDTO) -> None:
    click.echo()
    if dto.document_type == DocumentType.ADJUSTMENT.value:
        click.echo(f"  {'Product':<10} {'System':>8} {'Counted':>8} {'Diff':>8}")
        click.echo(f"  {'-' * 37}")
        for line in dto.lines:
            click.echo(
                f"  #{line.product_id:<9} {line.system_qty:>8} {line.counted_qty:>8} {line.difference:>+8}"
            )
        return

    click.echo(f"  {'Product':<10} {'Qty':>8} {'Done':>8}")
    click.echo(f"  {'-' * 28}")
    for line in dto.lines:
        done = line.done_qty if line.done_qty is not None else "-"
        click.echo(f"  #{line.product_id:<9} {line.quantity:>8} {done:>8}")


# --- Type-specific create commands -------------------------------------------


@click.command("create")
@click.option("--location", "location_id", required=True, type=int, help="Receiving location ID.")
@click.option("--supplier", default=None, help="Supplier name.")
@click.option("--items", required=True, help="Lines as 'ProductId:Qty,ProductId:Qty'.")
@_SCHEDULED
@click.option("--notes", default=None, help="Free-text notes.")
@click.pass_obj
def receipt_create(actor: Actor, location_id: int, supplier, items: str, scheduled, notes) -> None:
    """Create a draft receipt."""
    header = DocumentHeader(
        location_id=location_id, partner_name=supplier,
        scheduled_date=_utc(scheduled), notes=notes,
    )
    _create(DocumentType.RECEIPT, header, _parse_lines(items), actor)


@click.command("create")
@click.option("--location", "location_id", required=True, type=int, help="Shipping location ID.")
@click.option("--customer", default=None, help="Customer name.")
@click.option("--items", required=True, help="Lines as 'ProductId:Qty,ProductId:Qty'.")
@_SCHEDULED
@click.option("--notes", default=None, help="Free-text notes.")
@click.pass_obj
def delivery_create(actor: Actor, location_id: int, customer, items: str, scheduled, notes) -> None:
    """Create a draft delivery (checks availability, reserves nothing)."""
    header = DocumentHeader(
        location_id=location_id, partner_name=customer,
        scheduled_date=_utc(scheduled), notes=notes,
    )
    _create(DocumentType.DELIVERY, header, _parse_lines(items), actor)


@click.command("create")
@click.option("--from", "from_location_id", required=True, type=int, help="Source location ID.")
@click.option("--to", "to_location_id", required=True, type=int, help="Destination location ID.")
@click.option("--items", required=True, help="Lines as 'ProductId:Qty,ProductId:Qty'.")
@_SCHEDULED
@click.option("--notes", default=None, help="Free-text notes.")
@click.pass_obj
def transfer_create(actor: Actor, from_location_id: int, to_location_id: int, items: str, scheduled, notes) -> None:
    """Create a draft internal transfer."""
    header = DocumentHeader(
        from_location_id=from_location_id, to_location_id=to_location_id,
        scheduled_date=_utc(scheduled), notes=notes,
    )
    _create(DocumentType.TRANSFER, header, _parse_lines(items), actor)


@click.command("create")
@click.option("--location", "location_id", required=True, type=int, help="Counted location ID.")
@click.option("--counts", required=True, help="Counted quantities as 'ProductId:Counted,...'.")
@click.option("--reason", default=None, help="Why the count was taken.")
@click.pass_obj
def adjustment_create(actor: Actor, location_id: int, counts: str, reason) -> None:
    """Record a physical count as a draft adjustment."""
    header = DocumentHeader(location_id=location_id, reason=reason)
    _create(DocumentType.ADJUSTMENT, header, _parse_lines(counts, field="counted_qty"), actor)


# --- Shared commands ----------------------------------------------------------


def document_group(document_type: DocumentType, help_text: str) -> click.Group:
    """Build the command group for one document type."""
    group = click.Group(name=document_type.value.lower(), help=help_text)
    label = document_type.label

    @group.command("validate")
    @click.option("--id", "document_id", required=True, type=int, help=f"{label.capitalize()} ID.")
    @click.pass_obj
    def validate(actor: Actor, document_id: int) -> None:
        """Validate the document and apply it to stock."""
        handler = ValidateDocumentHandler(unit_of_work())

        try:
            dto = handler.handle(document_type, document_id, actor)
        except DomainException as exc:
            raise click.ClickException(str(exc))

        click.echo(f"{label.capitalize()} {dto.reference} validated  (status={dto.status})")

    @group.command("cancel")
    @click.option("--id", "document_id", required=True, type=int, help=f"{label.capitalize()} ID.")
    def cancel(document_id: int) -> None:
        """Cancel a document that has not been validated."""
        handler = CancelDocumentHandler(unit_of_work())

        try:
            dto = handler.handle(document_type, document_id)
        except DomainException as exc:
            raise click.ClickException(str(exc))

        click.echo(f"{label.capitalize()} {dto.reference} cancelled")

    @group.command("show")
    @click.option("--id", "document_id", required=True, type=int, help=f"{label.capitalize()} ID.")
    def show(document_id: int) -> None:
        """Show document details."""
        handler = ShowDocumentHandler(unit_of_work())

        try:
            dto = handler.handle(document_type, document_id)
        except DomainException as exc:
            raise click.ClickException(str(exc))

        click.echo(f"{label.capitalize()} {dto.reference}  (id={dto.id}, status={dto.status})")
        if dto.location_id is not None:
            click.echo(f"Location:  #{dto.location_id}")
        if dto.from_location_id is not None:
            click.echo(f"From:      #{dto.from_location_id}")
            click.echo(f"To:        #{dto.to_location_id}")
        if dto.partner_name:
            click.echo(f"Partner:   {dto.partner_name}")
        if dto.reason:
            click.echo(f"Reason:    {dto.reason}")
        if dto.notes:
            click.echo(f"Notes:     {dto.notes}")
        click.echo(f"Created:   {dto.created_at} by user #{dto.user_id}")
        if dto.scheduled_date:
            click.echo(f"Scheduled: {dto.scheduled_date}")
        if dto.validated_date:
            click.echo(f"Validated: {dto.validated_date}")
        _print_lines(dto)

    @group.command("list")
    @click.option(
        "--status", type=click.Choice([s.value for s in DocumentStatus]),
        default=None, help="Only documents in this status.",
    )
    @click.option("--location", "location_id", type=int, default=None, help="Only documents touching this location.")
    def list_(status, location_id) -> None:
        """List documents, newest first."""
        handler = ListDocumentsHandler(unit_of_work())
        documents = handler.handle(
            document_type,
            status=DocumentStatus(status) if status else None,
            location_id=location_id,
        )

        if not documents:
            click.echo(f"No {label} documents found.")
            return

        click.echo(f"{'ID':<6} {'Reference':<22} {'Status':<10} {'Lines':>5}  Created")
        click.echo("-" * 70)
        for dto in documents:
            click.echo(
                f"{dto.id:<6} {dto.reference:<22} {dto.status:<10} {len(dto.lines):>5}  {dto.created_at}"
            )

    return group
