"""CLI commands for the stock move history."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import click

from ims.application.list_moves import ListMovesHandler
from ims.domain.exceptions import DomainException
from ims.domain.model.stock import MoveFilter, MoveType
from ims.infrastructure.bootstrap import move_history_limit, unit_of_work

_DATE_ONLY = "%Y-%m-%d"
_DATE = click.DateTime(formats=[_DATE_ONLY, "%Y-%m-%d %H:%M"])


def _parse_until(ctx, param, value):
    """A bare date covers the whole day; an explicit time is kept as given."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    parsed = _DATE.convert(value, param, ctx)
    try:
        datetime.strptime(value.strip(), _DATE_ONLY)
    except ValueError:
        return parsed
    return parsed + timedelta(days=1) - timedelta(microseconds=1)


@click.command("list")
@click.option("--product", "product_id", type=int, default=None, help="Only moves of this product.")
@click.option("--location", "location_id", type=int, default=None, help="Moves into or out of this location.")
@click.option("--type", "move_type", type=click.Choice([t.value for t in MoveType]), default=None)
@click.option("--since", type=_DATE, default=None, help="From this date (UTC, inclusive).")
@click.option(
    "--until", default=None, callback=_parse_until, metavar="[%Y-%m-%d|%Y-%m-%d %H:%M]",
    help="Up to this date (UTC, inclusive).",
)
def move_list(product_id, location_id, move_type, since, until) -> None:
    """List recorded stock moves, newest first."""
    criteria = MoveFilter(
        product_id=product_id,
        location_id=location_id,
        move_type=MoveType(move_type) if move_type else None,
        start=since.replace(tzinfo=timezone.utc) if since else None,
        end=until.replace(tzinfo=timezone.utc) if until else None,
    )

    try:
        moves = ListMovesHandler(unit_of_work(), limit=move_history_limit()).handle(criteria)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not moves:
        click.echo("No moves found.")
        return

    click.echo(f"{'Date':<22} {'Reference':<22} {'Type':<11} {'Product':>8} {'From':>6} {'To':>6} {'Qty':>7}")
    click.echo("-" * 88)
    for m in moves:
        src = f"#{m.from_location_id}" if m.from_location_id is not None else "-"
        dst = f"#{m.to_location_id}" if m.to_location_id is not None else "-"
        click.echo(
            f"{m.created_at:<22} {m.reference:<22} {m.move_type:<11} {m.product_id:>8} "
            f"{src:>6} {dst:>6} {m.quantity:>7}"
        )
