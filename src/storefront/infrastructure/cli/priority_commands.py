"""CLI commands for tag and category priorities."""

from __future__ import annotations

import click

from storefront.application.dto import PriorityChangeDTO
from storefront.application.reorder_priorities import (
    MoveDirection,
    MovePriorityHandler,
    RenumberPrioritiesHandler,
)
from storefront.application.show_priorities import ShowPrioritiesHandler
from storefront.application.taxonomy_store import TaxonomyCollection
from storefront.domain.exceptions import DomainException

collection_option = click.option(
    "--collection",
    type=click.Choice([c.value for c in TaxonomyCollection]),
    default=TaxonomyCollection.TAGS.value,
    show_default=True,
    help="Which collection to work on.",
)


def _echo_changes(changes: list[PriorityChangeDTO]) -> None:
    for change in changes:
        click.echo(
            f"  {change.name:<30} {change.old_priority:>4} -> {change.new_priority:<4}"
        )


@click.command("stats")
@collection_option
@click.pass_obj
def priorities_stats(repo, collection: str) -> None:
    """Show featured counts, priority ranges and gaps."""
    handler = ShowPrioritiesHandler(catalog_repo=repo)
    try:
        stats = handler.handle(TaxonomyCollection(collection))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{stats.collection.capitalize()}: {stats.total} total")
    click.echo(
        f"  featured:     {stats.featured:>3}  "
        f"(priorities {stats.featured_range[0]}-{stats.featured_range[1]})"
    )
    click.echo(
        f"  non-featured: {stats.non_featured:>3}  "
        f"(priorities {stats.non_featured_range[0]}-{stats.non_featured_range[1]})"
    )
    if stats.gaps:
        click.echo(f"  gaps: {', '.join(stats.gaps)}")

    click.echo()
    click.echo(f"{'Priority':>8}  {'ID':<28} {'Name':<30} Featured")
    click.echo("-" * 78)
    for item in stats.items:
        click.echo(
            f"{item.priority:>8}  {item.id:<28} {item.name:<30} "
            f"{'yes' if item.featured else ''}"
        )


@click.command("check")
@collection_option
@click.pass_context
def priorities_check(ctx: click.Context, collection: str) -> None:
    """Report duplicate and out-of-band priorities."""
    handler = ShowPrioritiesHandler(catalog_repo=ctx.obj)
    try:
        stats = handler.handle(TaxonomyCollection(collection))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not stats.errors:
        click.echo(f"{stats.collection.capitalize()}: priorities are valid")
        return
    click.echo(f"{stats.collection.capitalize()}: {len(stats.errors)} problem(s)")
    for error in stats.errors:
        click.echo(f"  {error}")
    ctx.exit(1)


@click.command("renumber")
@collection_option
@click.option("--dry-run", is_flag=True, help="Show the changes without writing them.")
@click.pass_obj
def priorities_renumber(repo, collection: str, dry_run: bool) -> None:
    """Close priority gaps, keeping the current order."""
    handler = RenumberPrioritiesHandler(catalog_repo=repo)
    try:
        changes = handler.handle(TaxonomyCollection(collection), dry_run=dry_run)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not changes:
        click.echo("Priorities are already consecutive.")
        return
    verb = "Would renumber" if dry_run else "Renumbered"
    click.echo(f"{verb} {len(changes)} item(s):")
    _echo_changes(changes)


@click.command("move")
@collection_option
@click.option("--id", "item_id", required=True, help="Tag or category id.")
@click.option("--up/--down", "up", default=True, help="Direction to move.")
@click.pass_obj
def priorities_move(repo, collection: str, item_id: str, up: bool) -> None:
    """Swap an item with its neighbour inside its band."""
    handler = MovePriorityHandler(catalog_repo=repo)
    direction = MoveDirection.UP if up else MoveDirection.DOWN
    try:
        changes = handler.handle(TaxonomyCollection(collection), item_id, direction)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not changes:
        click.echo(f"'{item_id}' is already at the {'top' if up else 'bottom'}.")
        return
    click.echo(f"Moved '{item_id}' {direction.value}:")
    _echo_changes(changes)
