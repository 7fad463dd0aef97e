"""CLI commands for product listings, aggregation and tag/category upkeep."""

from __future__ import annotations

import click

from storefront.application.aggregate_products import AggregateProductsHandler
from storefront.application.dto import UsageLineDTO
from storefront.application.rank_products import ProductOrdering, RankProductsHandler
from storefront.application.seed_tags import SeedTagsHandler
from storefront.application.show_usage import (
    ShowCategoryUsageHandler,
    ShowTagUsageHandler,
)
from storefront.domain.exceptions import DomainException


@click.command("list")
@click.option(
    "--order",
    type=click.Choice([o.value for o in ProductOrdering]),
    default=ProductOrdering.INTELLIGENT.value,
    show_default=True,
    help="Display ordering.",
)
@click.pass_obj
def products_list(repo, order: str) -> None:
    """List products in display order."""
    handler = RankProductsHandler(catalog_repo=repo)
    try:
        lines = handler.handle(ProductOrdering(order))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<28} {'Prio':>4} {'Price':>10}  {'Flags':<32} Categories")
    click.echo("-" * 100)
    for p in lines:
        click.echo(
            f"{p.id:<28} {p.priority:>4} {p.price_display:>10}  {p.flags:<32} "
            f"{', '.join(p.badge_categories)}"
        )


def _echo_usage(lines: list[UsageLineDTO], empty: str) -> None:
    if not lines:
        click.echo(empty)
        return
    click.echo(f"{'ID':<28} {'Name':<30} {'Products':>8}")
    click.echo("-" * 68)
    for line in lines:
        marker = "*" if line.featured else " "
        click.echo(f"{line.id:<28} {line.name:<30} {line.count:>8} {marker}")


@click.command("usage")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Show only the top N.")
@click.pass_obj
def tags_usage(repo, limit: int | None) -> None:
    """Tags by number of products using them (* = featured)."""
    try:
        lines = ShowTagUsageHandler(catalog_repo=repo).handle(limit=limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _echo_usage(lines, "No tags found.")


@click.command("usage")
@click.pass_obj
def categories_usage(repo) -> None:
    """Categories by number of products, secondary included (* = featured)."""
    try:
        lines = ShowCategoryUsageHandler(catalog_repo=repo).handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _echo_usage(lines, "No categories found.")


@click.command("aggregate")
@click.pass_obj
def products_aggregate(repo) -> None:
    """Merge the per-product files into products.json."""
    try:
        ids = AggregateProductsHandler(catalog_repo=repo).handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Aggregated {len(ids)} product(s) into products.json")


@click.command("seed")
@click.option("--dry-run", is_flag=True, help="Show the new records without writing them.")
@click.pass_obj
def tags_seed(repo, dry_run: bool) -> None:
    """Add starter metadata for product tags missing from tags.json."""
    try:
        seeded = SeedTagsHandler(catalog_repo=repo).handle(dry_run=dry_run)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not seeded:
        click.echo("Every product tag already has metadata.")
        return
    verb = "Would add" if dry_run else "Added"
    click.echo(f"{verb} {len(seeded)} tag(s):")
    for tag in seeded:
        click.echo(f"  {tag.priority:>4}  {tag.id:<28} {tag.name}")
