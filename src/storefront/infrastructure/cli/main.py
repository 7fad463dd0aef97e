from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from storefront.infrastructure.bootstrap import DEFAULT_DATA_DIR, catalog_repository
from storefront.infrastructure.cli.priority_commands import (
    priorities_check,
    priorities_move,
    priorities_renumber,
    priorities_stats,
)
from storefront.infrastructure.cli.product_commands import (
    categories_usage,
    products_aggregate,
    products_list,
    tags_seed,
    tags_usage,
)
from storefront.infrastructure.cli.promotion_commands import promotion_status
from storefront.infrastructure.cli.validate_commands import (
    validate_all,
    validate_categories,
    validate_content,
    validate_products,
    validate_promotion,
    validate_relationships,
    validate_tags,
)


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_DATA_DIR,
    envvar="STOREFRONT_DATA_DIR",
    show_default=True,
    help="Directory holding the catalog JSON files.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path, verbose: bool) -> None:
    """Storefront catalog content integrity and ranking."""
    setup_logging(verbose)
    ctx.obj = catalog_repository(data_dir)


@cli.group()
def validate() -> None:
    """Validate catalog content."""


@cli.group()
def priorities() -> None:
    """Inspect and edit tag/category priorities."""


@cli.group()
def products() -> None:
    """Browse and aggregate products."""


@cli.group()
def tags() -> None:
    """Tag reports and metadata."""


@cli.group()
def promotion() -> None:
    """Promotion banner."""


@cli.group()
def categories() -> None:
    """Category reports."""


# Register subcommands
validate.add_command(validate_all)
validate.add_command(validate_categories)
validate.add_command(validate_content)
validate.add_command(validate_products)
validate.add_command(validate_promotion)
validate.add_command(validate_relationships)
validate.add_command(validate_tags)
priorities.add_command(priorities_check)
priorities.add_command(priorities_move)
priorities.add_command(priorities_renumber)
priorities.add_command(priorities_stats)
products.add_command(products_aggregate)
products.add_command(products_list)
tags.add_command(tags_seed)
tags.add_command(tags_usage)
categories.add_command(categories_usage)
promotion.add_command(promotion_status)
