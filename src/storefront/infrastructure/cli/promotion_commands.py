"""CLI commands for the promotion banner."""

from __future__ import annotations

import click

from storefront.application.show_promotion import ShowPromotionHandler
from storefront.domain.exceptions import DomainException


@click.command("status")
@click.pass_obj
def promotion_status(repo) -> None:
    """Show whether the promotion banner is currently displayed."""
    try:
        status = ShowPromotionHandler(catalog_repo=repo).handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if status is None:
        click.echo("No promotion config found.")
        return
    click.echo(f"Banner {'active' if status.active else 'inactive'} ({status.behavior})")
    click.echo(f"  text: {status.promo_text}")
    if status.starts and status.ends:
        click.echo(f"  window: {status.starts} to {status.ends}")
    if status.discount_code:
        click.echo(f"  code: {status.discount_code}")
