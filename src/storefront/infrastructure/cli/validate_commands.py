"""CLI commands for content validation.

Every command exits with status 1 when it finds a problem so CI can gate
on it.
"""

from __future__ import annotations

import click

from storefront.application.dto import ValidationReportDTO
from storefront.application.validate_relationships import ValidateRelationshipsHandler
from storefront.application.validate_schemas import (
    CatalogCollection,
    ValidateSchemasHandler,
)
from storefront.domain.exceptions import DomainException
from storefront.domain.repository.catalog_repository import CatalogRepository


def _echo_report(report: ValidationReportDTO) -> None:
    if report.ok:
        click.echo(f"{report.title}: {report.checked} checked, all valid")
    else:
        click.echo(
            f"{report.title}: {report.issue_count} issue(s) in "
            f"{len(report.groups)} entit{'y' if len(report.groups) == 1 else 'ies'}"
        )
        for group in report.groups:
            click.echo(f"  {group.subject}")
            for issue in group.issues:
                click.echo(f"    {issue}")
    for warning in report.warnings:
        click.echo(f"  warning: {warning}")
    for line in report.info:
        click.echo(f"  {line}")


def _run_schema(
    repo: CatalogRepository, collection: CatalogCollection, partial_tags: bool = False
) -> ValidationReportDTO:
    handler = ValidateSchemasHandler(catalog_repo=repo)
    try:
        return handler.handle(collection, partial_tags=partial_tags)
    except DomainException as exc:
        raise click.ClickException(str(exc))


def _finish(ctx: click.Context, reports: list[ValidationReportDTO]) -> None:
    for report in reports:
        _echo_report(report)
    if not all(r.ok for r in reports):
        ctx.exit(1)


@click.command("products")
@click.pass_context
def validate_products(ctx: click.Context) -> None:
    """Validate product records."""
    _finish(ctx, [_run_schema(ctx.obj, CatalogCollection.PRODUCTS)])


@click.command("categories")
@click.pass_context
def validate_categories(ctx: click.Context) -> None:
    """Validate category records."""
    _finish(ctx, [_run_schema(ctx.obj, CatalogCollection.CATEGORIES)])


@click.command("tags")
@click.option("--partial", is_flag=True, help="Allow tag ids without a metadata entry.")
@click.pass_context
def validate_tags(ctx: click.Context, partial: bool) -> None:
    """Validate the tag metadata map."""
    _finish(ctx, [_run_schema(ctx.obj, CatalogCollection.TAGS, partial_tags=partial)])


@click.command("content")
@click.pass_context
def validate_content(ctx: click.Context) -> None:
    """Validate per-product FAQ and testimonial files."""
    _finish(ctx, [_run_schema(ctx.obj, CatalogCollection.CONTENT)])


@click.command("promotion")
@click.pass_context
def validate_promotion(ctx: click.Context) -> None:
    """Validate the promotion banner config."""
    _finish(ctx, [_run_schema(ctx.obj, CatalogCollection.PROMOTION)])


@click.command("relationships")
@click.pass_context
def validate_relationships(ctx: click.Context) -> None:
    """Check that every product reference resolves."""
    handler = ValidateRelationshipsHandler(catalog_repo=ctx.obj)
    try:
        report = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _finish(ctx, [report])


@click.command("all")
@click.pass_context
def validate_all(ctx: click.Context) -> None:
    """Run every schema check, then the relationship check."""
    reports = [_run_schema(ctx.obj, collection) for collection in CatalogCollection]
    handler = ValidateRelationshipsHandler(catalog_repo=ctx.obj)
    try:
        # Schema failures were already reported above.
        reports.append(handler.handle(include_schema_errors=False))
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _finish(ctx, reports)
