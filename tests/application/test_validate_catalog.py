"""Integration tests for the schema and relationship validation use cases."""

import pytest

from storefront.application.validate_relationships import ValidateRelationshipsHandler
from storefront.application.validate_schemas import (
    CatalogCollection,
    ValidateSchemasHandler,
)
from storefront.domain.exceptions import SchemaShapeError
from storefront.domain.model.universe import CatalogUniverse, IdUniverse
from tests.fakes import (
    FakeCatalogRepository,
    raw_category,
    raw_faq,
    raw_product,
    raw_tag,
    raw_testimonial,
)

UNIVERSE = CatalogUniverse(tags=IdUniverse.of("tag", ["pkm", "gtd"]))


def _setup(**overrides):
    data = {
        "products": [
            raw_product("kit", tags=["pkm"], faqIds=["kit-faq-1"], crossSellIds=["course"]),
            raw_product("course", tags=["GTD"], testimonialIds=["t-1"]),
        ],
        "categories": [raw_category("productivity", 1, featured=True)],
        "tags": {"pkm": raw_tag("pkm", 1, featured=True), "gtd": raw_tag("gtd", 21)},
        "faqs": {"kit": [raw_faq("kit-faq-1")]},
        "testimonials": {"course": [raw_testimonial("t-1")]},
    }
    data.update(overrides)
    return FakeCatalogRepository(**data)


class TestValidateSchemas:

    def test_valid_catalog(self):
        handler = ValidateSchemasHandler(_setup(), UNIVERSE)

        for collection in (
            CatalogCollection.PRODUCTS,
            CatalogCollection.CATEGORIES,
            CatalogCollection.TAGS,
            CatalogCollection.CONTENT,
        ):
            report = handler.handle(collection)
            assert report.ok, collection

    def test_product_failures_grouped_by_id(self):
        repo = _setup(products=[raw_product("kit", priority=200, price=-5), raw_product("ok")])

        report = ValidateSchemasHandler(repo, UNIVERSE).handle(CatalogCollection.PRODUCTS)

        assert not report.ok
        assert report.checked == 2
        assert [g.subject for g in report.groups] == ["kit"]
        assert report.issue_count == 2
        assert any(issue.startswith("priority: ") for issue in report.groups[0].issues)

    def test_duplicate_product_ids(self):
        repo = _setup(products=[raw_product("kit"), raw_product("kit")])

        report = ValidateSchemasHandler(repo, UNIVERSE).handle(CatalogCollection.PRODUCTS)

        assert report.groups[0].issues == ['id: Duplicate id "kit"']

    def test_tags_strict_by_default(self):
        repo = _setup(tags={"pkm": raw_tag("pkm", 1)})
        handler = ValidateSchemasHandler(repo, UNIVERSE)

        strict = handler.handle(CatalogCollection.TAGS)
        partial = handler.handle(CatalogCollection.TAGS, partial_tags=True)

        assert [g.subject for g in strict.groups] == ["gtd"]
        assert partial.ok

    def test_content_failures_name_the_file(self):
        repo = _setup(faqs={"kit": [raw_faq("kit-faq-1", order=-1)]})

        report = ValidateSchemasHandler(repo, UNIVERSE).handle(CatalogCollection.CONTENT)

        assert [g.subject for g in report.groups] == ["kit-faq.json kit-faq-1"]

    def test_missing_promotion_is_a_warning(self):
        report = ValidateSchemasHandler(_setup(), UNIVERSE).handle(CatalogCollection.PROMOTION)

        assert report.ok
        assert report.warnings == ["No promotion config found"]

    def test_invalid_promotion(self):
        repo = _setup(promotion={"bannerBehavior": "SOMETIMES"})

        report = ValidateSchemasHandler(repo, UNIVERSE).handle(CatalogCollection.PROMOTION)

        assert [g.subject for g in report.groups] == ["promotion"]

    def test_wrong_top_level_shape_raises(self):
        repo = _setup(categories={"productivity": raw_category("productivity", 1)})

        with pytest.raises(SchemaShapeError):
            ValidateSchemasHandler(repo, UNIVERSE).handle(CatalogCollection.CATEGORIES)


class TestValidateRelationships:

    def test_consistent_catalog(self):
        report = ValidateRelationshipsHandler(_setup(), UNIVERSE).handle()

        assert report.ok
        assert report.checked == 2
        assert report.warnings == []

    def test_cross_sell_statistics(self):
        repo = _setup(
            products=[
                raw_product("kit", crossSellIds=["course"]),
                raw_product("course", crossSellIds=["kit", "bundle"]),
                raw_product("bundle"),
            ],
            faqs={},
            testimonials={},
        )

        report = ValidateRelationshipsHandler(repo, UNIVERSE).handle()

        assert report.ok
        assert report.info == [
            "Cross-sell references: 3",
            "Most cross-sells: course (2), kit (1)",
        ]

    def test_no_cross_sells(self):
        repo = _setup(products=[raw_product("kit")], faqs={}, testimonials={})

        report = ValidateRelationshipsHandler(repo, UNIVERSE).handle()

        assert report.info == ["No cross-sell references found"]

    def test_broken_references_listed_per_product(self):
        repo = _setup(
            products=[
                raw_product("kit", tags=["pkm", "zettelkasten"], crossSellIds=["ghost"]),
            ],
        )

        report = ValidateRelationshipsHandler(repo, UNIVERSE).handle()

        assert [g.subject for g in report.groups] == ["kit"]
        issues = report.groups[0].issues
        assert 'crossSellIds: Referenced product "ghost" does not exist' in issues
        assert any(issue.startswith("tags: ") for issue in issues)

    def test_orphans_are_warnings(self):
        repo = _setup(products=[raw_product("kit", tags=["pkm"])])

        report = ValidateRelationshipsHandler(repo, UNIVERSE).handle()

        assert report.ok
        assert report.warnings == [
            'Testimonial "t-1" is not referenced by any product',
            'FAQ "kit-faq-1" is not referenced by any product',
        ]

    def test_schema_failures_reported_alongside(self):
        repo = _setup(categories=[raw_category("productivity", 0)])

        report = ValidateRelationshipsHandler(repo, UNIVERSE).handle()
        subjects = [g.subject for g in report.groups]

        # The invalid category is reported, and products pointing at it break.
        assert "productivity" in subjects
        assert "kit" in subjects

    def test_schema_failures_can_be_left_out(self):
        repo = _setup(categories=[raw_category("productivity", 0)])

        report = ValidateRelationshipsHandler(repo, UNIVERSE).handle(
            include_schema_errors=False
        )

        assert [g.subject for g in report.groups] == ["kit", "course"]
