"""Integration tests for product ranking and tag/category usage queries."""

import random

import pytest

from storefront.application.rank_products import ProductOrdering, RankProductsHandler
from storefront.application.show_usage import (
    ShowCategoryUsageHandler,
    ShowTagUsageHandler,
)
from storefront.domain.exceptions import ValidationError
from tests.fakes import FakeCatalogRepository, raw_category, raw_product, raw_tag


def _setup():
    products = [
        raw_product("plain", mainCategory="tools", tags=["gtd"]),
        raw_product("star", featured=True, bestValue=True, bestseller=True, priority=5),
        raw_product("deal", bestValue=True, tags=["pkm", "gtd"], priority=9),
    ]
    tags = {"pkm": raw_tag("pkm", 1, featured=True), "gtd": raw_tag("gtd", 21)}
    categories = [raw_category("productivity", 1, featured=True), raw_category("tools", 8)]
    return FakeCatalogRepository(products=products, tags=tags, categories=categories)


class TestRankProducts:

    def test_intelligent_order(self):
        lines = RankProductsHandler(_setup()).handle(ProductOrdering.INTELLIGENT)

        assert [line.id for line in lines] == ["star", "deal", "plain"]
        assert lines[0].flags == "featured, best value, bestseller"
        assert lines[2].flags == ""

    def test_badge_categories_leave_out_distant_ones(self):
        repo = _setup()
        repo.products[0]["secondaryCategories"] = [
            {"id": "productivity"},
            {"id": "learning", "distant": True},
        ]

        lines = RankProductsHandler(repo).handle(ProductOrdering.INTELLIGENT)

        plain = next(line for line in lines if line.id == "plain")
        assert plain.badge_categories == ["tools", "productivity"]

    def test_best_value_order(self):
        lines = RankProductsHandler(_setup()).handle(ProductOrdering.BEST_VALUE)
        assert [line.id for line in lines] == ["star", "deal", "plain"]

    def test_featured_only(self):
        lines = RankProductsHandler(_setup()).handle(ProductOrdering.FEATURED)
        assert [line.id for line in lines] == ["star"]

    def test_priority_order(self):
        handler = RankProductsHandler(_setup(), rng=random.Random(1))

        lines = handler.handle(ProductOrdering.PRIORITY)

        assert [line.priority for line in lines] == [9, 5, 0]

    def test_invalid_product_blocks_ranking(self):
        repo = _setup()
        repo.products.append(raw_product("broken", priority=-1))

        with pytest.raises(ValidationError, match="1 product"):
            RankProductsHandler(repo).handle(ProductOrdering.INTELLIGENT)


class TestUsage:

    def test_tag_usage(self):
        lines = ShowTagUsageHandler(_setup()).handle()

        assert [(line.id, line.count) for line in lines] == [("gtd", 2), ("pkm", 2)]
        assert lines[1].featured is True

    def test_tag_usage_limit(self):
        lines = ShowTagUsageHandler(_setup()).handle(limit=1)
        assert [line.id for line in lines] == ["gtd"]

    def test_category_usage(self):
        lines = ShowCategoryUsageHandler(_setup()).handle()
        assert [(line.id, line.count) for line in lines] == [
            ("productivity", 2),
            ("tools", 1),
        ]
