"""Tests for tag/category counts and featured helpers."""

from storefront.domain.service.aggregation import (
    build_categories_with_counts,
    build_tags_with_counts,
    get_featured,
    get_featured_sorted,
    get_non_featured,
    get_non_featured_sorted,
    sort_by_count,
    sort_by_priority,
    tags_missing_metadata,
)
from tests.fakes import make_category, make_item, make_product, make_tag


class TestTagCounts:

    def test_counts_normalized_tags_once_per_product(self):
        products = [
            make_product("a", tags=["pkm", "PKM", "Second Brain"]),
            make_product("b", tags=["pkm"]),
        ]
        tags = [make_tag("pkm", 1), make_tag("second-brain", 2), make_tag("gtd", 3)]

        counts = {e.tag.id: e.count for e in build_tags_with_counts(products, tags)}

        assert counts == {"pkm": 2, "second-brain": 1, "gtd": 0}

    def test_accepts_tag_map(self):
        tags = {"pkm": make_tag("pkm", 1)}

        result = build_tags_with_counts([make_product("a")], tags)

        assert [(e.name, e.count) for e in result] == [("Pkm", 1)]


class TestCategoryCounts:

    def test_counts_main_and_secondary(self):
        products = [
            make_product("a", secondaryCategories=[{"id": "tools", "distant": True}]),
            make_product("b", mainCategory="tools"),
        ]
        categories = [make_category("productivity", 1), make_category("tools", 2)]

        counts = {
            e.category.id: e.count for e in build_categories_with_counts(products, categories)
        }

        assert counts == {"productivity": 1, "tools": 2}


class TestSortByCount:

    def test_most_used_first_ties_by_name(self):
        products = [make_product("a", tags=["gtd", "pkm"]), make_product("b", tags=["pkm"])]
        tags = [make_tag("pkm", 1), make_tag("gtd", 2), make_tag("ai", 3)]

        result = sort_by_count(build_tags_with_counts(products, tags))

        assert [e.tag.id for e in result] == ["pkm", "gtd", "ai"]

    def test_empty(self):
        assert sort_by_count([]) == []


class TestFeaturedHelpers:

    def _items(self):
        return [
            make_item("Zebra", 2, featured=True),
            make_item("Plain", 22),
            make_item("Apple", 2, featured=True),
            make_item("First", 1, featured=True),
            make_item("Other", 21),
        ]

    def test_partition(self):
        items = self._items()

        assert [i.name for i in get_featured(items)] == ["Zebra", "Apple", "First"]
        assert [i.name for i in get_non_featured(items)] == ["Plain", "Other"]

    def test_sort_by_priority_then_name(self):
        assert [i.name for i in sort_by_priority(self._items())] == [
            "First",
            "Apple",
            "Zebra",
            "Other",
            "Plain",
        ]

    def test_sorted_partitions(self):
        items = self._items()

        assert [i.name for i in get_featured_sorted(items)] == ["First", "Apple", "Zebra"]
        assert [i.name for i in get_non_featured_sorted(items)] == ["Other", "Plain"]

    def test_empty(self):
        assert get_featured_sorted([]) == []
        assert get_non_featured_sorted([]) == []


class TestTagsMissingMetadata:

    def test_normalized_sorted_and_deduplicated(self):
        products = [
            make_product("a", tags=["Second Brain", "pkm"]),
            make_product("b", tags=["second-brain", "AI"]),
        ]

        assert tags_missing_metadata(products, ["pkm"]) == ["ai", "second-brain"]

    def test_known_ids_are_normalized_too(self):
        products = [make_product("a", tags=["gtd"])]

        assert tags_missing_metadata(products, ["GTD"]) == []
