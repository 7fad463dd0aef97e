"""Tests for cross-collection reference checking."""

from storefront.domain.model.content import FAQ, Testimonial as ProductTestimonial
from storefront.domain.service.reference_checker import (
    ReferenceField,
    check_references,
    cross_sell_stats,
    find_duplicate_ids,
)
from tests.fakes import make_category, make_product, make_tag, raw_faq, raw_testimonial


def _catalog():
    categories = [make_category("productivity", 1, featured=True), make_category("tools", 8)]
    tags = [make_tag("pkm", 1, featured=True), make_tag("second-brain", 21)]
    testimonials = [ProductTestimonial.model_validate(raw_testimonial("t-1"))]
    faqs = [FAQ.model_validate(raw_faq("faq-1"))]
    return categories, tags, testimonials, faqs


def _check(products):
    categories, tags, testimonials, faqs = _catalog()
    return check_references(products, categories, tags, testimonials, faqs)


class TestCheckReferences:

    def test_consistent_catalog_has_no_errors(self):
        products = [
            make_product(
                "kit",
                secondaryCategories=[{"id": "tools"}],
                tags=["pkm", "second-brain"],
                testimonialIds=["t-1"],
                faqIds=["faq-1"],
                crossSellIds=["course"],
            ),
            make_product("course", crossSellIds=["kit"]),
        ]

        report = _check(products)

        assert report.success
        assert report.errors == []

    def test_single_dangling_cross_sell(self):
        products = [
            make_product("kit", crossSellIds=["course", "ghost"]),
            make_product("course"),
        ]

        report = _check(products)

        assert len(report.errors) == 1
        error = report.errors[0]
        assert error.product_id == "kit"
        assert error.field == ReferenceField.CROSS_SELL_IDS
        assert error.invalid_value == "ghost"
        assert error.message == 'Referenced product "ghost" does not exist'

    def test_category_missing_from_collection(self):
        # Known to the universe but absent from categories.json.
        products = [
            make_product("kit", mainCategory="learning", secondaryCategories=[{"id": "courses"}])
        ]

        report = _check(products)

        assert [(e.field, e.invalid_value) for e in report.errors] == [
            (ReferenceField.MAIN_CATEGORY, "learning"),
            (ReferenceField.SECONDARY_CATEGORIES, "courses"),
        ]

    def test_tags_matched_after_normalization(self):
        products = [make_product("kit", tags=["PKM", "Second Brain"])]
        assert _check(products).success

    def test_unknown_tag_names_normalized_form(self):
        products = [make_product("kit", tags=["Zettel Kasten"])]

        report = _check(products)

        assert len(report.errors) == 1
        assert report.errors[0].field == ReferenceField.TAGS
        assert '(normalized: "zettel-kasten")' in report.errors[0].message

    def test_missing_faq_and_testimonial(self):
        products = [make_product("kit", faqIds=["faq-9"], testimonialIds=["t-9"])]

        report = _check(products)

        assert {e.field for e in report.errors} == {
            ReferenceField.FAQ_IDS,
            ReferenceField.TESTIMONIAL_IDS,
        }

    def test_embedded_content_satisfies_references(self):
        products = [
            make_product(
                "kit",
                faqIds=["inline-faq"],
                faqs=[raw_faq("inline-faq")],
                testimonialIds=["inline-t"],
                testimonials=[raw_testimonial("inline-t")],
            )
        ]

        assert _check(products).success

    def test_errors_grouped_by_product(self):
        products = [
            make_product("a", crossSellIds=["x", "y"]),
            make_product("b", crossSellIds=["z"]),
        ]

        grouped = _check(products).errors_by_product()

        assert list(grouped) == ["a", "b"]
        assert [e.invalid_value for e in grouped["a"]] == ["x", "y"]

    def test_orphans_reported_but_do_not_fail(self):
        report = _check([make_product("kit")])

        assert report.success
        assert report.orphan_testimonial_ids == ["t-1"]
        assert report.orphan_faq_ids == ["faq-1"]

    def test_empty_catalog(self):
        report = check_references([], [], [], [], [])

        assert report.success
        assert report.orphan_faq_ids == []


class TestFindDuplicateIds:

    def test_reports_each_duplicate_once(self):
        products = [make_product("a"), make_product("b"), make_product("a"), make_product("a")]
        assert find_duplicate_ids(products) == ["a"]

    def test_unique(self):
        assert find_duplicate_ids([make_product("a"), make_product("b")]) == []


class TestCrossSellStats:

    def test_total_and_top_products(self):
        products = [
            make_product(f"p{n}", crossSellIds=[f"x{i}" for i in range(n)]) for n in range(8)
        ]

        stats = cross_sell_stats(products)

        assert stats.total == sum(range(8))
        assert stats.top == [("p7", 7), ("p6", 6), ("p5", 5), ("p4", 4), ("p3", 3)]

    def test_ties_keep_input_order(self):
        products = [
            make_product("b", crossSellIds=["a"]),
            make_product("a", crossSellIds=["b"]),
        ]

        assert cross_sell_stats(products).top == [("b", 1), ("a", 1)]

    def test_no_cross_sells(self):
        stats = cross_sell_stats([make_product("kit")])

        assert stats.total == 0
        assert stats.top == []
