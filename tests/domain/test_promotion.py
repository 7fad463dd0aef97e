"""Tests for the promotion banner config."""

from datetime import datetime, timezone

import pytest

from storefront.domain.exceptions import SchemaShapeError
from storefront.domain.model.promotion import BannerBehavior
from storefront.domain.service.schema_validator import validate_promotion


def _raw(**fields):
    raw = {
        "bannerBehavior": "PROMOTIONS",
        "promotionStart": "2026-11-01T00:00:00Z",
        "promotionEnd": "2026-12-01T00:00:00Z",
        "promoText": "Black Friday: 40% off everything",
        "promoLink": "https://example.com/sale",
        "discountCode": "BF40",
    }
    raw.update(fields)
    return raw


class TestPromotionSchema:

    def test_valid(self):
        result = validate_promotion(_raw())

        assert result.success
        assert result.entity.banner_behavior == BannerBehavior.PROMOTIONS
        assert result.entity.discount_code == "BF40"

    def test_promotions_requires_window(self):
        raw = _raw()
        del raw["promotionEnd"]

        result = validate_promotion(raw)

        assert not result.success
        assert result.errors[0].path == "[root]"
        assert "promotionEnd are required" in result.errors[0].message

    def test_end_must_follow_start(self):
        result = validate_promotion(_raw(promotionEnd="2026-10-01T00:00:00Z"))
        assert "must be after" in result.errors[0].message

    def test_always_needs_no_window(self):
        result = validate_promotion(
            _raw(bannerBehavior="ALWAYS", promotionStart=None, promotionEnd=None)
        )
        assert result.success

    def test_non_object_rejected(self):
        with pytest.raises(SchemaShapeError, match="JSON object"):
            validate_promotion(["not", "an", "object"])


class TestIsActive:

    def test_inside_window(self):
        promo = validate_promotion(_raw()).entity
        assert promo.is_active(datetime(2026, 11, 15, tzinfo=timezone.utc))

    def test_outside_window(self):
        promo = validate_promotion(_raw()).entity

        assert not promo.is_active(datetime(2026, 10, 31, tzinfo=timezone.utc))
        assert not promo.is_active(datetime(2026, 12, 1, tzinfo=timezone.utc))

    def test_naive_times_treated_as_utc(self):
        promo = validate_promotion(
            _raw(promotionStart="2026-11-01T00:00:00", promotionEnd="2026-12-01T00:00:00")
        ).entity
        assert promo.is_active(datetime(2026, 11, 2))

    def test_always_and_never(self):
        always = validate_promotion(_raw(bannerBehavior="ALWAYS")).entity
        never = validate_promotion(_raw(bannerBehavior="NEVER")).entity

        assert always.is_active()
        assert not never.is_active()
