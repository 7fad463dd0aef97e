"""Promotion banner configuration (``promotion.json``)."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import HttpUrl, model_validator

from storefront.domain.model.base import NonEmptyStr, SchemaModel


class BannerBehavior(Enum):
    ALWAYS = "ALWAYS"
    NEVER = "NEVER"
    PROMOTIONS = "PROMOTIONS"


class PromotionConfig(SchemaModel):
    banner_behavior: BannerBehavior
    promotion_start: datetime | None = None
    promotion_end: datetime | None = None
    promo_text: NonEmptyStr
    promo_link_text: str | None = None
    promo_link: HttpUrl
    discount_code: str | None = None

    @model_validator(mode="after")
    def _check_window(self) -> PromotionConfig:
        if self.banner_behavior == BannerBehavior.PROMOTIONS and not (
            self.promotion_start and self.promotion_end
        ):
            raise ValueError(
                "promotionStart and promotionEnd are required when "
                "bannerBehavior is PROMOTIONS"
            )
        if self.promotion_start and self.promotion_end:
            if _aware(self.promotion_end) <= _aware(self.promotion_start):
                raise ValueError("promotionEnd must be after promotionStart")
        return self

    def is_active(self, now: datetime | None = None) -> bool:
        """Whether the banner should be shown at *now* (default: current time)."""
        if self.banner_behavior == BannerBehavior.ALWAYS:
            return True
        if self.banner_behavior == BannerBehavior.NEVER:
            return False
        now = _aware(now or datetime.now(timezone.utc))
        return _aware(self.promotion_start) <= now < _aware(self.promotion_end)


def _aware(moment: datetime) -> datetime:
    """Treat naive timestamps as UTC so they compare with aware ones."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment
