"""Application service: Show Promotion Status use case (query)."""

from __future__ import annotations

from datetime import datetime

from storefront.application.dto import PromotionStatusDTO
from storefront.domain.exceptions import ValidationError
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.domain.service.schema_validator import validate_promotion


class ShowPromotionHandler:

    def __init__(self, catalog_repo: CatalogRepository) -> None:
        self._catalog_repo = catalog_repo

    def handle(self, now: datetime | None = None) -> PromotionStatusDTO | None:
        """Banner status at *now*; None when there is no promotion config."""
        raw = self._catalog_repo.load_promotion()
        if raw is None:
            return None
        outcome = validate_promotion(raw)
        if not outcome.success:
            raise ValidationError(
                "Promotion config failed schema validation; "
                "run 'storefront validate promotion' for details"
            )

        config = outcome.entity
        return PromotionStatusDTO(
            behavior=config.banner_behavior.value,
            active=config.is_active(now),
            promo_text=config.promo_text,
            starts=config.promotion_start.isoformat() if config.promotion_start else None,
            ends=config.promotion_end.isoformat() if config.promotion_end else None,
            discount_code=config.discount_code,
        )
