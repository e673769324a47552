"""Catalog overview: products grouped under their categories."""

import logging
from collections.abc import Sequence

from freshshelf.core.logging import span
from freshshelf.domain.catalog import Category, Product
from freshshelf.models.service_models import CatalogGroup, CatalogOverview


logger = logging.getLogger(__name__)


def products_for_category(products: Sequence[Product], category_id: str) -> list[Product]:
    """Products filed under ``category_id``, in catalog order."""
    return [product for product in products if product.category_id == category_id]


def group_products_by_category(categories: Sequence[Category], products: Sequence[Product]) -> CatalogOverview:
    """Group the catalog by category, categories with the most products first.

    Ties keep the catalog's own order (usually alphabetical from the store).
    Products pointing at an unknown category are listed separately.

    Args:
        categories: Category catalog
        products: Product catalog

    Returns:
        CatalogOverview with groups ordered by product count descending
    """
    with span("catalog_service.group_products_by_category"):
        groups = [
            CatalogGroup(category=category, products=products_for_category(products, category.id))
            for category in categories
        ]
        groups.sort(key=lambda group: group.product_count, reverse=True)

        known = {category.id for category in categories}
        orphaned = [product for product in products if product.category_id not in known]
        if orphaned:
            logger.warning("%d products reference unknown categories", len(orphaned))

        return CatalogOverview(groups=groups, orphaned_products=orphaned)
