from freshshelf.services import (
    catalog_service,
    category_aggregator,
    dashboard_service,
    expiry_classifier,
    inventory_prioritizer,
    product_search,
)


__all__ = [
    "catalog_service",
    "category_aggregator",
    "dashboard_service",
    "expiry_classifier",
    "inventory_prioritizer",
    "product_search",
]
