"""Domain models and DTOs."""

from freshshelf.domain.catalog import Category, Product
from freshshelf.domain.create_models import InventoryItemCreate
from freshshelf.domain.inventory import AggregateStatus, ExpiryStatus, InventoryItem
from freshshelf.domain.update_models import InventoryItemUpdate


__all__ = [
    "AggregateStatus",
    "Category",
    "ExpiryStatus",
    "InventoryItem",
    "InventoryItemCreate",
    "InventoryItemUpdate",
    "Product",
]
