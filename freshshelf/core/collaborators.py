"""Protocols for the external store the engine reads from and writes to.

Records are plain dicts as returned by the store; the dashboard validates
them into domain models.
"""

from typing import Any, Protocol


class CatalogSupplier(Protocol):
    """Supplies the shared category and product catalog."""

    async def fetch_categories(self) -> list[dict[str, Any]]:
        """Return every category record."""
        ...

    async def fetch_products(self) -> list[dict[str, Any]]:
        """Return every product record."""
        ...


class InventorySupplier(Protocol):
    """Supplies one shop's inventory items."""

    async def fetch_inventory(self, shop_id: str) -> list[dict[str, Any]]:
        """Return every inventory item record for ``shop_id``."""
        ...


class MutationSink(Protocol):
    """Accepts create/update/delete requests for inventory items."""

    async def create_item(self, data: dict[str, Any]) -> dict[str, Any]:
        """Create an item and return the stored record."""
        ...

    async def update_item(self, item_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """Update an item and return the stored record."""
        ...

    async def delete_item(self, item_id: str) -> None:
        """Delete an item."""
        ...
