"""Pure Python in-memory store for unit testing."""

import copy
from typing import Any


class InMemoryStore:
    """In-memory stand-in for the catalog, inventory and mutation collaborators.

    Holds plain dict records the way the real store returns them and records
    every mutation call so tests can assert on it.
    """

    def __init__(
        self,
        *,
        categories: list[dict[str, Any]] | None = None,
        products: list[dict[str, Any]] | None = None,
        items: list[dict[str, Any]] | None = None,
    ):
        """Initialize the store with optional seed records."""
        self.categories: list[dict[str, Any]] = copy.deepcopy(categories or [])
        self.products: list[dict[str, Any]] = copy.deepcopy(products or [])
        self.items: list[dict[str, Any]] = copy.deepcopy(items or [])
        self.calls: list[tuple[str, Any]] = []
        self.fail_with: Exception | None = None
        self._id_counter = 1000

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    # CatalogSupplier
    async def fetch_categories(self) -> list[dict[str, Any]]:
        self._maybe_fail()
        return copy.deepcopy(self.categories)

    async def fetch_products(self) -> list[dict[str, Any]]:
        self._maybe_fail()
        return copy.deepcopy(self.products)

    # InventorySupplier
    async def fetch_inventory(self, shop_id: str) -> list[dict[str, Any]]:
        self._maybe_fail()
        self.calls.append(("fetch_inventory", shop_id))
        return [copy.deepcopy(item) for item in self.items if str(item.get("shop_id")) == shop_id]

    # MutationSink
    async def create_item(self, data: dict[str, Any]) -> dict[str, Any]:
        self._maybe_fail()
        self.calls.append(("create_item", data))
        record = {"id": str(self._id_counter), **data}
        self._id_counter += 1
        self.items.append(record)
        return copy.deepcopy(record)

    async def update_item(self, item_id: str, data: dict[str, Any]) -> dict[str, Any]:
        self._maybe_fail()
        self.calls.append(("update_item", (item_id, data)))
        for item in self.items:
            if item["id"] == item_id:
                item.update(data)
                return copy.deepcopy(item)
        raise KeyError(f"Record not found: {item_id}")

    async def delete_item(self, item_id: str) -> None:
        self._maybe_fail()
        self.calls.append(("delete_item", item_id))
        self.items = [item for item in self.items if item["id"] != item_id]
