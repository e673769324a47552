"""Pytest configuration and fixtures for unit tests."""

from datetime import date, timedelta

import pytest

from freshshelf.core.clock import FixedClock
from freshshelf.domain.catalog import Category, Product
from freshshelf.domain.inventory import InventoryItem
from freshshelf.services.dashboard_service import InventoryDashboard
from tests.unit.mocks import InMemoryStore


TODAY = date(2024, 1, 10)
SHOP_ID = "shop-1"


@pytest.fixture
def today() -> date:
    """Reference day shared by the unit tests."""
    return TODAY


@pytest.fixture
def categories() -> list[Category]:
    """Small category catalog."""
    return [
        Category(id="dairy", name="Dairy"),
        Category(id="bakery", name="Bakery"),
        Category(id="produce", name="Produce"),
        Category(id="frozen", name="Frozen"),
    ]


@pytest.fixture
def products() -> list[Product]:
    """Products spread across the catalog (frozen has none)."""
    return [
        Product(id="milk", name="Whole Milk", category_id="dairy"),
        Product(id="yogurt", name="Greek Yogurt", category_id="dairy", image_url="https://img.test/yogurt.png"),
        Product(id="bread", name="Sourdough Bread", category_id="bakery"),
        Product(id="apple", name="Apples", category_id="produce"),
        Product(id="oat-milk", name="Oat Drink", category_id="produce"),
    ]


@pytest.fixture
def make_item():
    """Factory for inventory items expiring a number of days after TODAY."""
    counter = iter(range(1, 10_000))

    def _make(product_id: str, days: int | None = None, *, expiry_date=None, item_id: str | None = None):
        expiry = expiry_date if expiry_date is not None else TODAY + timedelta(days=days or 0)
        return InventoryItem(
            id=item_id or f"item-{next(counter)}",
            shop_id=SHOP_ID,
            product_id=product_id,
            expiry_date=expiry,
        )

    return _make


def item_record(item_id: str, product_id: str, days: int, *, shop_id: str = SHOP_ID) -> dict:
    """Raw store record for an item expiring ``days`` after TODAY."""
    return {
        "id": item_id,
        "shop_id": shop_id,
        "product_id": product_id,
        "expiry_date": (TODAY + timedelta(days=days)).isoformat(),
    }


@pytest.fixture
def store(categories, products) -> InMemoryStore:
    """In-memory store seeded with the catalog and a few items."""
    return InMemoryStore(
        categories=[category.model_dump() for category in categories],
        products=[product.model_dump() for product in products],
        items=[
            item_record("i-milk", "milk", 3),
            item_record("i-yogurt", "yogurt", 20),
            item_record("i-bread", "bread", 8),
            item_record("i-apple", "apple", 30),
            item_record("i-other-shop", "milk", -2, shop_id="shop-2"),
        ],
    )


@pytest.fixture
def dashboard(store) -> InventoryDashboard:
    """Dashboard wired to the in-memory store and a fixed clock."""
    return InventoryDashboard(
        catalog=store,
        inventory=store,
        mutations=store,
        clock=FixedClock(TODAY),
    )
