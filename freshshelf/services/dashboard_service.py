"""Inventory dashboard: snapshot loading, frozen expand state, and item mutations.

The dashboard owns the one piece of state the pure engine leaves to its
caller: which categories are expanded. The decision is computed on a full
``load`` and then kept across ``refresh`` calls and item mutations, so an
unrelated change never collapses a category the user is looking at. A
category that becomes urgent after a mutation is expanded. Only the next
``load`` recomputes every decision.
"""

import asyncio
import logging
from collections.abc import Sequence
from datetime import date, tzinfo
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from freshshelf.core.clock import Clock
from freshshelf.core.collaborators import CatalogSupplier, InventorySupplier, MutationSink
from freshshelf.core.errors import DashboardNotLoadedError, IssueKind
from freshshelf.core.logging import log_with_shop_context, span
from freshshelf.domain.catalog import Category, Product
from freshshelf.domain.create_models import InventoryItemCreate
from freshshelf.domain.inventory import InventoryItem
from freshshelf.domain.update_models import InventoryItemUpdate
from freshshelf.models.service_models import DataQualityIssue, DataQualityReport, PrioritizedInventory
from freshshelf.services.inventory_prioritizer import prioritize
from freshshelf.services.product_search import filter_products


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_records(
    records: Sequence[dict[str, Any]],
    model: type[ModelT],
) -> tuple[list[ModelT], list[DataQualityIssue]]:
    """Validate raw store records, turning failures into data-quality issues.

    Args:
        records: Raw records from the store
        model: Domain model to validate into

    Returns:
        Tuple of (valid models in input order, issues for rejected records)
    """
    valid: list[ModelT] = []
    issues: list[DataQualityIssue] = []
    for record in records:
        try:
            valid.append(model.model_validate(record))
        except ValidationError as e:
            record_id = record.get("id") if isinstance(record, dict) else None
            issues.append(
                DataQualityIssue(
                    kind=IssueKind.INVALID_RECORD,
                    record_id=str(record_id) if record_id is not None else None,
                    message=f"Invalid {model.__name__} record: {e.error_count()} validation error(s)",
                )
            )
            logger.warning("Rejected %s record %s: %s", model.__name__, record_id, e)
    return valid, issues


class InventoryDashboard:
    """One shop's prioritized inventory, as shown to the shop user."""

    def __init__(
        self,
        *,
        catalog: CatalogSupplier,
        inventory: InventorySupplier,
        mutations: MutationSink,
        clock: Clock,
        tz: tzinfo | None = None,
    ) -> None:
        self._catalog = catalog
        self._inventory = inventory
        self._mutations = mutations
        self._clock = clock
        self._tz = tz or getattr(clock, "zone", None)

        self._shop_id: str | None = None
        self._categories: list[Category] = []
        self._products: list[Product] = []
        self._items: list[InventoryItem] = []
        self._record_issues: list[DataQualityIssue] = []
        self._expanded: dict[str, bool] = {}
        self._computed: dict[str, bool] = {}
        self._view: PrioritizedInventory | None = None

    # --- Snapshot -----------------------------------------------------------
    @property
    def shop_id(self) -> str:
        if self._shop_id is None:
            raise DashboardNotLoadedError("Dashboard has not been loaded")
        return self._shop_id

    def _require_loaded(self) -> None:
        if self._view is None:
            raise DashboardNotLoadedError("Dashboard has not been loaded")

    @property
    def view(self) -> PrioritizedInventory:
        """Current prioritized inventory with the frozen expand state applied."""
        if self._view is None:
            raise DashboardNotLoadedError("Dashboard has not been loaded")
        return self._view

    @property
    def products(self) -> list[Product]:
        return list(self._products)

    async def load(self, shop_id: str) -> PrioritizedInventory:
        """Fetch a fresh snapshot and recompute every expand decision.

        Args:
            shop_id: Shop whose inventory is shown

        Returns:
            The prioritized inventory
        """
        with span("dashboard_service.load"):
            self._shop_id = shop_id
            await self._fetch_snapshot()
            result = self._prioritize()
            self._computed = {view.category_id: view.expanded for view in result.categories}
            self._expanded = dict(self._computed)
            self._view = self._apply_expand_state(result)

            log_with_shop_context(
                logger,
                "info",
                "Inventory loaded",
                shop_id=shop_id,
                categories=len(result.categories),
                items=len(self._items),
                issues=len(result.report.issues),
            )
            return self._view

    async def refresh(self) -> PrioritizedInventory:
        """Re-fetch and re-prioritize, keeping the expand decisions already made.

        Categories that were not shown before take their computed decision, and a
        category that has just become urgent is expanded.

        Returns:
            The prioritized inventory

        Raises:
            DashboardNotLoadedError: If called before ``load``
        """
        with span("dashboard_service.refresh"):
            shop_id = self.shop_id
            await self._fetch_snapshot()
            result = self._prioritize()
            for view in result.categories:
                was_urgent = self._computed.get(view.category_id, False)
                if view.category_id not in self._expanded or (view.expanded and not was_urgent):
                    self._expanded[view.category_id] = view.expanded
                self._computed[view.category_id] = view.expanded
            self._view = self._apply_expand_state(result)

            log_with_shop_context(logger, "debug", "Inventory refreshed", shop_id=shop_id)
            return self._view

    async def _fetch_snapshot(self) -> None:
        category_records, product_records, item_records = await asyncio.gather(
            self._catalog.fetch_categories(),
            self._catalog.fetch_products(),
            self._inventory.fetch_inventory(self.shop_id),
        )

        categories, category_issues = validate_records(category_records, Category)
        products, product_issues = validate_records(product_records, Product)
        items, item_issues = validate_records(item_records, InventoryItem)

        foreign_issues: list[DataQualityIssue] = []
        own_items: list[InventoryItem] = []
        for item in items:
            if item.shop_id != self.shop_id:
                foreign_issues.append(
                    DataQualityIssue(
                        kind=IssueKind.INVALID_RECORD,
                        record_id=item.id,
                        message=f"Item {item.id} belongs to shop {item.shop_id}, not {self.shop_id}",
                    )
                )
                continue
            own_items.append(item)

        self._categories = categories
        self._products = products
        self._items = own_items
        self._record_issues = [*category_issues, *product_issues, *item_issues, *foreign_issues]

    def _prioritize(self) -> PrioritizedInventory:
        result = prioritize(
            categories=self._categories,
            items=self._items,
            products=self._products,
            today=self._clock.today(),
            tz=self._tz,
        )
        if not self._record_issues:
            return result
        report = DataQualityReport(issues=[*self._record_issues, *result.report.issues])
        return result.model_copy(update={"report": report})

    # --- Expand state -------------------------------------------------------
    def _apply_expand_state(self, result: PrioritizedInventory) -> PrioritizedInventory:
        categories = [
            view.model_copy(update={"expanded": self._expanded.get(view.category_id, view.expanded)})
            for view in result.categories
        ]
        return result.model_copy(update={"categories": categories})

    def is_expanded(self, category_id: str) -> bool:
        """Return the frozen expand decision for a category (False if unknown)."""
        self._require_loaded()
        return self._expanded.get(category_id, False)

    def toggle_category(self, category_id: str) -> bool:
        """Flip one category's expand state.

        Returns:
            The new state
        """
        expanded = not self.is_expanded(category_id)
        self._expanded[category_id] = expanded
        self._view = self._apply_expand_state(self.view)
        return expanded

    # --- Product picker -----------------------------------------------------
    def search_products(self, query: str) -> list[Product]:
        """Products matching ``query`` by product or category name."""
        self._require_loaded()
        return filter_products(self._products, query, categories=self._categories)

    # --- Mutations ----------------------------------------------------------
    def _find_item(self, item_id: str) -> InventoryItem:
        self._require_loaded()
        for item in self._items:
            if item.id == item_id:
                return item
        msg = f"Inventory item not found: {item_id}"
        raise KeyError(msg)

    async def add_item(self, *, product_id: str, expiry_date: date | str) -> dict[str, Any]:
        """Add an item for the loaded shop and refresh the view.

        Args:
            product_id: Product being stocked
            expiry_date: Expiry date (date or ISO text)

        Returns:
            The record created by the store

        Raises:
            ValidationError: If the expiry date is not a valid date
            ValueError: If the product is not in the catalog
        """
        with span("dashboard_service.add_item"):
            payload = InventoryItemCreate(shop_id=self.shop_id, product_id=product_id, expiry_date=expiry_date)
            if not any(product.id == payload.product_id for product in self._products):
                msg = f"Unknown product: {product_id}"
                raise ValueError(msg)

            record = await self._mutations.create_item(payload.model_dump(mode="json"))
            log_with_shop_context(
                logger,
                "info",
                "Inventory item added",
                shop_id=self.shop_id,
                product_id=payload.product_id,
                expiry_date=payload.expiry_date.isoformat(),
            )
            await self.refresh()
            return record

    async def update_expiry(self, *, item_id: str, expiry_date: date | str) -> dict[str, Any]:
        """Change an item's expiry date and refresh the view.

        Raises:
            ValidationError: If the expiry date is not a valid date
            KeyError: If the item is not in the loaded snapshot
        """
        with span("dashboard_service.update_expiry"):
            payload = InventoryItemUpdate(expiry_date=expiry_date)
            item = self._find_item(item_id)

            record = await self._mutations.update_item(item.id, payload.model_dump(mode="json"))
            log_with_shop_context(
                logger,
                "info",
                "Inventory item expiry updated",
                shop_id=self.shop_id,
                item_id=item.id,
                expiry_date=payload.expiry_date.isoformat(),
            )
            await self.refresh()
            return record

    async def delete_item(self, *, item_id: str) -> None:
        """Delete an item and refresh the view.

        Raises:
            KeyError: If the item is not in the loaded snapshot
        """
        with span("dashboard_service.delete_item"):
            item = self._find_item(item_id)
            await self._mutations.delete_item(item.id)
            log_with_shop_context(logger, "info", "Inventory item deleted", shop_id=self.shop_id, item_id=item.id)
            await self.refresh()
