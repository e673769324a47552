"""Inventory prioritization: order categories and items by expiry urgency.

Categories are ordered by aggregate status (critical, then warning, then ok)
and, within the same status, by their earliest outstanding expiry so the
oldest stock surfaces first. Items inside a category are ordered by expiry
date. All sorts are stable, so ties keep the order of the input snapshot.

A category starts expanded when any of its items is expired, due today or
critical. Callers freeze that decision per snapshot load (see
``dashboard_service``).
"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date, tzinfo

from freshshelf.core.clock import to_calendar_date
from freshshelf.core.config import Constants
from freshshelf.core.errors import IssueKind
from freshshelf.core.logging import log_with_context, span
from freshshelf.domain.catalog import Category, Product
from freshshelf.domain.inventory import AggregateStatus, InventoryItem
from freshshelf.models.service_models import (
    CategoryView,
    ClassifiedItem,
    DataQualityIssue,
    DataQualityReport,
    PrioritizedInventory,
)
from freshshelf.services.category_aggregator import aggregate


logger = logging.getLogger(__name__)

AGGREGATE_PRIORITY: dict[AggregateStatus, int] = {
    AggregateStatus.CRITICAL: Constants.AGGREGATE_PRIORITY_CRITICAL,
    AggregateStatus.WARNING: Constants.AGGREGATE_PRIORITY_WARNING,
    AggregateStatus.OK: Constants.AGGREGATE_PRIORITY_OK,
}


def category_sort_key(view: CategoryView) -> tuple[int, bool, date]:
    """Sort key: status priority, then earliest expiry (missing expiry last)."""
    return (
        AGGREGATE_PRIORITY[view.aggregate_status],
        view.earliest_expiry is None,
        view.earliest_expiry or date.min,
    )


def order_items(items: Iterable[ClassifiedItem]) -> tuple[ClassifiedItem, ...]:
    """Order items by expiry date ascending, keeping input order on ties."""
    return tuple(sorted(items, key=lambda item: item.expiry_date))


def order_categories(views: Iterable[CategoryView]) -> list[CategoryView]:
    """Order categories by urgency with the FIFO tie-break."""
    return sorted(views, key=category_sort_key)


def _resolve_references(
    *,
    items: Iterable[InventoryItem],
    products: Sequence[Product],
    category_ids: set[str],
) -> tuple[dict[str, list[InventoryItem]], list[DataQualityIssue]]:
    """Group items by the category their product belongs to.

    Products and items whose reference chain breaks are reported, never
    assigned to a fallback bucket.
    """
    product_index = {product.id: product for product in products}
    issues: list[DataQualityIssue] = []

    for product in products:
        if product.category_id not in category_ids:
            issues.append(
                DataQualityIssue(
                    kind=IssueKind.UNRESOLVED_CATEGORY,
                    record_id=product.id,
                    message=f"Product {product.id} references unknown category {product.category_id}",
                )
            )

    grouped: dict[str, list[InventoryItem]] = defaultdict(list)
    for item in items:
        product = product_index.get(item.product_id)
        if product is None:
            issues.append(
                DataQualityIssue(
                    kind=IssueKind.UNRESOLVED_PRODUCT,
                    record_id=item.id,
                    message=f"Item {item.id} references unknown product {item.product_id}",
                )
            )
            continue
        if product.category_id not in category_ids:
            issues.append(
                DataQualityIssue(
                    kind=IssueKind.UNRESOLVED_CATEGORY,
                    record_id=item.id,
                    message=f"Item {item.id} belongs to product {product.id} with unknown category",
                )
            )
            continue
        grouped[product.category_id].append(item)

    return grouped, issues


def prioritize(
    *,
    categories: Sequence[Category],
    items: Sequence[InventoryItem],
    products: Sequence[Product],
    today: date | str,
    tz: tzinfo | None = None,
) -> PrioritizedInventory:
    """Build the ordered, display-ready view of one shop's inventory.

    Inputs are never mutated. Unresolvable records and unreadable dates are
    excluded and listed in the returned report; they never abort the pass.

    Args:
        categories: Category catalog
        items: Inventory snapshot for one shop
        products: Product catalog
        today: Reference day, shared by every classification in this pass
        tz: Optional timezone aware datetimes are converted to

    Returns:
        PrioritizedInventory with categories in display order
    """
    with span("inventory_prioritizer.prioritize"):
        reference_day = to_calendar_date(today, tz)
        product_index = {product.id: product for product in products}

        unique_categories: list[Category] = []
        seen: set[str] = set()
        for category in categories:
            if category.id not in seen:
                seen.add(category.id)
                unique_categories.append(category)

        grouped, issues = _resolve_references(items=items, products=products, category_ids=seen)

        views: list[CategoryView] = []
        for category in unique_categories:
            view, category_issues = aggregate(
                category=category,
                items=grouped.get(category.id, ()),
                products=product_index,
                today=reference_day,
                tz=tz,
            )
            issues.extend(category_issues)
            if view is None:
                continue
            views.append(view.model_copy(update={"items": order_items(view.items)}))

        ordered = order_categories(views)
        report = DataQualityReport(issues=issues)

        if report.has_issues:
            log_with_context(
                logger,
                "warning",
                "Excluded records while prioritizing inventory",
                invalid_dates=report.invalid_date_count,
                orphans=report.orphan_count,
                total=len(report.issues),
            )
        logger.debug("Prioritized %d categories for %s", len(ordered), reference_day.isoformat())

        return PrioritizedInventory(today=reference_day, categories=ordered, report=report)
