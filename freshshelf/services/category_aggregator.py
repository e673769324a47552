"""Category aggregation: reduce one category's items to a single urgency."""

import logging
from collections.abc import Iterable, Mapping
from datetime import date, tzinfo

from freshshelf.core.clock import to_calendar_date
from freshshelf.core.errors import InvalidDateError, IssueKind
from freshshelf.core.logging import log_with_context
from freshshelf.domain.catalog import Category, Product
from freshshelf.domain.inventory import AggregateStatus, InventoryItem
from freshshelf.models.service_models import CategoryView, ClassifiedItem, DataQualityIssue
from freshshelf.services.expiry_classifier import (
    days_until_expiry,
    expiry_label,
    is_urgent,
    status_for_days,
    to_aggregate,
)


logger = logging.getLogger(__name__)


def classify_item(item: InventoryItem, product: Product, today: date, *, tz: tzinfo | None = None) -> ClassifiedItem:
    """Classify one item against ``today``.

    Raises:
        InvalidDateError: If the item's expiry date cannot be read
    """
    expiry = to_calendar_date(item.expiry_date, tz)
    days = days_until_expiry(expiry, today, tz=tz)
    status = status_for_days(days)
    return ClassifiedItem(
        id=item.id,
        product_id=product.id,
        product_name=product.name,
        image_url=product.image_url,
        expiry_date=expiry,
        days_until_expiry=days,
        status=status,
        label=expiry_label(status, expiry),
    )


def aggregate_status_of(items: Iterable[ClassifiedItem]) -> AggregateStatus:
    """Most urgent status among ``items``; expired and today count as critical."""
    result = AggregateStatus.OK
    for item in items:
        status = to_aggregate(item.status)
        if status == AggregateStatus.CRITICAL:
            return status
        if status == AggregateStatus.WARNING:
            result = status
    return result


def aggregate(
    *,
    category: Category,
    items: Iterable[InventoryItem],
    products: Mapping[str, Product],
    today: date,
    tz: tzinfo | None = None,
) -> tuple[CategoryView | None, list[DataQualityIssue]]:
    """Build the CategoryView for one category.

    Only items whose product resolves into ``category`` take part. Every item
    is judged against the same ``today``. Items with an unreadable expiry date
    are left out and returned as issues.

    Args:
        category: Category to aggregate
        items: Inventory snapshot (items of other categories are ignored)
        products: Product catalog keyed by product ID
        today: Reference day shared by the whole pass
        tz: Optional timezone aware datetimes are converted to

    Returns:
        Tuple of (CategoryView or None when no item resolved, list of issues)
    """
    classified: list[ClassifiedItem] = []
    issues: list[DataQualityIssue] = []

    for item in items:
        product = products.get(item.product_id)
        if product is None or product.category_id != category.id:
            continue
        try:
            classified.append(classify_item(item, product, today, tz=tz))
        except InvalidDateError:
            issues.append(
                DataQualityIssue(
                    kind=IssueKind.INVALID_DATE,
                    record_id=item.id,
                    message=f"Item {item.id} has an unreadable expiry date: {item.expiry_date!r}",
                )
            )
            log_with_context(
                logger,
                "warning",
                "Skipping item with invalid expiry date",
                record_id=item.id,
                category_id=category.id,
                expiry_date=str(item.expiry_date),
            )

    if not classified:
        return None, issues

    view = CategoryView(
        category_id=category.id,
        category_name=category.name,
        aggregate_status=aggregate_status_of(classified),
        item_count=len(classified),
        earliest_expiry=min(item.expiry_date for item in classified),
        expanded=any(is_urgent(item.status) for item in classified),
        items=tuple(classified),
    )
    return view, issues
