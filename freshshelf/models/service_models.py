"""Pydantic models for service layer return types.

These models are the display-ready structures derived from a snapshot. They
are never persisted.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from freshshelf.core.errors import UNRESOLVED_KINDS, IssueKind
from freshshelf.domain.catalog import Category, Product
from freshshelf.domain.inventory import AggregateStatus, ExpiryStatus


class ClassifiedItem(BaseModel):
    """Inventory item with its urgency resolved against a reference day."""

    model_config = ConfigDict(frozen=True)

    id: str
    product_id: str
    product_name: str
    image_url: str | None = None
    expiry_date: date
    days_until_expiry: int
    status: ExpiryStatus
    label: str


class CategoryView(BaseModel):
    """Category with aggregate urgency and its items in display order."""

    model_config = ConfigDict(frozen=True)

    category_id: str
    category_name: str
    aggregate_status: AggregateStatus
    item_count: int
    earliest_expiry: date | None
    expanded: bool
    items: tuple[ClassifiedItem, ...] = ()


class DataQualityIssue(BaseModel):
    """A record excluded from prioritization, with the reason."""

    model_config = ConfigDict(frozen=True)

    kind: IssueKind
    record_id: str | None
    message: str


class DataQualityReport(BaseModel):
    """Problems found while prioritizing a snapshot."""

    issues: list[DataQualityIssue] = Field(default_factory=list)

    @property
    def invalid_date_count(self) -> int:
        return sum(1 for issue in self.issues if issue.kind == IssueKind.INVALID_DATE)

    @property
    def orphan_count(self) -> int:
        """Number of records whose foreign key does not resolve."""
        return sum(1 for issue in self.issues if issue.kind in UNRESOLVED_KINDS)

    @property
    def has_issues(self) -> bool:
        return bool(self.issues)


class PrioritizedInventory(BaseModel):
    """Categories in display order for one snapshot and reference day."""

    today: date
    categories: list[CategoryView]
    report: DataQualityReport = Field(default_factory=DataQualityReport)

    def get_category(self, category_id: str) -> CategoryView | None:
        return next((view for view in self.categories if view.category_id == category_id), None)


class CatalogGroup(BaseModel):
    """A category and the products filed under it."""

    category: Category
    products: list[Product]

    @property
    def product_count(self) -> int:
        return len(self.products)


class CatalogOverview(BaseModel):
    """Catalog grouped by category, largest groups first."""

    groups: list[CatalogGroup]
    orphaned_products: list[Product] = Field(default_factory=list)
