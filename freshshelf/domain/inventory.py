"""Inventory domain models and enums."""

from datetime import date, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, SkipValidation


class ExpiryStatus(StrEnum):
    """Urgency of a single item, derived from days until expiry."""

    EXPIRED = "expired"
    TODAY = "today"
    CRITICAL = "critical"
    WARNING = "warning"
    OK = "ok"


class AggregateStatus(StrEnum):
    """Worst-case urgency across a category's items."""

    CRITICAL = "critical"
    WARNING = "warning"
    OK = "ok"


class InventoryItem(BaseModel):
    """Inventory item data transfer object.

    ``expiry_date`` keeps the value exactly as the store delivered it; it is
    parsed during classification so one malformed date, or a value of the
    wrong type, is reported for that item instead of rejecting the snapshot
    or being coerced into some other date.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: str = Field(..., description="Unique item ID from the store")
    shop_id: str = Field(..., description="ID of the shop that owns the item")
    product_id: str = Field(..., description="ID of the stocked product")
    expiry_date: SkipValidation[datetime | date | str] = Field(
        ..., description="Expiry date (ISO 8601, no time component)"
    )
