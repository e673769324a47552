"""Pydantic models for updating records in the store."""

from datetime import date

from pydantic import BaseModel, Field


class InventoryItemUpdate(BaseModel):
    """Pydantic model for changing an item's expiry date."""

    expiry_date: date = Field(..., description="New expiry date")
