"""Pydantic models for creating records in the store."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class InventoryItemCreate(BaseModel):
    """Pydantic model for creating an inventory item record."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    shop_id: str = Field(..., min_length=1, description="ID of the owning shop")
    product_id: str = Field(..., min_length=1, description="ID of the stocked product")
    expiry_date: date = Field(..., description="Expiry date")
