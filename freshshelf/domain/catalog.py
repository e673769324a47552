"""Catalog domain models: categories and products."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _validate_display_name(v: str) -> str:
    v = v.strip()

    if not v:
        raise ValueError("Name cannot be empty")

    return v


class Category(BaseModel):
    """Category data transfer object."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: str = Field(..., description="Unique category ID from the store")
    name: str = Field(..., description="Category name (e.g., 'Dairy')")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Trim the name and refuse blank ones."""
        return _validate_display_name(v)


class Product(BaseModel):
    """Product data transfer object."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: str = Field(..., description="Unique product ID from the store")
    name: str = Field(..., description="Product name (e.g., 'Whole Milk 1L')")
    category_id: str = Field(..., description="ID of the category this product belongs to")
    image_url: str | None = Field(default=None, description="Public URL of the product image")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Trim the name and refuse blank ones."""
        return _validate_display_name(v)
