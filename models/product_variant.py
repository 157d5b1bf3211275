"""
Product variant schemas for validation and serialization.
"""

from pydantic import Field, JsonValue, field_validator
from typing import Optional
from decimal import Decimal

from models.base import BaseSchema, TimestampMixin


DynamicProperties = dict[str, JsonValue]


class ProductVariantCreate(BaseSchema):
    """
    Create a new product variant under a base product.

    Required: base_product_id, name, stock_quantity, unit_of_measure_id, unit_value
    Optional: usage_notes, photos, dynamic_properties
    """

    base_product_id: str = Field(..., description="Owning base product UUID")
    name: str = Field(..., description="Variant name")
    stock_quantity: Decimal = Field(..., description="Units in stock")
    unit_of_measure_id: str = Field(..., description="Unit of measure UUID")
    unit_value: Decimal = Field(..., description="Amount per unit")
    usage_notes: Optional[str] = Field(None, description="Usage notes")
    photos: list[str] = Field(default_factory=list, description="Photo URLs")
    dynamic_properties: DynamicProperties = Field(
        default_factory=dict,
        description="Arbitrary JSON properties"
    )


class ProductVariantUpdate(BaseSchema):
    """
    Overwrite a variant's details, stock, photos and properties.

    Stock cannot go negative once a variant exists.
    """

    name: str
    stock_quantity: Decimal
    unit_of_measure_id: str
    unit_value: Decimal
    usage_notes: Optional[str] = None
    photos: list[str] = Field(default_factory=list)
    dynamic_properties: DynamicProperties = Field(default_factory=dict)


class ProductVariantResponse(BaseSchema, TimestampMixin):
    """Product variant with all fields."""

    id: str = Field(..., description="Variant UUID")
    base_product_id: str
    name: str
    stock_quantity: Decimal
    unit_of_measure_id: str
    unit_value: Decimal
    usage_notes: Optional[str] = None
    photos: list[str] = Field(default_factory=list)
    dynamic_properties: DynamicProperties = Field(default_factory=dict)

    @field_validator("photos", mode="before")
    @classmethod
    def photos_default(cls, v):
        """Null photo column reads as no photos."""
        return v if v is not None else []

    @field_validator("dynamic_properties", mode="before")
    @classmethod
    def properties_default(cls, v):
        """Null property column reads as no properties."""
        return v if v is not None else {}
