"""
Legacy material schema.

Materials are the flat inventory rows being replaced by
BaseProduct/ProductVariant. They are only ever read.
"""

from pydantic import Field, JsonValue, field_validator
from typing import Optional
from decimal import Decimal

from models.base import BaseSchema


class MaterialRecord(BaseSchema):
    """
    A row of the legacy `materials` table.

    Validation is deliberately loose: a material with a blank name or a
    negative stock must still load so the migration can report on it.
    NULL columns load as blank or zero for the same reason.
    """

    id: str = Field(..., description="Material UUID")
    name: str = Field(default="", description="Material name")
    description: Optional[str] = Field(None, description="Free-text description")
    category_id: Optional[str] = Field(None, description="Category UUID")
    unit_type: str = Field(default="", description="Free-text unit, e.g. 'kg' or 'pcs'")
    unit_value: Decimal = Field(default=Decimal("0"), description="Amount per unit")
    stock_quantity: Decimal = Field(default=Decimal("0"), description="Units in stock")
    usage_notes: Optional[str] = Field(None, description="Usage notes")
    photos: Optional[JsonValue] = Field(
        None,
        description="Photo URLs, serialized as a JSON array of strings"
    )
    dynamic_properties: Optional[JsonValue] = Field(
        None,
        description="Arbitrary properties, serialized as a JSON object"
    )

    @field_validator("name", "unit_type", mode="before")
    @classmethod
    def null_text_as_blank(cls, v: Optional[str]) -> str:
        """NULL text columns read as blank."""
        return "" if v is None else v

    @field_validator("unit_value", "stock_quantity", mode="before")
    @classmethod
    def null_quantity_as_zero(cls, v):
        """NULL quantity columns read as zero."""
        return Decimal("0") if v is None else v
