"""
Shared base for the catalog and migration schemas.
"""

from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional


class BaseSchema(BaseModel):
    """
    Base for every schema, legacy material rows included.

    Strings are trimmed on the way in, so a legacy name of "  " arrives
    blank and fails migration validation. Rows from Supabase and ORM-style
    objects both load (from_attributes).
    """
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True
    )


class TimestampMixin(BaseModel):
    """created_at/updated_at columns of the catalog tables."""
    created_at: datetime
    updated_at: Optional[datetime] = None
