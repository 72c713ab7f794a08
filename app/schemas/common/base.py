"""
Schema base classes shared by the catalog, booking and payment APIs.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "BaseSchema",
    "BaseCreateSchema",
    "BaseUpdateSchema",
    "BaseResponseSchema",
]


class BaseSchema(BaseModel):
    """
    Common Pydantic configuration.

    ORM rows validate directly (``from_attributes``) and enums stay Enum
    instances so services compare them against model enums.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=False,
        str_strip_whitespace=True,
        validate_assignment=True,
    )


class BaseCreateSchema(BaseSchema):
    """Input for create operations."""


class BaseUpdateSchema(BaseSchema):
    """
    Input for partial edits.

    Fields default to None; ``provided()`` tells an explicit null apart
    from a field the client left out.
    """

    def provided(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.model_fields_set}


class BaseResponseSchema(BaseSchema):
    """Persisted entity: string UUID plus timestamps."""

    id: str = Field(..., description="Unique identifier")
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")
    updated_at: datetime = Field(..., description="Last update timestamp (UTC)")
