"""
Add-on service schemas.
"""

from decimal import Decimal
from typing import List, Union

from pydantic import Field

from app.models.base.enums import ServiceCategory
from app.schemas.common.base import BaseCreateSchema, BaseResponseSchema

__all__ = [
    "ServiceCreate",
    "ServiceResponse",
]


class ServiceCreate(BaseCreateSchema):
    name: str = Field(..., min_length=1, max_length=150)
    description: Union[str, None] = Field(None, max_length=2000)
    category: ServiceCategory = Field(ServiceCategory.PER_UNIT, description="Pricing category")
    price: Decimal = Field(..., gt=0, description="Unit price")
    unit: Union[str, None] = Field(None, max_length=30)
    is_active: bool = True
    inventory_item_ids: List[str] = Field(
        default_factory=list,
        description="Stock items deducted when the service is consumed",
    )


class ServiceResponse(BaseResponseSchema):
    name: str
    description: Union[str, None] = None
    category: ServiceCategory
    price: Decimal
    unit: Union[str, None] = None
    is_active: bool
    inventory_item_ids: List[str] = Field(default_factory=list)
