# app/models/service/service.py
"""
Sellable add-on service model.
"""

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import JSON, Boolean, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import TimestampModel, enum_type
from app.models.base.enums import ServiceCategory

__all__ = ["Service"]


class Service(TimestampModel):
    """
    Add-on such as breakfast, airport pickup or minibar items.

    Attributes:
        category: Pricing category, decides how quantity and stay length apply
        price: Unit price
        inventory_item_ids: Stock items consumed when the service is used
    """

    __tablename__ = "services"

    name: Mapped[str] = mapped_column(String(150), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[ServiceCategory] = mapped_column(
        enum_type(ServiceCategory),
        nullable=False,
        default=ServiceCategory.PER_UNIT,
        index=True,
    )
    price: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    unit: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    inventory_item_ids: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
    )

    def __repr__(self) -> str:
        return f"<Service(name={self.name}, category={self.category})>"
