# app/models/inventory/inventory.py
"""
Stock items and consumption records backing the inventory collaborator.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import TimestampModel

__all__ = ["InventoryItem", "InventoryConsumption"]


class InventoryItem(TimestampModel):
    """Countable stock item (minibar drinks, amenities)."""

    __tablename__ = "inventory_items"

    name: Mapped[str] = mapped_column(String(150), nullable=False)
    item_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class InventoryConsumption(TimestampModel):
    """
    One consumption slip per consumed service.

    ``items`` holds ``{"inventory_id", "quantity", "item_type", "condition"}`` entries.
    """

    __tablename__ = "inventory_consumptions"

    room_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("rooms.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    booking_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True, index=True)
    service_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    slip_type: Mapped[str] = mapped_column(String(30), nullable=False, default="MINIBAR")
    items: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
