"""
Inventory collaborator: stock deduction and consumption slips.
"""

from typing import Any, Dict, List, Optional, Protocol

from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.inventory.inventory import InventoryConsumption, InventoryItem
from app.repositories.inventory.inventory_repository import (
    InventoryConsumptionRepository,
    InventoryItemRepository,
)

logger = get_logger(__name__)


class InventoryService(Protocol):
    def deduct(self, item_id: str, quantity: int) -> Optional[InventoryItem]:
        ...

    def record_consumption(
        self,
        room_id: Optional[str],
        booking_id: Optional[str],
        service_id: Optional[str],
        items: List[Dict[str, Any]],
        note: Optional[str] = None,
    ) -> InventoryConsumption:
        ...


class DatabaseInventoryService:
    """Stock kept in ``inventory_items``; stock never goes negative."""

    def __init__(self, session: Session):
        self.items = InventoryItemRepository(session)
        self.consumptions = InventoryConsumptionRepository(session)

    def deduct(self, item_id: str, quantity: int) -> Optional[InventoryItem]:
        item = self.items.find_by_id(item_id)
        if item is None:
            logger.warning("Inventory item missing, nothing deducted", extra={"item_id": item_id})
            return None
        item.quantity = max(0, (item.quantity or 0) - quantity)
        self.items.db.flush()
        return item

    def record_consumption(
        self,
        room_id: Optional[str],
        booking_id: Optional[str],
        service_id: Optional[str],
        items: List[Dict[str, Any]],
        note: Optional[str] = None,
    ) -> InventoryConsumption:
        slip = InventoryConsumption(
            room_id=room_id,
            booking_id=booking_id,
            service_id=service_id,
            slip_type="MINIBAR",
            items=items,
            note=note,
        )
        return self.consumptions.add(slip)
