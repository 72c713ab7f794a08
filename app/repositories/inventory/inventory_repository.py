# app/repositories/inventory/inventory_repository.py
"""
Inventory item and consumption repositories.
"""

from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.inventory.inventory import InventoryConsumption, InventoryItem
from app.repositories.base.base_repository import BaseRepository


class InventoryItemRepository(BaseRepository[InventoryItem]):

    def __init__(self, db: Session):
        super().__init__(InventoryItem, db)


class InventoryConsumptionRepository(BaseRepository[InventoryConsumption]):

    def __init__(self, db: Session):
        super().__init__(InventoryConsumption, db)

    def list_for_booking(self, booking_id: str) -> List[InventoryConsumption]:
        query = select(InventoryConsumption).where(InventoryConsumption.booking_id == booking_id)
        return list(self.db.execute(query).scalars().all())
