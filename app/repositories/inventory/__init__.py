from app.repositories.inventory.inventory_repository import (
    InventoryConsumptionRepository,
    InventoryItemRepository,
)

__all__ = ["InventoryItemRepository", "InventoryConsumptionRepository"]
