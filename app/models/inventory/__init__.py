from app.models.inventory.inventory import InventoryConsumption, InventoryItem

__all__ = ["InventoryItem", "InventoryConsumption"]
