"""
Integrations service layer.

Interfaces and default implementations of the collaborators the engine
calls after state changes:
- Guest notifications (confirmation, receipt)
- Housekeeping cleaning tasks
- Inventory deduction and consumption slips
- Real-time event broadcast
"""

from app.services.integrations.collaborators import (
    Collaborators,
    call_collaborator,
    default_collaborators,
)
from app.services.integrations.housekeeping_service import DatabaseHousekeepingService, HousekeepingService
from app.services.integrations.inventory_service import DatabaseInventoryService, InventoryService
from app.services.integrations.notification_service import LoggingNotificationService, NotificationService
from app.services.integrations.realtime import (
    CHECKOUT_COMPLETED,
    ROOM_HOUSEKEEPING_UPDATED,
    TASK_REFRESH,
    RealtimeBroadcaster,
    RealtimeEvent,
    broadcaster,
)

__all__ = [
    "CHECKOUT_COMPLETED",
    "ROOM_HOUSEKEEPING_UPDATED",
    "TASK_REFRESH",
    "Collaborators",
    "DatabaseHousekeepingService",
    "DatabaseInventoryService",
    "HousekeepingService",
    "InventoryService",
    "LoggingNotificationService",
    "NotificationService",
    "RealtimeBroadcaster",
    "RealtimeEvent",
    "broadcaster",
    "call_collaborator",
    "default_collaborators",
]
