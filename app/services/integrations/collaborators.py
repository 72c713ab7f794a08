"""
Wiring of external collaborators and the downstream-failure policy.

Collaborators run after the triggering transition has committed. A
failing collaborator is logged as a DownstreamFailure and its own writes
are rolled back; the transition stays committed.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import DownstreamFailure
from app.core.logging import get_logger
from app.services.integrations.housekeeping_service import DatabaseHousekeepingService, HousekeepingService
from app.services.integrations.inventory_service import DatabaseInventoryService, InventoryService
from app.services.integrations.notification_service import LoggingNotificationService, NotificationService
from app.services.integrations.realtime import RealtimeBroadcaster, broadcaster

logger = get_logger(__name__)


@dataclass
class Collaborators:
    notifications: NotificationService
    housekeeping: HousekeepingService
    inventory: InventoryService
    realtime: RealtimeBroadcaster


def default_collaborators(session: Session) -> Collaborators:
    return Collaborators(
        notifications=LoggingNotificationService(),
        housekeeping=DatabaseHousekeepingService(session),
        inventory=DatabaseInventoryService(session),
        realtime=broadcaster,
    )


def call_collaborator(
    collaborator: str,
    func: Callable[..., Any],
    *args: Any,
    session: Optional[Session] = None,
    **kwargs: Any,
) -> Any:
    """
    Invoke a collaborator, committing its writes on success.

    Returns the collaborator's result, or None when it failed.
    """
    try:
        result = func(*args, **kwargs)
        if session is not None:
            session.commit()
        return result
    except Exception as e:
        if session is not None:
            session.rollback()
        failure = DownstreamFailure(collaborator, str(e))
        logger.error(
            failure.message,
            extra={"collaborator": collaborator, "error_code": failure.error_code.value},
            exc_info=True,
        )
        return None
