"""
Housekeeping task collaborator.
"""

from typing import Optional, Protocol

from sqlalchemy.orm import Session

from app.models.base.enums import TaskPriority, TaskStatus
from app.models.housekeeping.task import HousekeepingTask
from app.models.room.room import Room
from app.repositories.housekeeping.task_repository import HousekeepingTaskRepository


class HousekeepingService(Protocol):
    def create_cleaning_task(self, room: Room, booking_code: Optional[str] = None) -> HousekeepingTask:
        ...


class DatabaseHousekeepingService:
    """Creates ``housekeeping_tasks`` rows picked up by the housekeeping app."""

    def __init__(self, session: Session):
        self.tasks = HousekeepingTaskRepository(session)

    def create_cleaning_task(self, room: Room, booking_code: Optional[str] = None) -> HousekeepingTask:
        description = f"Dọn phòng sau khi khách trả phòng {room.room_number}"
        if booking_code:
            description += f" (booking {booking_code})"
        task = HousekeepingTask(
            room_id=room.id,
            title=f"Dọn phòng {room.room_number}",
            description=description,
            task_type="cleaning",
            status=TaskStatus.PENDING,
            priority=TaskPriority.HIGH,
        )
        return self.tasks.add(task)
