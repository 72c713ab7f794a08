# app/repositories/housekeeping/task_repository.py
"""
Housekeeping task repository.
"""

from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.housekeeping.task import HousekeepingTask
from app.repositories.base.base_repository import BaseRepository


class HousekeepingTaskRepository(BaseRepository[HousekeepingTask]):

    def __init__(self, db: Session):
        super().__init__(HousekeepingTask, db)

    def list_for_room(self, room_id: str) -> List[HousekeepingTask]:
        query = (
            select(HousekeepingTask)
            .where(HousekeepingTask.room_id == room_id)
            .order_by(HousekeepingTask.created_at.desc())
        )
        return list(self.db.execute(query).scalars().all())
