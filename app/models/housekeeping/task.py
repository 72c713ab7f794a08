# app/models/housekeeping/task.py
"""
Housekeeping task backing the default task collaborator.
"""

from typing import Optional

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import TimestampModel, enum_type
from app.models.base.enums import TaskPriority, TaskStatus

__all__ = ["HousekeepingTask"]


class HousekeepingTask(TimestampModel):
    """Cleaning or maintenance job for one room."""

    __tablename__ = "housekeeping_tasks"

    room_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    task_type: Mapped[str] = mapped_column(String(30), nullable=False, default="cleaning")
    status: Mapped[TaskStatus] = mapped_column(
        enum_type(TaskStatus),
        nullable=False,
        default=TaskStatus.PENDING,
    )
    priority: Mapped[TaskPriority] = mapped_column(
        enum_type(TaskPriority),
        nullable=False,
        default=TaskPriority.MEDIUM,
    )
    assigned_to: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
