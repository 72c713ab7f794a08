from app.repositories.housekeeping.task_repository import HousekeepingTaskRepository

__all__ = ["HousekeepingTaskRepository"]
