from app.models.housekeeping.task import HousekeepingTask

__all__ = ["HousekeepingTask"]
