"""
Room catalog repositories.
"""

from app.repositories.room.room_repository import RoomRepository, RoomTypeRepository

__all__ = ["RoomRepository", "RoomTypeRepository"]
