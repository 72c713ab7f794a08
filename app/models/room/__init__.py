"""
Room catalog models.
"""

from app.models.room.room import Room
from app.models.room.room_type import RoomType

__all__ = ["Room", "RoomType"]
