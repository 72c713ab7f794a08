# app/repositories/room/room_repository.py
"""
Room and room type repositories.
"""

from typing import Dict, List, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import RepositoryError
from app.models.room.room import Room
from app.models.room.room_type import RoomType
from app.repositories.base.base_repository import BaseRepository


class RoomTypeRepository(BaseRepository[RoomType]):
    """Repository for room categories."""

    def __init__(self, db: Session):
        super().__init__(RoomType, db)

    def find_by_name(self, name: str) -> Optional[RoomType]:
        return self.db.execute(select(RoomType).where(RoomType.name == name)).scalars().first()

    def find_by_ids(self, type_ids: Sequence[str]) -> Dict[str, RoomType]:
        if not type_ids:
            return {}
        query = select(RoomType).where(RoomType.id.in_(list(type_ids)))
        return {room_type.id: room_type for room_type in self.db.execute(query).scalars().all()}

    def lock_for_capacity(self, type_ids: Sequence[str]) -> List[RoomType]:
        """
        Row-lock the given types in id order for the duration of the transaction.

        Serializes concurrent count-then-insert on backends that support
        ``SELECT ... FOR UPDATE``; SQLite ignores the clause.
        """
        if not type_ids:
            return []
        query = (
            select(RoomType)
            .where(RoomType.id.in_(sorted(set(type_ids))))
            .order_by(RoomType.id)
            .with_for_update()
        )
        try:
            return list(self.db.execute(query).scalars().all())
        except SQLAlchemyError as e:
            raise RepositoryError(f"Capacity lock failed: {e}") from e

    def list_types(self) -> List[RoomType]:
        return list(self.db.execute(select(RoomType).order_by(RoomType.name)).scalars().all())


class RoomRepository(BaseRepository[Room]):
    """Repository for physical rooms."""

    def __init__(self, db: Session):
        super().__init__(Room, db)

    def find_by_number(self, room_number: str) -> Optional[Room]:
        return self.db.execute(select(Room).where(Room.room_number == room_number)).scalars().first()

    def list_rooms(self, room_type_id: Optional[str] = None) -> List[Room]:
        """Rooms in stable room-number order, optionally for one type."""
        query = select(Room)
        if room_type_id is not None:
            query = query.where(Room.room_type_id == room_type_id)
        query = query.order_by(Room.room_number)
        return list(self.db.execute(query).scalars().unique().all())

    def count_by_type(self, room_type_id: str) -> int:
        query = select(func.count(Room.id)).where(Room.room_type_id == room_type_id)
        return self.db.execute(query).scalar_one()

    def find_by_ids(self, room_ids: Sequence[str]) -> Dict[str, Room]:
        if not room_ids:
            return {}
        query = select(Room).where(Room.id.in_(list(room_ids)))
        return {room.id: room for room in self.db.execute(query).scalars().unique().all()}
