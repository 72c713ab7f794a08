# app/models/room/room.py
"""
Physical room model.
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel, enum_type
from app.models.base.enums import HousekeepingStatus, RoomStatus

if TYPE_CHECKING:
    from app.models.room.room_type import RoomType

__all__ = ["Room"]


class Room(TimestampModel):
    """
    A physical, bookable unit.

    ``status`` is the room's state right now; availability for a future
    date range is computed by the availability resolver, not stored here.
    """

    __tablename__ = "rooms"

    room_number: Mapped[str] = mapped_column(
        String(20),
        unique=True,
        nullable=False,
        index=True,
    )
    floor: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    room_type_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("room_types.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    status: Mapped[RoomStatus] = mapped_column(
        enum_type(RoomStatus),
        nullable=False,
        default=RoomStatus.AVAILABLE,
        index=True,
    )
    housekeeping_status: Mapped[HousekeepingStatus] = mapped_column(
        enum_type(HousekeepingStatus),
        nullable=False,
        default=HousekeepingStatus.CLEAN,
    )
    do_not_disturb: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    room_type: Mapped["RoomType"] = relationship(
        "RoomType",
        back_populates="rooms",
        lazy="joined",
    )

    def __repr__(self) -> str:
        return f"<Room(number={self.room_number}, status={self.status})>"
