"""
Catalog maintenance: room types, physical rooms, add-on services and the
local customer directory.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import EntityAlreadyExistsError
from app.models.customer.customer import Customer
from app.models.room.room import Room
from app.models.room.room_type import RoomType
from app.models.service.service import Service
from app.repositories.customer.customer_repository import CustomerRepository
from app.repositories.room.room_repository import RoomRepository, RoomTypeRepository
from app.repositories.service.service_repository import ServiceRepository
from app.schemas.customer.customer_schemas import CustomerCreate
from app.schemas.room.room_base import RoomCreate, RoomTypeCreate
from app.schemas.service.service_schemas import ServiceCreate
from app.services.base import BaseService


class CatalogService(BaseService):
    """Create and list catalog entries."""

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.room_types = RoomTypeRepository(db_session)
        self.rooms = RoomRepository(db_session)
        self.services = ServiceRepository(db_session)
        self.customers = CustomerRepository(db_session)

    # -------------------------------------------------------------------------
    # Room types and rooms
    # -------------------------------------------------------------------------

    def create_room_type(self, data: RoomTypeCreate) -> RoomType:
        if self.room_types.find_by_name(data.name) is not None:
            raise EntityAlreadyExistsError(f"Room type '{data.name}' already exists")

        with self.transaction():
            room_type = self.room_types.add(RoomType(
                name=data.name,
                description=data.description,
                capacity=data.capacity,
                max_guests=data.max_guests,
                price_per_night=data.price_per_night,
                extra_bed_allowed=data.extra_bed_allowed,
                extra_bed_price=data.extra_bed_price,
                amenities=[amenity.value for amenity in data.amenities],
            ))

        self._log_operation("Room type created", room_type.name, {"price_per_night": str(room_type.price_per_night)})
        return room_type

    def list_room_types(self) -> List[RoomType]:
        return self.room_types.list_types()

    def create_room(self, data: RoomCreate) -> Room:
        room_type = self.room_types.get_by_id(data.room_type_id)
        if self.rooms.find_by_number(data.room_number) is not None:
            raise EntityAlreadyExistsError(f"Room '{data.room_number}' already exists")

        with self.transaction():
            room = self.rooms.add(Room(
                room_number=data.room_number,
                floor=data.floor,
                room_type_id=room_type.id,
                status=data.status,
                housekeeping_status=data.housekeeping_status,
                do_not_disturb=data.do_not_disturb,
            ))

        self._log_operation("Room created", room.room_number, {"room_type": room_type.name})
        return room

    def list_rooms(self, room_type_id: Optional[str] = None) -> List[Room]:
        return self.rooms.list_rooms(room_type_id)

    # -------------------------------------------------------------------------
    # Services and customers
    # -------------------------------------------------------------------------

    def create_service(self, data: ServiceCreate) -> Service:
        with self.transaction():
            service = self.services.add(Service(
                name=data.name,
                description=data.description,
                category=data.category,
                price=data.price,
                unit=data.unit,
                is_active=data.is_active,
                inventory_item_ids=list(data.inventory_item_ids),
            ))

        self._log_operation("Service created", service.name, {"category": service.category.value})
        return service

    def list_services(self, active_only: bool = True) -> List[Service]:
        if active_only:
            return self.services.list_active()
        return self.services.find_all(limit=1000)

    def create_customer(self, data: CustomerCreate) -> Customer:
        values = data.model_dump()
        if data.honorific is not None:
            values["honorific"] = data.honorific.value
        with self.transaction():
            customer = self.customers.add(Customer(**values))
        return customer

    def list_customers(self, skip: int = 0, limit: int = 100) -> List[Customer]:
        return self.customers.list_customers(skip=skip, limit=limit)
