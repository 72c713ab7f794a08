"""
Catalog endpoints: room types, rooms, availability, services, customers.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.api import deps
from app.schemas.customer import CustomerCreate, CustomerResponse
from app.schemas.room import (
    AvailabilityResponse,
    RemainingCapacityResponse,
    RoomCreate,
    RoomResponse,
    RoomTypeCreate,
    RoomTypeResponse,
)
from app.schemas.service import ServiceCreate, ServiceResponse
from app.services.catalog import CatalogService
from app.services.reservation import AvailabilityResolver

router = APIRouter(tags=["Catalog"])


# ========================================================================
# ROOM TYPES
# ========================================================================

@router.post("/room-types", response_model=RoomTypeResponse, status_code=status.HTTP_201_CREATED)
def create_room_type(
    payload: RoomTypeCreate,
    service: CatalogService = Depends(deps.get_catalog_service),
):
    return service.create_room_type(payload)


@router.get("/room-types", response_model=List[RoomTypeResponse])
def list_room_types(service: CatalogService = Depends(deps.get_catalog_service)):
    return service.list_room_types()


@router.get("/room-types/{room_type_id}/remaining", response_model=RemainingCapacityResponse)
def remaining_capacity(
    room_type_id: str,
    check_in: datetime = Query(...),
    check_out: datetime = Query(...),
    resolver: AvailabilityResolver = Depends(deps.get_availability_resolver),
):
    """Rooms of the type still free for the whole range."""
    return RemainingCapacityResponse(
        room_type_id=room_type_id,
        check_in=check_in,
        check_out=check_out,
        remaining=resolver.remaining_for_type(room_type_id, check_in, check_out),
    )


# ========================================================================
# ROOMS
# ========================================================================

@router.get("/rooms/availability", response_model=AvailabilityResponse)
def room_availability(
    check_in: datetime = Query(...),
    check_out: datetime = Query(...),
    room_type_id: Optional[str] = Query(None),
    client_mode: bool = Query(False, description="Group rooms by type"),
    resolver: AvailabilityResolver = Depends(deps.get_availability_resolver),
):
    """
    Availability of every room for a date range.

    Staff get a flat room list; ``client_mode`` without a type filter
    returns rooms grouped by type with an available count per group.
    """
    if client_mode and not room_type_id:
        groups = resolver.resolve_grouped(check_in, check_out)
        return AvailabilityResponse(rooms_by_type=[group.to_dict() for group in groups])
    rooms = resolver.resolve(check_in, check_out, room_type_id=room_type_id)
    return AvailabilityResponse(rooms=[entry.to_dict() for entry in rooms])


@router.post("/rooms", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
def create_room(
    payload: RoomCreate,
    service: CatalogService = Depends(deps.get_catalog_service),
):
    return service.create_room(payload)


@router.get("/rooms", response_model=List[RoomResponse])
def list_rooms(
    room_type_id: Optional[str] = Query(None),
    service: CatalogService = Depends(deps.get_catalog_service),
):
    return service.list_rooms(room_type_id)


# ========================================================================
# SERVICES
# ========================================================================

@router.post("/services", response_model=ServiceResponse, status_code=status.HTTP_201_CREATED)
def create_service(
    payload: ServiceCreate,
    service: CatalogService = Depends(deps.get_catalog_service),
):
    return service.create_service(payload)


@router.get("/services", response_model=List[ServiceResponse])
def list_services(
    active_only: bool = Query(True),
    service: CatalogService = Depends(deps.get_catalog_service),
):
    return service.list_services(active_only=active_only)


# ========================================================================
# CUSTOMERS
# ========================================================================

@router.post("/customers", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def create_customer(
    payload: CustomerCreate,
    service: CatalogService = Depends(deps.get_catalog_service),
):
    return service.create_customer(payload)


@router.get("/customers", response_model=List[CustomerResponse])
def list_customers(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    service: CatalogService = Depends(deps.get_catalog_service),
):
    return service.list_customers(skip=skip, limit=limit)
