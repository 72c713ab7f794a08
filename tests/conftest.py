"""Shared fixtures: in-memory database, catalog factories and an API client."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENABLE_PENDING_SWEEP", "false")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import datetime  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from app.db.base import Base  # noqa: E402
from app.db.session import build_engine, get_db  # noqa: E402
from app.models import Customer, Room, RoomType, Service  # noqa: E402
from app.models.base.enums import RoomStatus, ServiceCategory  # noqa: E402
from app.services.integrations import Collaborators, RealtimeBroadcaster  # noqa: E402

JAN_10 = datetime(2030, 1, 10, 14, 0)
JAN_11 = datetime(2030, 1, 11, 14, 0)
JAN_12 = datetime(2030, 1, 12, 12, 0)
JAN_13 = datetime(2030, 1, 13, 12, 0)


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


# ---------------------------------------------------------------------------
# Catalog factories
# ---------------------------------------------------------------------------

@pytest.fixture
def make_room_type(db):
    def factory(name="Double", capacity=2, max_guests=3, price="500000",
                extra_bed_allowed=True, extra_bed_price="100000"):
        room_type = RoomType(
            name=name,
            capacity=capacity,
            max_guests=max_guests,
            price_per_night=Decimal(price),
            extra_bed_allowed=extra_bed_allowed,
            extra_bed_price=Decimal(extra_bed_price),
            amenities=[],
        )
        db.add(room_type)
        db.commit()
        return room_type
    return factory


@pytest.fixture
def make_room(db):
    def factory(room_type, number, status=RoomStatus.AVAILABLE, floor=1):
        room = Room(room_number=number, room_type_id=room_type.id, status=status, floor=floor)
        db.add(room)
        db.commit()
        return room
    return factory


@pytest.fixture
def make_customer(db):
    def factory(first_name="An", last_name="Nguyen", phone_number="0912345678",
                email="an.nguyen@example.com", honorific="Ông"):
        customer = Customer(
            first_name=first_name,
            last_name=last_name,
            phone_number=phone_number,
            email=email,
            honorific=honorific,
        )
        db.add(customer)
        db.commit()
        return customer
    return factory


@pytest.fixture
def make_service(db):
    def factory(name="Breakfast", category=ServiceCategory.PER_UNIT, price="50000", inventory_item_ids=None):
        service = Service(
            name=name,
            category=category,
            price=Decimal(price),
            is_active=True,
            inventory_item_ids=inventory_item_ids or [],
        )
        db.add(service)
        db.commit()
        return service
    return factory


@pytest.fixture
def double_type(make_room_type, make_room):
    """The "Double" type with rooms 101 and 102."""
    room_type = make_room_type()
    make_room(room_type, "101")
    make_room(room_type, "102")
    return room_type


# ---------------------------------------------------------------------------
# Collaborator doubles
# ---------------------------------------------------------------------------

class RecordingNotifications:
    def __init__(self, fail=False):
        self.fail = fail
        self.confirmations = []
        self.receipts = []

    def send_booking_confirmation(self, booking, customer):
        if self.fail:
            raise RuntimeError("smtp unavailable")
        self.confirmations.append(booking.booking_code)

    def send_receipt(self, booking, customer, receipt):
        if self.fail:
            raise RuntimeError("smtp unavailable")
        self.receipts.append(receipt)


class RecordingHousekeeping:
    def __init__(self, fail=False):
        self.fail = fail
        self.rooms = []

    def create_cleaning_task(self, room, booking_code=None):
        if self.fail:
            raise RuntimeError("task service down")
        self.rooms.append(room.room_number)


class RecordingInventory:
    def __init__(self):
        self.deducted = []
        self.slips = []

    def deduct(self, item_id, quantity):
        self.deducted.append((item_id, quantity))
        return None

    def record_consumption(self, room_id, booking_id, service_id, items, note=None):
        self.slips.append(items)


@pytest.fixture
def notifications():
    return RecordingNotifications()


@pytest.fixture
def realtime_events():
    events = []
    broadcaster = RealtimeBroadcaster()
    broadcaster.subscribe(events.append)
    return broadcaster, events


@pytest.fixture
def collaborators(notifications, realtime_events):
    return Collaborators(
        notifications=notifications,
        housekeeping=RecordingHousekeeping(),
        inventory=RecordingInventory(),
        realtime=realtime_events[0],
    )


# ---------------------------------------------------------------------------
# API client
# ---------------------------------------------------------------------------

@pytest.fixture
def client(session_factory):
    from app.main import create_app

    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)
