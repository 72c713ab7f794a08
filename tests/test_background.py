"""Expired pending booking sweep and ID-scan session store."""

from datetime import datetime, timedelta

import pytest

from app.core.background_tasks import run_pending_sweep
from app.models.base.enums import BookingStatus
from app.repositories.booking.booking_repository import BookingRepository
from app.services.background import PendingBookingCleanupService
from app.services.booking import TemporaryBookingService
from app.services.scan import STATUS_COMPLETED, STATUS_WAITING, ScanSessionStore

from tests.conftest import JAN_10, JAN_12


class TestPendingBookingCleanup:
    def test_only_expired_pending_bookings_are_deleted(self, db, double_type, make_customer):
        now = datetime.utcnow()
        temporary = TemporaryBookingService(db)
        stale = temporary.create_temporary_booking(JAN_10, JAN_12, now=now - timedelta(minutes=45))
        fresh = temporary.create_temporary_booking(JAN_10, JAN_12, now=now - timedelta(minutes=5))
        old_confirmed = temporary.create_temporary_booking(JAN_10, JAN_12, now=now - timedelta(hours=3))
        temporary.set_line_room_type(old_confirmed.id, 0, double_type.id)
        temporary.confirm_temporary_booking(old_confirmed.id, make_customer().id)

        result = PendingBookingCleanupService(db, ttl_minutes=30).cleanup_expired_pending_bookings(now=now)

        assert result.count == 1
        assert result.booking_codes == [stale.booking_code]
        bookings = BookingRepository(db)
        assert bookings.find_by_id(stale.id) is None
        assert bookings.get_by_id(fresh.id).status == BookingStatus.PENDING
        assert bookings.get_by_id(old_confirmed.id).status == BookingStatus.BOOKED

    def test_nothing_to_delete(self, db):
        result = PendingBookingCleanupService(db).cleanup_expired_pending_bookings()
        assert result.count == 0
        assert result.booking_codes == []

    def test_scheduled_sweep_uses_its_own_session(self, db, session_factory):
        stale = TemporaryBookingService(db).create_temporary_booking(
            JAN_10, JAN_12, now=datetime.utcnow() - timedelta(hours=2),
        )

        result = run_pending_sweep(session_factory)

        assert result.booking_codes == [stale.booking_code]


class TestScanSessionStore:
    @pytest.fixture
    def expired(self):
        return []

    @pytest.fixture
    def store(self, expired):
        store = ScanSessionStore(ttl_seconds=60, on_expire=lambda sid, data: expired.append((sid, data)))
        yield store
        store.clear()

    def test_update_completes_session(self, store):
        session = store.create("desk-1")
        assert session.status == STATUS_WAITING

        store.update("desk-1", {"identification_number": "001099012345"})

        assert store.get("desk-1").status == STATUS_COMPLETED
        assert store.get("desk-1").data["identification_number"] == "001099012345"

    def test_update_of_missing_session(self, store):
        assert store.update("gone", {"x": 1}) is None

    def test_pop_does_not_fire_expiry(self, store, expired):
        store.create("desk-1")

        assert store.pop("desk-1").session_id == "desk-1"
        assert len(store) == 0
        assert not store.expire("desk-1")
        assert expired == []

    def test_expiry_fires_once(self, store, expired):
        store.create("desk-1", payload={"partial": True})

        assert store.expire("desk-1")
        assert not store.expire("desk-1")
        assert expired == [("desk-1", {"partial": True})]
        assert store.get("desk-1") is None

    def test_generated_session_ids_are_unique(self, store):
        assert store.create().session_id != store.create().session_id
        assert len(store) == 2
