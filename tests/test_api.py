"""HTTP surface: routing, error bodies and an end-to-end booking flow."""

from decimal import Decimal

import pytest

API = "/api/v1"


@pytest.fixture
def catalog(client):
    """Double type with rooms 101/102 and one customer, created over HTTP."""
    room_type = client.post(f"{API}/room-types", json={
        "name": "Double",
        "capacity": 2,
        "max_guests": 3,
        "price_per_night": "500000",
        "extra_bed_allowed": True,
        "extra_bed_price": "100000",
    }).json()
    rooms = [
        client.post(f"{API}/rooms", json={"room_number": number, "room_type_id": room_type["id"], "floor": 1}).json()
        for number in ("101", "102")
    ]
    customer = client.post(f"{API}/customers", json={
        "honorific": "Ông",
        "first_name": "An",
        "last_name": "Nguyen",
        "phone_number": "0912345678",
        "email": "an.nguyen@example.com",
    }).json()
    return {"room_type": room_type, "rooms": rooms, "customer": customer}


def booking_body(catalog, count=1, check_in="2030-01-10T14:00:00", check_out="2030-01-12T12:00:00"):
    return {
        "customer_id": catalog["customer"]["id"],
        "rooms": [
            {
                "room_type_id": catalog["room_type"]["id"],
                "expected_check_in": check_in,
                "expected_check_out": check_out,
                "number_of_adults": 2,
            }
            for _ in range(count)
        ],
    }


class TestSystem:
    def test_health(self, client):
        response = client.get(f"{API}/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["total_routes"] > 0


class TestErrors:
    def test_not_found_body(self, client):
        response = client.get(f"{API}/bookings/does-not-exist")

        assert response.status_code == 404
        error = response.json()["error"]
        assert error["code"] == "RESOURCE_NOT_FOUND"
        assert error["type"] == "NotFoundError"

    def test_capacity_conflict(self, client, catalog):
        assert client.post(f"{API}/bookings", json=booking_body(catalog)).status_code == 201

        response = client.post(
            f"{API}/bookings",
            json=booking_body(catalog, count=2, check_in="2030-01-11T14:00:00", check_out="2030-01-13T12:00:00"),
        )

        assert response.status_code == 409
        error = response.json()["error"]
        assert error["code"] == "INSUFFICIENT_CAPACITY"
        assert "Chỉ còn 1 phòng" in error["message"]

    def test_lookup_without_phone_is_a_validation_error(self, client):
        response = client.get(f"{API}/bookings/lookup", params={"booking_code": "BK0001"})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_malformed_body_is_rejected(self, client, catalog):
        body = booking_body(catalog)
        body["rooms"][0]["expected_check_out"] = "2030-01-09T12:00:00"

        assert client.post(f"{API}/bookings", json=body).status_code == 422


class TestBookingFlow:
    def test_create_list_and_price(self, client, catalog):
        created = client.post(f"{API}/bookings", json=booking_body(catalog))
        assert created.status_code == 201
        booking = created.json()
        assert booking["status"] == "booked"
        assert booking["payment_status"] == "unpaid"
        assert Decimal(str(booking["total_price"])) == Decimal("1000000")

        listed = client.get(f"{API}/bookings", params={"status": "booked"}).json()
        assert [b["id"] for b in listed] == [booking["id"]]

        price = client.get(f"{API}/bookings/{booking['id']}/price").json()
        assert Decimal(str(price["room_total"])) == Decimal("1000000")
        assert price["lines"][0]["nights"] == 2

    @pytest.mark.parametrize("phone", ["0912345678", "84912345678", "+84912345678"])
    def test_lookup_accepts_phone_variants(self, client, catalog, phone):
        booking = client.post(f"{API}/bookings", json=booking_body(catalog)).json()

        response = client.get(
            f"{API}/bookings/lookup",
            params={"booking_code": booking["booking_code"], "phone_number": phone},
        )

        assert response.status_code == 200
        assert response.json()["id"] == booking["id"]

    def test_check_in_then_check_out(self, client, catalog):
        booking = client.post(f"{API}/bookings", json=booking_body(catalog)).json()

        checked_in = client.post(f"{API}/bookings/{booking['id']}/check-in")
        assert checked_in.status_code == 200
        room_id = checked_in.json()["rooms"][0]["room_id"]
        assert client.get(f"{API}/bookings/by-room/{room_id}").json()["id"] == booking["id"]

        checked_out = client.post(f"{API}/bookings/{booking['id']}/check-out", json={"room_ids": [room_id]})
        assert checked_out.status_code == 200
        body = checked_out.json()
        assert body["booking"]["status"] == "completed"
        assert body["receipt"]["booking_code"] == booking["booking_code"]

    def test_temporary_booking_route_is_not_a_booking_id(self, client, catalog):
        response = client.post(f"{API}/bookings/temporary", json={
            "day_start": "2030-01-10T14:00:00",
            "day_end": "2030-01-12T12:00:00",
        })

        assert response.status_code == 201
        assert response.json()["status"] == "pending"

    def test_availability_reports_booked_room(self, client, catalog):
        room = catalog["rooms"][0]
        body = booking_body(catalog)
        body["rooms"][0]["room_id"] = room["id"]
        client.post(f"{API}/bookings", json=body)

        response = client.get(f"{API}/rooms/availability", params={
            "check_in": "2030-01-10T14:00:00",
            "check_out": "2030-01-12T12:00:00",
        })

        statuses = {entry["room_number"]: entry["visible_status"] for entry in response.json()["rooms"]}
        assert statuses == {"101": "booked", "102": "available"}


class TestMiddleware:
    def test_request_id_is_echoed(self, client):
        response = client.get(f"{API}/health", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"
        assert "X-Process-Time" in response.headers
