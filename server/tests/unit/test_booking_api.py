"""API tests for fare estimates, booking submission and the catalog."""

from datetime import timedelta

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from cab_booking.core.observability import REGISTRY
from cab_booking.models import Booking
from cab_booking.services.booking_service import BookingService


@pytest.mark.asyncio
async def test_estimate_oneway(test_client, seeded_routes, sample_booking_data):
    response = await test_client.post("/api/booking/estimate", json=sample_booking_data)

    assert response.status_code == 200
    data = response.json()
    assert data["estimated_fare"] == 2200
    assert data["advance_amount"] == 500
    assert data["advance_note"] == "Pay ₹500 advance"
    assert data["route"]["to_city"] == "Digha"


@pytest.mark.asyncio
async def test_estimate_roundtrip(test_client, seeded_routes, sample_booking_data, today):
    sample_booking_data["tripType"] = "roundtrip"
    sample_booking_data["returnDate"] = (today + timedelta(days=5)).isoformat()

    response = await test_client.post("/api/booking/estimate", json=sample_booking_data)
    assert response.status_code == 200
    assert response.json()["estimated_fare"] == 3960


@pytest.mark.asyncio
async def test_estimate_reverse_direction_suv(test_client, seeded_routes, sample_booking_data):
    sample_booking_data.update({"fromCity": "digha", "toCity": "kolkata", "carType": "scorpio"})

    response = await test_client.post("/api/booking/estimate", json=sample_booking_data)
    assert response.json()["estimated_fare"] == 3000


@pytest.mark.asyncio
async def test_estimate_unknown_route_uses_default(test_client, seeded_routes, sample_booking_data):
    sample_booking_data["toCity"] = "Siliguri"

    response = await test_client.post("/api/booking/estimate", json=sample_booking_data)
    data = response.json()
    assert data["estimated_fare"] == 2000
    assert data["route"] is None


@pytest.mark.asyncio
async def test_estimate_does_not_need_contact(test_client, seeded_routes, sample_booking_data):
    for field in ("name", "email", "phone"):
        del sample_booking_data[field]

    response = await test_client.post("/api/booking/estimate", json=sample_booking_data)
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_estimate_past_date_rejected(test_client, seeded_routes, sample_booking_data, today):
    sample_booking_data["date"] = (today - timedelta(days=1)).isoformat()

    response = await test_client.post("/api/booking/estimate", json=sample_booking_data)
    assert response.status_code == 400
    data = response.json()
    assert data["title"] == "Invalid Date"
    assert data["code"] == "INVALID_DATE"


@pytest.mark.asyncio
async def test_estimate_lookup_failure(test_client, test_session, sample_booking_data, monkeypatch):
    async def failing_execute(*args, **kwargs):
        raise OperationalError("SELECT routes", {}, Exception("connection refused"))

    monkeypatch.setattr(test_session, "execute", failing_execute)

    response = await test_client.post("/api/booking/estimate", json=sample_booking_data)
    assert response.status_code == 500
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_submit_booking(test_client, seeded_routes, sample_booking_data):
    response = await test_client.post("/api/booking/submit", json=sample_booking_data)

    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    assert data["booking_id"].startswith("ZC")
    assert len(data["booking_id"]) == 14
    assert data["estimated_fare"] == 2200
    assert data["status"] == "pending"
    assert data["booking_id"] in data["message"]

    booking = await BookingService(seeded_routes).get_booking_by_booking_id(data["booking_id"])
    assert booking is not None
    assert booking.name == "Rahul Das"
    assert booking.to_city == "Digha"
    assert booking.pickup_time == "06:30"
    assert booking.return_date is None
    assert booking.created_at is not None


@pytest.mark.asyncio
async def test_submit_local_drops_destination(test_client, seeded_routes, sample_booking_data):
    sample_booking_data.update({"tripType": "local", "carType": "crysta"})

    response = await test_client.post("/api/booking/submit", json=sample_booking_data)
    assert response.status_code == 201
    data = response.json()
    assert data["estimated_fare"] == 1500

    booking = await BookingService(seeded_routes).get_booking_by_booking_id(data["booking_id"])
    assert booking.to_city is None
    assert booking.trip_type == "local"


@pytest.mark.asyncio
async def test_local_estimate_accepts_null_destination(test_client, seeded_routes, sample_booking_data):
    sample_booking_data.update({"tripType": "local", "toCity": None})

    response = await test_client.post("/api/booking/estimate", json=sample_booking_data)
    assert response.status_code == 200
    data = response.json()
    assert data["estimated_fare"] == 1500
    assert data["route"] is None


@pytest.mark.asyncio
async def test_intercity_null_destination_is_incomplete(test_client, seeded_routes, sample_booking_data):
    sample_booking_data["toCity"] = None

    response = await test_client.post("/api/booking/estimate", json=sample_booking_data)
    assert response.status_code == 400
    assert response.json()["title"] == "Incomplete Form"


@pytest.mark.asyncio
async def test_submit_invalid_phone(test_client, seeded_routes, sample_booking_data):
    sample_booking_data["phone"] = "98765"

    response = await test_client.post("/api/booking/submit", json=sample_booking_data)
    assert response.status_code == 400
    data = response.json()
    assert data["title"] == "Valid Phone Required"
    assert data["code"] == "VALID_PHONE_REQUIRED"
    assert data["field"] == "phone"

    assert await seeded_routes.scalar(select(func.count()).select_from(Booking)) == 0


@pytest.mark.asyncio
async def test_submit_malformed_date(test_client, sample_booking_data):
    sample_booking_data["date"] = "next tuesday"

    response = await test_client.post("/api/booking/submit", json=sample_booking_data)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_submit_store_failure(test_client, seeded_routes, sample_booking_data, monkeypatch):
    async def failing_commit():
        raise OperationalError("INSERT INTO bookings", {}, Exception("disk full"))

    monkeypatch.setattr(seeded_routes, "commit", failing_commit)

    response = await test_client.post("/api/booking/submit", json=sample_booking_data)
    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "message": "We could not place your booking. Please try again."
    }


def _failures(stage: str) -> float:
    return REGISTRY.get_sample_value("booking_failures_total", {"stage": stage}) or 0


@pytest.mark.asyncio
async def test_submit_lookup_failure_counted_as_estimate_failure(
    test_client, test_session, sample_booking_data, monkeypatch
):
    async def failing_execute(*args, **kwargs):
        raise OperationalError("SELECT routes", {}, Exception("connection refused"))

    monkeypatch.setattr(test_session, "execute", failing_execute)
    estimate_failures, submit_failures = _failures("estimate"), _failures("submit")

    response = await test_client.post("/api/booking/submit", json=sample_booking_data)
    assert response.status_code == 500
    assert response.json()["success"] is False
    assert _failures("estimate") == estimate_failures + 1
    assert _failures("submit") == submit_failures


@pytest.mark.asyncio
async def test_submit_store_failure_counted_as_submit_failure(
    test_client, seeded_routes, sample_booking_data, monkeypatch
):
    async def failing_commit():
        raise OperationalError("INSERT INTO bookings", {}, Exception("disk full"))

    monkeypatch.setattr(seeded_routes, "commit", failing_commit)
    estimate_failures, submit_failures = _failures("estimate"), _failures("submit")

    await test_client.post("/api/booking/submit", json=sample_booking_data)
    assert _failures("submit") == submit_failures + 1
    assert _failures("estimate") == estimate_failures


@pytest.mark.asyncio
async def test_list_cars(test_client):
    response = await test_client.get("/api/cars")
    assert response.status_code == 200
    ids = [car["id"] for car in response.json()]
    assert ids == ["hatchback", "sedan", "suv", "crysta", "scorpio"]


@pytest.mark.asyncio
async def test_list_routes(test_client, seeded_routes):
    response = await test_client.get("/api/routes")
    assert response.status_code == 200
    routes = response.json()
    assert [route["to_city"] for route in routes] == ["Digha", "Mandarmani", "Kharagpur", "Durgapur"]
    assert routes[0]["distance_km"] == 185
    assert routes[0]["sedan_price"] == 2200



@pytest.mark.asyncio
async def test_list_routes_static_source_skips_database(test_client, test_session, monkeypatch):
    from cab_booking.core.config import settings

    async def failing_execute(*args, **kwargs):
        raise OperationalError("SELECT routes", {}, Exception("connection refused"))

    monkeypatch.setattr(settings, "fare_source", "static")
    monkeypatch.setattr(test_session, "execute", failing_execute)

    response = await test_client.get("/api/routes")
    assert response.status_code == 200
    routes = response.json()
    assert [route["to_city"] for route in routes] == ["Digha", "Mandarmani", "Kharagpur", "Durgapur"]
    assert routes[0]["sedan_price"] is None


@pytest.mark.asyncio
async def test_list_routes_table_failure(test_client, test_session, monkeypatch):
    async def failing_execute(*args, **kwargs):
        raise OperationalError("SELECT routes", {}, Exception("connection refused"))

    monkeypatch.setattr(test_session, "execute", failing_execute)

    response = await test_client.get("/api/routes")
    assert response.status_code == 500
    assert response.json()["title"] == "Storage Error"
