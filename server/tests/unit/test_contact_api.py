"""API tests for the contact form endpoint."""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from cab_booking.models import ContactMessage


@pytest.mark.asyncio
async def test_submit_contact(test_client, test_session, sample_contact_data):
    response = await test_client.post("/api/contact", json=sample_contact_data)

    assert response.status_code == 201
    assert response.json() == {
        "success": True,
        "message": "Message sent successfully! We will respond promptly."
    }

    result = await test_session.execute(select(ContactMessage))
    stored = result.scalars().all()
    assert len(stored) == 1
    assert stored[0].subject == "Airport pickup"
    assert stored[0].created_at is not None


@pytest.mark.asyncio
async def test_duplicate_contact_stored_twice(test_client, test_session, sample_contact_data):
    await test_client.post("/api/contact", json=sample_contact_data)
    await test_client.post("/api/contact", json=sample_contact_data)

    result = await test_session.execute(select(ContactMessage))
    assert len(result.scalars().all()) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["name", "email", "phone", "subject", "message"])
async def test_missing_field_rejected(test_client, sample_contact_data, missing):
    del sample_contact_data[missing]
    response = await test_client.post("/api/contact", json=sample_contact_data)

    assert response.status_code == 422
    data = response.json()
    assert data["title"] == "Validation Error"
    assert any(v["path"] == missing for v in data["violations"])


@pytest.mark.asyncio
async def test_blank_message_rejected(test_client, sample_contact_data):
    sample_contact_data["message"] = "   "
    response = await test_client.post("/api/contact", json=sample_contact_data)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_store_failure_returns_failure_message(test_client, test_session, sample_contact_data, monkeypatch):
    async def failing_commit():
        raise OperationalError("INSERT INTO contacts", {}, Exception("disk full"))

    monkeypatch.setattr(test_session, "commit", failing_commit)

    response = await test_client.post("/api/contact", json=sample_contact_data)
    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "message": "Failed to send message. Please try again."
    }
