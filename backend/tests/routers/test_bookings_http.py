from typing import AsyncIterator

import pytest
from app.config import Settings
from app.deps import get_session
from app.main import create_app
from app.routers import bookings as bookings_router
from fastapi.testclient import TestClient

BOOKING = {"date": "20240115", "start_time": "9", "title": "Standup", "content": "Daily sync"}


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch, memory_repo, dummy_session) -> TestClient:
    app = create_app(Settings())

    async def override_get_session() -> AsyncIterator[object]:
        yield dummy_session

    app.dependency_overrides[get_session] = override_get_session
    monkeypatch.setattr(bookings_router, "SqlAlchemyReservationRepository", lambda s: memory_repo)
    return TestClient(app)


def test_created_booking_shows_up_in_list(client: TestClient) -> None:
    res = client.post("/booking", json=BOOKING)
    assert res.status_code == 201
    assert res.json() == BOOKING

    listed = client.get("/booking/list/20240120")
    assert listed.status_code == 200
    assert listed.json() == {"20240115": {"9": {"title": "Standup", "content": "Daily sync"}}}


def test_same_slot_twice_conflicts(client: TestClient) -> None:
    assert client.post("/booking", json=BOOKING).status_code == 201
    res = client.post("/booking", json={**BOOKING, "title": "Other"})
    assert res.status_code == 409
    assert res.json()["detail"]["code"] == "slot_taken"


def test_lost_race_conflicts(client: TestClient, memory_repo) -> None:
    assert client.post("/booking", json=BOOKING).status_code == 201
    memory_repo.hide_existing = True
    res = client.post("/booking", json=BOOKING)
    assert res.status_code == 409
    assert len(memory_repo.rows) == 1


def test_seven_digit_date_is_rejected(client: TestClient) -> None:
    res = client.post("/booking", json={**BOOKING, "date": "2024131"})
    assert res.status_code == 400
    assert res.json()["detail"]["code"] == "invalid_format"
    assert res.json()["detail"]["field"] == "date"


def test_three_digit_hour_is_rejected(client: TestClient) -> None:
    res = client.post("/booking", json={**BOOKING, "start_time": "123"})
    assert res.status_code == 400
    assert res.json()["detail"]["field"] == "start_time"


def test_missing_content_is_listed(client: TestClient) -> None:
    body = {k: v for k, v in BOOKING.items() if k != "content"}
    res = client.post("/booking", json=body)
    assert res.status_code == 400
    assert res.json()["detail"]["code"] == "missing_fields"
    assert res.json()["detail"]["fields"] == ["content"]


def test_empty_body_lists_every_field(client: TestClient) -> None:
    res = client.post("/booking")
    assert res.status_code == 400
    assert res.json()["detail"]["fields"] == ["date", "start_time", "title", "content"]


def test_numeric_hour_is_accepted_as_text(client: TestClient) -> None:
    res = client.post("/booking", json={**BOOKING, "start_time": 9})
    assert res.status_code == 201
    assert res.json()["start_time"] == "9"


@pytest.mark.parametrize("body", [[1, 2], {**BOOKING, "title": ["x"]}])
def test_malformed_body_is_400(client: TestClient, body: object) -> None:
    res = client.post("/booking", json=body)
    assert res.status_code == 400
    assert res.json()["detail"]["code"] == "invalid_request"


def test_list_with_no_reservations_is_empty_object(client: TestClient) -> None:
    res = client.get("/booking/list/20240115")
    assert res.status_code == 200
    assert res.json() == {}


def test_list_rejects_malformed_date(client: TestClient) -> None:
    res = client.get("/booking/list/20241340")
    assert res.status_code == 400
    assert res.json()["detail"]["code"] == "invalid_date"


def test_health(client: TestClient) -> None:
    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.json()["status"] == "ok"
    assert res.json()["message"]


def test_responses_carry_request_id(client: TestClient) -> None:
    res = client.get("/api/health", headers={"X-Request-ID": "req-42"})
    assert res.headers["X-Request-ID"] == "req-42"
