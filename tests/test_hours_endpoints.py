"""Tests for month record endpoints."""

import pytest
from fastapi.testclient import TestClient

from overtime_tracker.api.app import create_app
from overtime_tracker.services.hours import current_month


@pytest.fixture
def client(container) -> TestClient:
    return TestClient(create_app(container))


def _payload() -> dict[str, object]:
    return {
        "salary": 3200,
        "days": [
            {
                "date": "2026-01-16",
                "startTime": "20:00",
                "endTime": "06:00",
                "projectWorked": "Alpha",
                "calculationModelId": "default-standard",
            },
            {
                "date": "2026-01-14",
                "startTime": "10:00",
                "endTime": "15:00",
                "calculationModelId": "default-100",
            },
        ],
    }


def test_root_and_health(client: TestClient) -> None:
    assert client.get("/").json() == {"online": True, "app": "overtime-tracker"}
    assert client.get("/health").json() == {"status": "ok"}


def test_hours_require_token(client: TestClient) -> None:
    response = client.get("/hours")

    assert response.status_code == 401
    assert response.json()["detail"] == "Token not provided."


def test_hours_reject_invalid_token(client: TestClient) -> None:
    response = client.get("/hours", headers={"Authorization": "Bearer nope"})

    assert response.status_code == 401


def test_get_hours_without_record(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    response = client.get("/hours?month=2026-01", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"salary": 0.0, "month": "2026-01", "days": []}


def test_get_hours_defaults_to_current_month(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    response = client.get("/hours?month=garbage", headers=auth_headers)

    assert response.json()["month"] == current_month()


def test_save_hours_requires_valid_month(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    response = client.put("/hours?month=2026-1", json=_payload(), headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid month. Use YYYY-MM."


def test_save_hours_validates_body(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    payload = _payload()
    payload["days"][0]["startTime"] = "8:00"  # type: ignore[index]

    response = client.put("/hours?month=2026-01", json=payload, headers=auth_headers)

    assert response.status_code == 422


def test_save_hours_rejects_negative_salary(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    response = client.put(
        "/hours?month=2026-01",
        json={"salary": -1, "days": []},
        headers=auth_headers,
    )

    assert response.status_code == 422


def test_save_and_read_hours(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    saved = client.put("/hours?month=2026-01", json=_payload(), headers=auth_headers)
    fetched = client.get("/hours?month=2026-01", headers=auth_headers)

    assert saved.json() == {"message": "Hours saved."}
    data = fetched.json()
    assert data["salary"] == 3200.0
    assert [day["date"] for day in data["days"]] == ["2026-01-14", "2026-01-16"]
    assert data["days"][1]["projectWorked"] == "Alpha"
    assert data["days"][1]["calculationModelId"] == "default-standard"
    assert data["days"][0]["id"]


def test_summary(client: TestClient, auth_headers: dict[str, str]) -> None:
    client.put("/hours?month=2026-01", json=_payload(), headers=auth_headers)

    response = client.get("/hours/summary?month=2026-01", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["month"] == "2026-01"
    assert data["totals"]["totalHours"] == 15.0
    assert data["totals"]["totalValue"] == pytest.approx(380.0 + 200.0)
    assert data["dayHours"] == [
        {"label": "2026-01-14", "hours": 5.0},
        {"label": "2026-01-16", "hours": 10.0},
    ]
    assert [item["label"] for item in data["projectHours"]] == ["Alpha", "No project"]
    assert data["projectSummary"][0]["totalValue"] == pytest.approx(380.0)
    assert data["averageDailyHours"] == 7.5
    assert data["workedDaysCount"] == 2


def test_summary_is_scoped_to_user(
    client: TestClient, container, auth_headers: dict[str, str]
) -> None:
    client.put("/hours?month=2026-01", json=_payload(), headers=auth_headers)
    container.auth_service.register("Bruno Lima", "bruno@example.com", "secret2")
    tokens = container.auth_service.login("bruno@example.com", "secret2")

    response = client.get(
        "/hours/summary?month=2026-01",
        headers={"Authorization": f"Bearer {tokens.token}"},
    )

    assert response.json()["totals"] == {"totalHours": 0.0, "totalValue": 0.0}


def test_month_with_trailing_newline_is_rejected(
    client: TestClient, auth_headers: dict[str, str]
) -> None:
    saved = client.put("/hours?month=2026-01%0A", json=_payload(), headers=auth_headers)
    fetched = client.get("/hours?month=2026-01%0A", headers=auth_headers)

    assert saved.status_code == 400
    assert fetched.json()["month"] == current_month()
