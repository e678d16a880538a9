from __future__ import annotations

from fastapi.testclient import TestClient
from httpx import Response


def _record(
    client: TestClient, payer_id: str, payee_id: str, amount: str
) -> Response:
    return client.post(
        "/v1/groups/trip/settlements",
        json={"payer_id": payer_id, "payee_id": payee_id, "amount": amount},
    )


def test_record_settlement_returns_201(client: TestClient) -> None:
    response = _record(client, "bob", "alice", "60.00")

    assert response.status_code == 201
    assert set(response.json()) == {"id"}


def test_record_settlement_rejects_same_member(client: TestClient) -> None:
    response = _record(client, "u1", "u1", "100.00")

    body = response.json()
    assert response.status_code == 400
    assert body["code"] == "INVALID_SETTLEMENT"
    assert "Payer and payee cannot be the same" in body["message"]
    assert client.get("/v1/groups/trip/settlements").json() == {"items": []}


def test_record_settlement_rejects_zero_amount(client: TestClient) -> None:
    response = _record(client, "bob", "alice", "0.00")

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_SETTLEMENT"


def test_list_settlements_and_stats(client: TestClient) -> None:
    _record(client, "bob", "alice", "60.00")
    _record(client, "charlie", "alice", "90.00")

    listing = client.get(
        "/v1/groups/trip/settlements", params={"status": "completed"}
    ).json()
    stats = client.get(
        "/v1/groups/trip/settlements/stats", params={"user_id": "alice"}
    ).json()
    pending = client.get(
        "/v1/groups/trip/settlements", params={"status": "pending"}
    ).json()

    assert len(listing["items"]) == 2
    assert {item["status"] for item in listing["items"]} == {"completed"}
    assert pending == {"items": []}
    assert stats == {
        "user_id": "alice",
        "total_paid": "0.00",
        "total_received": "150.00",
        "payment_count": 0,
    }


def test_settlement_exists_checks_amount(client: TestClient) -> None:
    _record(client, "bob", "alice", "60.00")

    matching = client.get(
        "/v1/groups/trip/settlements/exists",
        params={"payer_id": "bob", "payee_id": "alice", "amount": "60.00"},
    )
    different = client.get(
        "/v1/groups/trip/settlements/exists",
        params={"payer_id": "bob", "payee_id": "alice", "amount": "61.00"},
    )

    assert matching.json() == {"exists": True}
    assert different.json() == {"exists": False}
