from __future__ import annotations

from fastapi.testclient import TestClient


def test_distribute_splits_total_evenly(client: TestClient) -> None:
    response = client.post(
        "/v1/splits/distribute",
        json={"participant_ids": ["u1", "u2", "u3"], "total": "10.00"},
    )

    assert response.status_code == 200
    assert response.json() == {
        "total": "10.00",
        "splits": [
            {"user_id": "u1", "amount": "3.33"},
            {"user_id": "u2", "amount": "3.33"},
            {"user_id": "u3", "amount": "3.34"},
        ],
    }


def test_distribute_requires_participants(client: TestClient) -> None:
    response = client.post(
        "/v1/splits/distribute", json={"participant_ids": [], "total": "10.00"}
    )

    assert response.status_code == 400


def test_validate_expense_draft_lists_all_problems(client: TestClient) -> None:
    response = client.post(
        "/v1/validations/expense",
        json={
            "description": "",
            "amount": -100,
            "splits": [
                {"user_id": "u1", "amount": 50},
                {"user_id": "u2", "amount": 40},
            ],
        },
    )

    body = response.json()
    messages = [error["message"] for error in body["errors"]]
    assert response.status_code == 200
    assert body["valid"] is False
    assert "Description is required" in messages
    assert "Amount must be greater than 0" in messages
    assert "Splits total (90.00) must equal expense amount (-100.00)" in messages


def test_validate_settlement_draft_accepts_valid_payment(client: TestClient) -> None:
    response = client.post(
        "/v1/validations/settlement",
        json={"payer_id": "bob", "payee_id": "alice", "amount": "60.00"},
    )

    assert response.json() == {"valid": True, "errors": []}
