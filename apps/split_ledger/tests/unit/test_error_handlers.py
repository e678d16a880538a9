from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

from split_ledger.api.error_handlers import register_error_handlers
from split_ledger.domain.errors import DuplicateSettlementError, PersistenceError


def _client_raising(exc: Exception) -> TestClient:
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/boom")
    def boom() -> None:
        raise exc

    return TestClient(app, raise_server_exceptions=False)


def test_domain_error_handler_returns_contract_shape() -> None:
    response = _client_raising(
        DuplicateSettlementError(message="Duplicated settlement")
    ).get("/boom")

    assert response.status_code == 409
    assert response.json() == {
        "code": "DUPLICATE_SETTLEMENT",
        "message": "Duplicated settlement",
    }


def test_persistence_error_maps_to_service_unavailable() -> None:
    response = _client_raising(
        PersistenceError(message="Failed to record settlement: timeout")
    ).get("/boom")

    assert response.status_code == 503
    assert response.json()["code"] == "PERSISTENCE_ERROR"


def test_integrity_error_reports_violated_constraint() -> None:
    response = _client_raising(
        IntegrityError(
            "INSERT",
            {},
            Exception("CHECK constraint failed: ck_settlement_transactions_amount"),
        )
    ).get("/boom")

    assert response.status_code == 422
    assert response.json()["details"] == {"constraint": "settlement_transactions"}


def test_unexpected_error_hides_internals() -> None:
    response = _client_raising(RuntimeError("secret")).get("/boom")

    body = response.json()
    assert response.status_code == 500
    assert body["code"] == "INTERNAL_SERVER_ERROR"
    assert "secret" not in body["message"]
    assert body["details"] == {"error_type": "RuntimeError"}
