from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from split_ledger.cli import app

runner = CliRunner()


def test_healthcheck_reports_ready() -> None:
    result = runner.invoke(app, ["healthcheck"])

    assert result.exit_code == 0
    assert "split-ledger is ready" in result.output


def test_distribute_prints_one_line_per_participant() -> None:
    result = runner.invoke(app, ["distribute", "10", "u1", "u2", "u3"])

    assert result.exit_code == 0
    assert result.output.splitlines() == ["u1: 3.33", "u2: 3.33", "u3: 3.34"]


def test_distribute_rejects_non_numeric_total() -> None:
    result = runner.invoke(app, ["distribute", "ten", "u1"])

    assert result.exit_code != 0


def test_simplify_prints_balances_and_settlements(tmp_path: Path) -> None:
    ledger = tmp_path / "ledger.json"
    ledger.write_text(
        json.dumps(
            {
                "expenses": [
                    {
                        "paid_by": "alice",
                        "amount": "300",
                        "splits": [
                            {"user_id": "alice", "amount": "100"},
                            {"user_id": "bob", "amount": "100"},
                            {"user_id": "charlie", "amount": "100"},
                        ],
                    },
                    {
                        "paid_by": "bob",
                        "amount": "90",
                        "splits": [
                            {"user_id": "alice", "amount": "30"},
                            {"user_id": "bob", "amount": "30"},
                            {"user_id": "charlie", "amount": "30"},
                        ],
                    },
                    {
                        "paid_by": "charlie",
                        "amount": "60",
                        "splits": [
                            {"user_id": "alice", "amount": "20"},
                            {"user_id": "bob", "amount": "20"},
                            {"user_id": "charlie", "amount": "20"},
                        ],
                    },
                ]
            }
        ),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["simplify", "--input", str(ledger)])

    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "Balances:",
        "  alice: 150.00",
        "  bob: -60.00",
        "  charlie: -90.00",
        "Settlements:",
        "  charlie pays alice: 90.00",
        "  bob pays alice: 60.00",
    ]


def test_simplify_reports_settled_group(tmp_path: Path) -> None:
    ledger = tmp_path / "ledger.json"
    ledger.write_text(
        json.dumps(
            [
                {
                    "payers": [
                        {"user_id": "alice", "amount": "50"},
                        {"user_id": "bob", "amount": "50"},
                    ],
                    "amount": "100",
                    "splits": [
                        {"user_id": "alice", "amount": "50"},
                        {"user_id": "bob", "amount": "50"},
                    ],
                }
            ]
        ),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["simplify", "--input", str(ledger)])

    assert result.exit_code == 0
    assert "  nothing to settle" in result.output.splitlines()


def test_simplify_rejects_expense_without_payer(tmp_path: Path) -> None:
    ledger = tmp_path / "ledger.json"
    ledger.write_text(
        json.dumps([{"amount": "10", "splits": [{"user_id": "a", "amount": "10"}]}]),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["simplify", "--input", str(ledger)])

    assert result.exit_code == 2
    assert isinstance(result.exception, SystemExit)


def test_simplify_rejects_expense_without_amount(tmp_path: Path) -> None:
    ledger = tmp_path / "ledger.json"
    ledger.write_text(
        json.dumps({"expenses": [{"paid_by": "alice", "splits": []}]}),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["simplify", "--input", str(ledger)])

    assert result.exit_code == 2
    assert isinstance(result.exception, SystemExit)


def test_serve_runs_api_factory_with_uvicorn(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[tuple[object, ...], dict[str, object]]] = []

    def fake_run(*args: object, **kwargs: object) -> None:
        calls.append((args, kwargs))

    monkeypatch.setattr("split_ledger.cli.uvicorn.run", fake_run)

    result = runner.invoke(app, ["serve", "--host", "0.0.0.0", "--port", "9001"])

    assert result.exit_code == 0
    assert calls == [
        (
            ("split_ledger.api.app:create_app",),
            {"factory": True, "host": "0.0.0.0", "port": 9001},
        )
    ]
