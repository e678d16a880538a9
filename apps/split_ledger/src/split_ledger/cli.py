"""CLI bootstrap for split-ledger."""

import json
from decimal import Decimal, InvalidOperation
from pathlib import Path

import typer
import uvicorn

from split_ledger.domain.balances import ExpenseRecord, compute_balances
from split_ledger.domain.debt_simplifier import simplify_debts
from split_ledger.domain.money import distribute_evenly, format_money
from split_ledger.domain.value_objects import (
    Contribution,
    payer_shape,
    resolve_payers,
)

app = typer.Typer(help="CLI for shared expense balances and settlements.")
INPUT_FILE_OPTION = typer.Option(..., exists=True, dir_okay=False)
USER_IDS_ARGUMENT = typer.Argument(..., help="Participants, last one absorbs rounding.")
HOST_OPTION = typer.Option("127.0.0.1", help="Interface the API binds to.")
PORT_OPTION = typer.Option(8000, min=1, max=65535)


def _contributions(items: object) -> list[Contribution]:
    if not isinstance(items, list):
        return []
    return [
        Contribution(user_id=str(item["user_id"]), amount=Decimal(str(item["amount"])))
        for item in items
    ]


def _load_expenses(payload: list[dict[str, object]]) -> list[ExpenseRecord]:
    records: list[ExpenseRecord] = []
    for index, item in enumerate(payload):
        amount = Decimal(str(item["amount"]))
        paid_by = item.get("paid_by")
        shape = payer_shape(
            paid_by=str(paid_by) if paid_by else None,
            payers=_contributions(item.get("payers")),
        )
        records.append(
            ExpenseRecord(
                id=str(item.get("id", index + 1)),
                group_id=str(item.get("group_id", "")),
                amount=amount,
                date=None,
                payers=resolve_payers(shape, amount),
                splits=tuple(_contributions(item.get("splits"))),
            )
        )
    return records


@app.command("healthcheck")
def healthcheck() -> None:
    """Verify that the CLI entrypoint is available."""
    typer.echo("split-ledger is ready")


@app.command("serve")
def serve(host: str = HOST_OPTION, port: int = PORT_OPTION) -> None:
    """Run the HTTP API with uvicorn."""
    uvicorn.run(
        "split_ledger.api.app:create_app",
        factory=True,
        host=host,
        port=port,
    )


@app.command("simplify")
def simplify(input: Path = INPUT_FILE_OPTION) -> None:
    """Print balances and settlements for expenses in a JSON file."""
    try:
        payload = json.loads(input.read_text(encoding="utf-8"))
        expenses = payload["expenses"] if isinstance(payload, dict) else payload
        records = _load_expenses(expenses)
    except (KeyError, TypeError, ValueError, InvalidOperation) as exc:
        raise typer.BadParameter(
            f"Malformed expense file: {exc!r}", param_hint="--input"
        ) from exc
    balances = compute_balances(records)
    settlements = simplify_debts(balances)

    typer.echo("Balances:")
    for user_id, balance in balances.items():
        typer.echo(f"  {user_id}: {format_money(balance)}")
    typer.echo("Settlements:")
    if not settlements:
        typer.echo("  nothing to settle")
    for settlement in settlements:
        typer.echo(
            f"  {settlement.payer_id} pays {settlement.payee_id}: "
            f"{format_money(settlement.amount)}"
        )


@app.command("distribute")
def distribute(total: str, user_ids: list[str] = USER_IDS_ARGUMENT) -> None:
    """Split TOTAL evenly among USER_IDS."""
    try:
        amount = Decimal(total)
    except InvalidOperation as exc:
        raise typer.BadParameter("TOTAL must be a decimal number.") from exc
    for split in distribute_evenly(user_ids, amount):
        typer.echo(f"{split.user_id}: {format_money(split.amount)}")


def main() -> None:
    """Run the split-ledger CLI application."""
    app()


if __name__ == "__main__":
    main()
