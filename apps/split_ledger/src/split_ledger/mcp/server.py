"""MCP server exposing split-ledger API capabilities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal, Protocol

import httpx
from fastmcp import FastMCP

from split_ledger.core.settings import get_settings

SettlementStatusFilter = Literal["pending", "completed"]
ParamValue = str | int | float | bool | None
ParamsMapping = Mapping[str, ParamValue]


class APIRequester(Protocol):
    """Requester abstraction to simplify HTTP boundary testing."""

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: ParamsMapping | None = None,
        json_body: Mapping[str, object] | None = None,
    ) -> object: ...


@dataclass(slots=True, frozen=True)
class HTTPAPIRequester:
    """HTTP client wrapper for the split-ledger API."""

    base_url: str
    timeout_seconds: float

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: ParamsMapping | None = None,
        json_body: Mapping[str, object] | None = None,
    ) -> object:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout_seconds,
        ) as client:
            response = await client.request(
                method=method,
                url=path,
                params=params,
                json=dict(json_body) if json_body else None,
            )

        if response.is_success:
            return _parse_json_response(response)
        raise RuntimeError(_build_api_error(response))


def _parse_json_response(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError as exc:
        raise RuntimeError(
            f"API returned a non-JSON response with status {response.status_code}."
        ) from exc


def _build_api_error(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        text = response.text.strip()
        if text:
            return f"API request failed with status {response.status_code}: {text}"
        return f"API request failed with status {response.status_code}."

    if isinstance(payload, Mapping):
        error_code = payload.get("code")
        error_message = payload.get("message")
        details = payload.get("details")
        if isinstance(error_code, str) and isinstance(error_message, str):
            if details is None:
                return f"API error {error_code}: {error_message}"
            return f"API error {error_code}: {error_message} | details={details}"

    return f"API request failed with status {response.status_code}: {payload}"


def _normalize_base_url(value: str) -> str:
    return value.rstrip("/")


def _group_path(group_id: str, suffix: str) -> str:
    group_id = group_id.strip()
    if not group_id:
        raise ValueError("group_id must not be empty.")
    return f"/v1/groups/{group_id}/{suffix}"


def create_mcp_server(
    *,
    api_base_url: str | None = None,
    timeout_seconds: float | None = None,
    requester: APIRequester | None = None,
) -> FastMCP:
    """Create MCP server with curated tools mapped to REST endpoints."""

    settings = get_settings()
    resolved_base_url = _normalize_base_url(api_base_url or settings.mcp_api_base_url)
    resolved_timeout = (
        settings.mcp_api_timeout_seconds if timeout_seconds is None else timeout_seconds
    )
    if resolved_timeout <= 0:
        raise ValueError("MCP API timeout must be greater than zero.")

    mcp = FastMCP(name="Split Ledger")
    api_requester: APIRequester = requester or HTTPAPIRequester(
        base_url=resolved_base_url,
        timeout_seconds=resolved_timeout,
    )

    @mcp.tool
    async def list_expenses(group_id: str) -> object:
        """List live expenses of a group in ledger order."""

        return await api_requester.request("GET", _group_path(group_id, "expenses"))

    @mcp.tool
    async def get_expense(group_id: str, expense_id: str) -> object:
        """Return one expense with its effective payers and splits."""

        expense_id = expense_id.strip()
        if not expense_id:
            raise ValueError("expense_id must not be empty.")
        return await api_requester.request(
            "GET", _group_path(group_id, f"expenses/{expense_id}")
        )

    @mcp.tool
    async def get_group_balances(group_id: str) -> object:
        """Return the net balance of every member of a group."""

        return await api_requester.request("GET", _group_path(group_id, "balances"))

    @mcp.tool
    async def get_group_debts(group_id: str) -> object:
        """Return balances plus the simplified transfers that settle them."""

        return await api_requester.request("GET", _group_path(group_id, "debts"))

    @mcp.tool
    async def record_settlement(
        group_id: str,
        payer_id: str,
        payee_id: str,
        amount: str,
    ) -> object:
        """Record a completed payment from payer to payee."""

        return await api_requester.request(
            "POST",
            _group_path(group_id, "settlements"),
            json_body={
                "payer_id": payer_id,
                "payee_id": payee_id,
                "amount": amount,
            },
        )

    @mcp.tool
    async def list_settlements(
        group_id: str,
        status: SettlementStatusFilter | None = None,
    ) -> object:
        """List settlements of a group, newest first."""

        params: dict[str, ParamValue] = {}
        if status is not None:
            params["status"] = status
        return await api_requester.request(
            "GET",
            _group_path(group_id, "settlements"),
            params=params if params else None,
        )

    @mcp.tool
    async def get_settlement_stats(group_id: str, user_id: str) -> object:
        """Return totals paid and received by one member through settlements."""

        return await api_requester.request(
            "GET",
            _group_path(group_id, "settlements/stats"),
            params={"user_id": user_id},
        )

    @mcp.tool
    async def distribute_evenly(participant_ids: list[str], total: str) -> object:
        """Split a total evenly; the last participant absorbs the rounding rest."""

        if not participant_ids:
            raise ValueError("participant_ids must contain at least one member.")
        return await api_requester.request(
            "POST",
            "/v1/splits/distribute",
            json_body={"participant_ids": participant_ids, "total": total},
        )

    return mcp


def main() -> None:
    """Run the split-ledger MCP server over stdio."""

    create_mcp_server().run()


if __name__ == "__main__":
    main()
