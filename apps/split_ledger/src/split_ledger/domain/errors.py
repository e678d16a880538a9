"""Domain exceptions used across API and services."""

from __future__ import annotations

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any


def compose_error_message(*, cause: str, action: str) -> str:
    """Build a user-facing error message with cause and corrective action."""

    return f"Cause: {cause} Action: {action}"


@dataclass(slots=True)
class DomainError(Exception):
    """Base exception for predictable domain failures."""

    code: str
    message: str
    status_code: int
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


class InvalidRequestError(DomainError):
    """Raised when user sends semantically invalid input."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="INVALID_REQUEST",
            message=message
            or compose_error_message(
                cause="Request data violates business rules.",
                action="Adjust the input fields and try again.",
            ),
            status_code=HTTPStatus.BAD_REQUEST,
            details=details or {},
        )


class InvalidSettlementError(DomainError):
    """Raised when a settlement is rejected before reaching persistence."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="INVALID_SETTLEMENT",
            message=message
            or compose_error_message(
                cause="Settlement data is not acceptable.",
                action="Use a positive amount between two different members.",
            ),
            status_code=HTTPStatus.BAD_REQUEST,
            details=details or {},
        )


class ExpenseNotFoundError(DomainError):
    """Raised when an expense cannot be resolved inside its group."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="EXPENSE_NOT_FOUND",
            message=message
            or compose_error_message(
                cause="Expense was not found in this group.",
                action="Check the expense and group identifiers.",
            ),
            status_code=HTTPStatus.NOT_FOUND,
            details=details or {},
        )


class DuplicateSettlementError(DomainError):
    """Raised when an identical completed settlement is already recorded."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="DUPLICATE_SETTLEMENT",
            message=message
            or compose_error_message(
                cause="An identical settlement was already recorded.",
                action="Refresh the group debts before recording again.",
            ),
            status_code=HTTPStatus.CONFLICT,
            details=details or {},
        )


class RestoreWindowExpiredError(DomainError):
    """Raised when a soft-deleted expense is older than the restore window."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="RESTORE_WINDOW_EXPIRED",
            message=message
            or compose_error_message(
                cause="The restore window for this expense has expired.",
                action="Create the expense again instead of restoring it.",
            ),
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            details=details or {},
        )


class PersistenceError(DomainError):
    """Raised when storage fails while writing ledger data."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="PERSISTENCE_ERROR",
            message=message
            or compose_error_message(
                cause="The ledger storage rejected or failed the write.",
                action="Retry the operation later.",
            ),
            status_code=HTTPStatus.SERVICE_UNAVAILABLE,
            details=details or {},
        )
