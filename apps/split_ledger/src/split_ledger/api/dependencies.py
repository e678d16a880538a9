"""API dependency providers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from split_ledger.core.settings import get_settings
from split_ledger.db.session import get_db_session
from split_ledger.repositories.expense_repository import ExpenseRepository
from split_ledger.repositories.settlement_repository import SettlementRepository
from split_ledger.services.expense_service import ExpenseService
from split_ledger.services.group_debts_service import GroupDebtsService
from split_ledger.services.settlement_service import SettlementRecorder


def get_expense_service(
    session: Annotated[Session, Depends(get_db_session)],
) -> ExpenseService:
    """Build expense service with per-request session."""

    return ExpenseService(
        expense_repository=ExpenseRepository(session),
        session=session,
        restore_window_hours=get_settings().restore_window_hours,
    )


def get_group_debts_service(
    session: Annotated[Session, Depends(get_db_session)],
) -> GroupDebtsService:
    """Build group debts service reading the expense ledger."""

    return GroupDebtsService(expense_repository=ExpenseRepository(session))


def get_settlement_recorder(
    session: Annotated[Session, Depends(get_db_session)],
) -> SettlementRecorder:
    """Build settlement recorder with per-request session."""

    return SettlementRecorder(
        settlement_repository=SettlementRepository(session),
        session=session,
        reject_duplicates=get_settings().settlement_reject_duplicates,
    )
