"""API v1 router registration."""

from fastapi import APIRouter

from split_ledger.api.routes import debts, expenses, settlements, tools

v1_router = APIRouter(prefix="/v1")
v1_router.include_router(expenses.router)
v1_router.include_router(debts.router)
v1_router.include_router(settlements.router)
v1_router.include_router(tools.router)
