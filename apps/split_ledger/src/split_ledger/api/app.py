"""FastAPI app bootstrap for split_ledger."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from split_ledger.api.error_handlers import register_error_handlers
from split_ledger.api.routes import v1_router
from split_ledger.db.session import get_db_session

logger = logging.getLogger(__name__)

OPENAPI_TAGS = [
    {"name": "Expenses", "description": "Shared expenses with payers and splits."},
    {"name": "Debts", "description": "Net balances and simplified transfers."},
    {"name": "Settlements", "description": "Append-only record of payments."},
    {"name": "Tools", "description": "Stateless split and validation helpers."},
]


def create_app() -> FastAPI:
    """Create and configure FastAPI application instance."""

    app = FastAPI(
        title="Split Ledger API",
        version="0.1.0",
        description="Balance netting and settlement of shared group expenses.",
        openapi_tags=OPENAPI_TAGS,
    )

    @app.get("/health/live", include_in_schema=False)
    def health_live() -> dict[str, str]:
        return {"status": "alive"}

    @app.get("/health/ready", include_in_schema=False)
    def health_ready(
        db_session: Annotated[Session, Depends(get_db_session)],
    ) -> dict[str, str]:
        try:
            db_session.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.warning("readiness_check_failed", extra={"error": str(exc)})
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Ledger database is unavailable",
            ) from exc
        return {"status": "ready"}

    register_error_handlers(app)
    app.include_router(v1_router)
    return app


app = create_app()
