"""SQLAlchemy engine and session factory definitions."""

from collections.abc import Generator
from functools import lru_cache

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from split_ledger.core.settings import get_settings


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Build the process-wide engine on first use."""

    return create_engine(get_settings().database_url, pool_pre_ping=True)


@lru_cache(maxsize=1)
def get_session_factory() -> sessionmaker[Session]:
    return sessionmaker(
        bind=get_engine(),
        class_=Session,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
    )


def get_db_session() -> Generator[Session, None, None]:
    """Yield a database session per request lifecycle."""

    with get_session_factory()() as session:
        yield session
