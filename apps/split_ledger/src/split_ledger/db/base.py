"""SQLAlchemy base metadata and model registration utilities."""

from importlib import import_module

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

ORM_MODEL_MODULES = (
    "split_ledger.db.models.expense",
    "split_ledger.db.models.settlement_transaction",
)


class Base(DeclarativeBase):
    """Base class for ledger ORM models."""

    metadata = MetaData(
        naming_convention={"fk": "fk_%(table_name)s_%(column_0_name)s"},
    )


def import_orm_models() -> None:
    """Import ORM models so metadata is fully populated."""

    for module_name in ORM_MODEL_MODULES:
        import_module(module_name)
