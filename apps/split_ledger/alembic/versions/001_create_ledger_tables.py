"""Create expense and settlement ledger tables."""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "001_create_ledger_tables"
down_revision = None
branch_labels = None
depends_on = None


settlement_status_enum = postgresql.ENUM(
    "pending", "completed", name="settlement_status", create_type=False
)


def upgrade() -> None:
    """Apply schema upgrades."""
    bind = op.get_bind()
    settlement_status_enum.create(bind, checkfirst=True)

    op.create_table(
        "expenses",
        sa.Column(
            "id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False
        ),
        sa.Column("group_id", sa.String(length=64), nullable=False),
        sa.Column("description", sa.String(length=200), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("paid_by", sa.String(length=64), nullable=False),
        sa.Column("expense_date", sa.Date(), nullable=False),
        sa.Column("category", sa.String(length=64), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("deleted_by", sa.String(length=64), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint("amount > 0", name="ck_expenses_amount_positive"),
    )
    op.create_index(
        "ix_expenses_group_id_is_deleted",
        "expenses",
        ["group_id", "is_deleted"],
        unique=False,
    )

    for table_name, prefix in (
        ("expense_payers", "expense_payers"),
        ("expense_splits", "expense_splits"),
    ):
        op.create_table(
            table_name,
            sa.Column(
                "id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False
            ),
            sa.Column("expense_id", postgresql.UUID(as_uuid=True), nullable=False),
            sa.Column("user_id", sa.String(length=64), nullable=False),
            sa.Column("amount", sa.Numeric(12, 2), nullable=False),
            sa.Column("position", sa.Integer(), nullable=False),
            sa.CheckConstraint("amount > 0", name=f"ck_{prefix}_amount_positive"),
            sa.ForeignKeyConstraint(
                ["expense_id"],
                ["expenses.id"],
                name=f"fk_{prefix}_expense_id",
                ondelete="CASCADE",
            ),
            sa.UniqueConstraint("expense_id", "user_id", name=f"uq_{prefix}_user"),
        )

    op.create_table(
        "settlement_transactions",
        sa.Column(
            "id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False
        ),
        sa.Column("group_id", sa.String(length=64), nullable=False),
        sa.Column("payer_id", sa.String(length=64), nullable=False),
        sa.Column("payee_id", sa.String(length=64), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("status", settlement_status_enum, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "amount > 0", name="ck_settlement_transactions_amount_positive"
        ),
        sa.CheckConstraint(
            "payer_id <> payee_id",
            name="ck_settlement_transactions_distinct_parties",
        ),
    )
    op.create_index(
        "ix_settlement_transactions_group_status",
        "settlement_transactions",
        ["group_id", "status"],
        unique=False,
    )


def downgrade() -> None:
    """Revert schema upgrades."""
    op.drop_index(
        "ix_settlement_transactions_group_status",
        table_name="settlement_transactions",
    )
    op.drop_table("settlement_transactions")
    op.drop_table("expense_splits")
    op.drop_table("expense_payers")
    op.drop_index("ix_expenses_group_id_is_deleted", table_name="expenses")
    op.drop_table("expenses")

    bind = op.get_bind()
    settlement_status_enum.drop(bind, checkfirst=True)
