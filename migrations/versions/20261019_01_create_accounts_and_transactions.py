"""create accounts and transactions tables

Revision ID: 3f9c2a7d1b04
Revises: 
Create Date: 2026-10-19 09:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f9c2a7d1b04"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("account_number", sa.String(length=20), nullable=False, unique=True),
        sa.Column("account_name", sa.String(length=100), nullable=False),
        sa.Column("balance", sa.String(length=40), nullable=False, server_default="0.00000000"),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="ACTIVE"),
        sa.Column("deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime()),
    )
    op.create_index(
        "accounts_idx_number_created_status",
        "accounts",
        ["account_number", "created_at", "status"],
    )

    op.create_table(
        "transactions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("reference", sa.String(length=64), nullable=False, unique=True),
        sa.Column("amount", sa.String(length=40), nullable=False),
        sa.Column("fee", sa.String(length=40), nullable=False),
        sa.Column("billed_amount", sa.String(length=40), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("status_message", sa.String(length=255)),
        sa.Column("commission_worthy", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("commission", sa.String(length=40)),
        sa.Column("source_account_number", sa.String(length=20), nullable=False),
        sa.Column("destination_account_number", sa.String(length=20), nullable=False),
        sa.Column("deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index(
        "transactions_idx_reference_amount_created_status",
        "transactions",
        ["reference", "amount", "created_at", "status"],
    )
    op.create_index(
        "transactions_idx_source_destination",
        "transactions",
        ["source_account_number", "destination_account_number"],
    )


def downgrade() -> None:
    op.drop_index("transactions_idx_source_destination", table_name="transactions")
    op.drop_index("transactions_idx_reference_amount_created_status", table_name="transactions")
    op.drop_table("transactions")
    op.drop_index("accounts_idx_number_created_status", table_name="accounts")
    op.drop_table("accounts")
