"""Initial schema for the stock price alert service.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

Creates the core tables:
- users: account records carrying email preferences
- stock_alerts: one-shot price movement alerts
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create initial database schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=True),
        sa.Column("email_unsubscribed", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("daily_news_enabled", sa.Boolean(), nullable=False, server_default="true"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "stock_alerts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("symbol", sa.String(length=20), nullable=False),
        sa.Column(
            "direction",
            sa.Enum("UP", "DOWN", name="alertdirection"),
            nullable=False,
        ),
        sa.Column("threshold_percent", sa.Numeric(precision=6, scale=2), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_notified_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "threshold_percent >= 0.1 AND threshold_percent <= 100",
            name="ck_stock_alerts_threshold_range",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_stock_alerts_user_id", "stock_alerts", ["user_id"])
    op.create_index("ix_stock_alerts_active_symbol", "stock_alerts", ["active", "symbol"])
    op.create_index(
        "ux_stock_alerts_user_symbol_direction_threshold",
        "stock_alerts",
        ["user_id", "symbol", "direction", "threshold_percent"],
        unique=True,
    )


def downgrade() -> None:
    """Drop all tables and enums."""
    op.drop_table("stock_alerts")
    op.drop_table("users")

    op.execute("DROP TYPE IF EXISTS alertdirection")
