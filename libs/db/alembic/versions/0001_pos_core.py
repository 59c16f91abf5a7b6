# ruff: noqa: I001
"""Point-of-sale catalog and sales log tables.

Revision ID: 0001_pos_core
Revises: None
Create Date: 2026-10-19
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "0001_pos_core"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "pos_catalog_items",
        sa.Column("identifier", sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("unit_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("tax_rate", sa.Numeric(5, 4), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
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
        sa.CheckConstraint("unit_price >= 0", name="ck_pos_catalog_items_price_nonneg"),
        sa.CheckConstraint(
            "tax_rate >= 0 AND tax_rate <= 1", name="ck_pos_catalog_items_tax_rate_range"
        ),
    )

    op.create_table(
        "pos_sales",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("customer_id", sa.Integer(), nullable=True),
        sa.Column("subtotal", sa.Numeric(18, 6), nullable=False),
        sa.Column("tax", sa.Numeric(18, 6), nullable=False),
        sa.Column("discount", sa.Numeric(18, 6), nullable=False, server_default=sa.text("0")),
        sa.Column("grand_total", sa.Numeric(18, 6), nullable=False),
        sa.Column("amount_tendered", sa.Numeric(18, 6), nullable=False),
        sa.Column("change_due", sa.Numeric(18, 6), nullable=False),
        sa.Column(
            "recorded_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint("grand_total >= 0", name="ck_pos_sales_grand_total_nonneg"),
    )

    op.create_table(
        "pos_sale_lines",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "sale_id",
            sa.Integer(),
            sa.ForeignKey("pos_sales.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("identifier", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("unit_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("tax_rate", sa.Numeric(5, 4), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.UniqueConstraint("sale_id", "identifier", name="uq_pos_sale_lines_sale_identifier"),
        sa.CheckConstraint("quantity >= 1", name="ck_pos_sale_lines_quantity_positive"),
    )
    op.create_index("ix_pos_sale_lines_sale_id", "pos_sale_lines", ["sale_id"])


def downgrade() -> None:
    op.drop_index("ix_pos_sale_lines_sale_id", table_name="pos_sale_lines")
    op.drop_table("pos_sale_lines")
    op.drop_table("pos_sales")
    op.drop_table("pos_catalog_items")
