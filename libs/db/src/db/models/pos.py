from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    Text,
    UniqueConstraint,
    func,
    text,
    true,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


# ---------------------------
# Reference: pos_catalog_items
# ---------------------------


class PosCatalogItem(Base):
    __tablename__ = "pos_catalog_items"

    # Catalog identifiers are assigned upstream (barcode/PLU style); never autoincrement.
    identifier: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    # Fraction, e.g. 0.0600 for 6 %.
    tax_rate: Mapped[Decimal] = mapped_column(Numeric(5, 4), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=true())
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        CheckConstraint("unit_price >= 0", name="ck_pos_catalog_items_price_nonneg"),
        CheckConstraint(
            "tax_rate >= 0 AND tax_rate <= 1", name="ck_pos_catalog_items_tax_rate_range"
        ),
    )


# ---------------------------
# Sales log: pos_sales / pos_sale_lines
# ---------------------------


class PosSale(Base):
    __tablename__ = "pos_sales"

    # Integer (not BigInteger) so SQLite maps it onto rowid autoincrement.
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    customer_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
    tax: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
    discount: Mapped[Decimal] = mapped_column(
        Numeric(18, 6), nullable=False, server_default=text("0")
    )
    grand_total: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
    amount_tendered: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
    change_due: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
    recorded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        CheckConstraint("grand_total >= 0", name="ck_pos_sales_grand_total_nonneg"),
    )


class PosSaleLine(Base):
    __tablename__ = "pos_sale_lines"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sale_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("pos_sales.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Order in which the line was first scanned (receipt order).
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    identifier: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    tax_rate: Mapped[Decimal] = mapped_column(Numeric(5, 4), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("sale_id", "identifier", name="uq_pos_sale_lines_sale_identifier"),
        CheckConstraint("quantity >= 1", name="ck_pos_sale_lines_quantity_positive"),
    )
