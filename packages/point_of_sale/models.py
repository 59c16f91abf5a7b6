"""Data models for ``point_of_sale``.

Money is always ``decimal.Decimal``. Values are never rounded inside the core;
rounding (if any) belongs to presentation. Snapshots handed to callers
(``SaleState``, ``PaymentRecord``, ``Receipt``) are frozen and carry tuples,
so a caller holding one cannot observe later cart mutations.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

ZERO = Decimal("0")
# Scale of the catalog columns: prices to the cent, tax rates to 0.01 %.
PRICE_QUANTUM = Decimal("0.01")
TAX_RATE_QUANTUM = Decimal("0.0001")
MAX_UNIT_PRICE = Decimal("1e10")


def to_decimal(value: Any) -> Decimal:
    """Coerce ``value`` to ``Decimal`` going through ``str`` for floats.

    ``Decimal(0.1)`` carries the binary float error; ``Decimal("0.1")`` does
    not. Booleans are rejected even though they are ints.
    """

    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or value is None:
        raise ValueError(f"not a monetary amount: {value!r}")
    if isinstance(value, (int, float, str)):
        try:
            d = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise ValueError(f"not a monetary amount: {value!r}") from e
        if d.is_finite():
            return d
    raise ValueError(f"not a monetary amount: {value!r}")


# ---------------------------------------------------------------------------
# Catalog data
# ---------------------------------------------------------------------------


class ItemData(BaseModel):
    """Catalog data for one identifier, as resolved by the inventory lookup.

    Attributes
    ----------
    identifier:
        Catalog key, unique per catalog entry.
    unit_price:
        Price of a single unit, tax excluded, to the cent.
    tax_rate:
        Tax as a fraction of the price (``Decimal("0.06")`` for 6 %), at most
        four decimal places.
    description:
        Human-readable label printed on receipts.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    identifier: int
    unit_price: Decimal
    tax_rate: Decimal
    description: str

    @field_validator("identifier")
    @classmethod
    def _identifier_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("identifier must be non-negative")
        return v

    @field_validator("unit_price", "tax_rate", mode="before")
    @classmethod
    def _coerce_decimal(cls, v: Any) -> Decimal:
        return to_decimal(v)

    @field_validator("unit_price")
    @classmethod
    def _price_in_range(cls, v: Decimal) -> Decimal:
        if v < ZERO:
            raise ValueError("unit_price must be non-negative")
        if v >= MAX_UNIT_PRICE:
            raise ValueError(f"unit_price must be below {MAX_UNIT_PRICE:f}")
        if v != v.quantize(PRICE_QUANTUM):
            raise ValueError("unit_price must not have more than 2 decimal places")
        return v

    @field_validator("tax_rate")
    @classmethod
    def _tax_rate_fraction(cls, v: Decimal) -> Decimal:
        if not ZERO <= v <= Decimal("1"):
            raise ValueError("tax_rate must be a fraction within [0,1]")
        if v != v.quantize(TAX_RATE_QUANTUM):
            raise ValueError("tax_rate must not have more than 4 decimal places")
        return v

    @field_validator("description")
    @classmethod
    def _description_non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("description must be non-empty")
        return v


# ---------------------------------------------------------------------------
# Cart lines and sale snapshots
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LineItem:
    """One aggregated cart entry: a catalog item and how many were scanned."""

    item: ItemData
    quantity: int = 1

    def __post_init__(self) -> None:
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError("LineItem.quantity must be an integer")
        if self.quantity < 1:
            raise ValueError("LineItem.quantity must be at least 1")

    @property
    def identifier(self) -> int:
        return self.item.identifier

    @property
    def line_subtotal(self) -> Decimal:
        return self.item.unit_price * self.quantity

    @property
    def line_tax(self) -> Decimal:
        return self.item.unit_price * self.quantity * self.item.tax_rate


class SalePhase(enum.Enum):
    NO_SALE = "no_sale"
    OPEN = "open"
    CONCLUDED = "concluded"


@dataclass(frozen=True, slots=True)
class SaleState:
    """Immutable view of a sale's cart and running total.

    Recreated on demand; never stored as the source of truth. The totals
    satisfy ``grand_total == subtotal + tax - discount`` and are all
    non-negative.
    """

    items: tuple[LineItem, ...]
    subtotal: Decimal
    tax: Decimal
    grand_total: Decimal
    discount: Decimal = ZERO
    last_scanned: ItemData | None = None
    customer_id: int | None = None

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.items)


@dataclass(frozen=True, slots=True)
class PaymentRecord:
    amount_tendered: Decimal
    change: Decimal


@dataclass(frozen=True, slots=True)
class Receipt:
    """Final summary of a concluded sale and its payment."""

    sale_state: SaleState
    payment: PaymentRecord
    concluded_at: datetime

    def lines(self) -> Iterator[str]:
        """Yield plain-text receipt lines in scan order."""

        yield f"Sale concluded {self.concluded_at.isoformat(timespec='seconds')}"
        for line in self.sale_state.items:
            yield (
                f"{line.quantity:>3} x {line.item.description:<24} "
                f"{line.item.unit_price:>9.2f} {line.line_subtotal:>10.2f}"
            )
        yield f"{'Subtotal':<30} {self.sale_state.subtotal:>19.2f}"
        yield f"{'Tax':<30} {self.sale_state.tax:>19.2f}"
        if self.sale_state.discount:
            yield f"{'Discount':<30} {-self.sale_state.discount:>19.2f}"
        yield f"{'Total':<30} {self.sale_state.grand_total:>19.2f}"
        yield f"{'Paid':<30} {self.payment.amount_tendered:>19.2f}"
        yield f"{'Change':<30} {self.payment.change:>19.2f}"


__all__ = [
    "ItemData",
    "LineItem",
    "PaymentRecord",
    "Receipt",
    "SalePhase",
    "SaleState",
    "ZERO",
    "to_decimal",
]
