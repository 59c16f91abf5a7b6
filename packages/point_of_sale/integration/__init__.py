"""External collaborators consumed by the sale core.

The core only depends on the ``Protocol`` shapes below. Concrete adapters
(in-memory and SQLAlchemy-backed) live in the sibling modules.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol

from ..models import ItemData, PaymentRecord, SaleState


class InventoryLookup(Protocol):
    def resolve(self, identifier: int) -> ItemData:
        """Return catalog data for ``identifier``.

        Raises ``ItemNotFoundError`` when the catalog has no such entry and
        ``CatalogUnreachableError`` when the catalog cannot be consulted.
        """
        ...


class DiscountLookup(Protocol):
    def get_discount(self, customer_id: int, sale_state: SaleState) -> Decimal:
        """Return the amount to take off ``sale_state``'s total for this customer."""
        ...


class SalesLog(Protocol):
    def record(self, sale_state: SaleState, payment: PaymentRecord) -> None: ...


from .discounts import NoDiscount, TableDiscount  # noqa: E402
from .inventory import InMemoryInventory, SqlInventory  # noqa: E402
from .sales_log import InMemorySalesLog, SqlSalesLog  # noqa: E402

__all__ = [
    "DiscountLookup",
    "InMemoryInventory",
    "InMemorySalesLog",
    "InventoryLookup",
    "NoDiscount",
    "SalesLog",
    "SqlInventory",
    "SqlSalesLog",
    "TableDiscount",
]
