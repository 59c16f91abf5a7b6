"""Test doubles for the sale controller's collaborators.

Each double records what it was asked so tests can assert on call counts
without reaching into logging output.
"""

from __future__ import annotations

from decimal import Decimal

from point_of_sale.errors import CatalogUnreachableError
from point_of_sale.integration import InMemoryInventory
from point_of_sale.models import ItemData, PaymentRecord, SaleState


def make_item(
    identifier: int,
    price: str = "10.00",
    tax_rate: str = "0.06",
    description: str | None = None,
) -> ItemData:
    return ItemData(
        identifier=identifier,
        unit_price=Decimal(price),
        tax_rate=Decimal(tax_rate),
        description=description or f"Item {identifier}",
    )


def make_inventory(*extra: ItemData) -> InMemoryInventory:
    """Catalog with the reference item 101 (10.00, 6 %) plus ``extra``."""

    return InMemoryInventory([make_item(101, "10.00", "0.06", "Whole milk 1L"), *extra])


class CountingInventory:
    """Wrap an inventory and count ``resolve`` calls; can be switched offline."""

    def __init__(self, inner: InMemoryInventory) -> None:
        self.inner = inner
        self.calls: list[int] = []
        self.unreachable = False

    def resolve(self, identifier: int) -> ItemData:
        self.calls.append(identifier)
        if self.unreachable:
            raise CatalogUnreachableError("connection refused")
        return self.inner.resolve(identifier)


class RecordingExceptionLogger:
    def __init__(self) -> None:
        self.logged: list[BaseException] = []

    def log(self, error: BaseException) -> None:
        self.logged.append(error)


class FixedDiscount:
    """Grant a fixed amount to every customer and remember who asked."""

    def __init__(self, amount: str) -> None:
        self.amount = Decimal(amount)
        self.requests: list[tuple[int, SaleState]] = []

    def get_discount(self, customer_id: int, sale_state: SaleState) -> Decimal:
        self.requests.append((customer_id, sale_state))
        return self.amount


class FailingSalesLog:
    def __init__(self) -> None:
        self.attempts = 0

    def record(self, sale_state: SaleState, payment: PaymentRecord) -> None:
        self.attempts += 1
        raise RuntimeError("sales log disk full")


class SwitchableDiscount:
    """Grant ``amount`` until ``failing`` is set, then raise on every lookup."""

    def __init__(self, amount: str = "1.00") -> None:
        self.amount = Decimal(amount)
        self.failing = False

    def get_discount(self, customer_id: int, sale_state: SaleState) -> Decimal:
        if self.failing:
            raise RuntimeError("discount service unavailable")
        return self.amount
