"""Discount lookup adapters."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal

from ..models import ZERO, SaleState, to_decimal


class NoDiscount:
    """The default hook: nobody gets a discount."""

    def get_discount(self, customer_id: int, sale_state: SaleState) -> Decimal:
        return ZERO


class TableDiscount:
    """Per-customer percentage off ``subtotal + tax``.

    ``rates`` maps a customer/loyalty identifier to a percentage in
    ``[0, 100]``. Unknown customers get no discount.
    """

    def __init__(self, rates: Mapping[int, Decimal | int | float | str]) -> None:
        self._rates: dict[int, Decimal] = {}
        for customer_id, raw in rates.items():
            pct = to_decimal(raw)
            if not (ZERO <= pct <= Decimal("100")):
                raise ValueError(f"Discount percentage out of range for {customer_id}: {pct}")
            self._rates[customer_id] = pct

    def get_discount(self, customer_id: int, sale_state: SaleState) -> Decimal:
        pct = self._rates.get(customer_id)
        if pct is None:
            return ZERO
        return (sale_state.subtotal + sale_state.tax) * pct / Decimal("100")
