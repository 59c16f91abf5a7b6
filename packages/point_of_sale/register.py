"""Cash register: change calculation for a settled sale."""

from __future__ import annotations

from decimal import Decimal

from .models import ZERO, PaymentRecord, SaleState, to_decimal


def calculate_change(
    sale_state: SaleState, amount_tendered: Decimal | int | float | str
) -> PaymentRecord:
    """Return the payment record for ``amount_tendered`` against ``sale_state``.

    ``change = amount_tendered - grand_total``, exactly, with no rounding
    beyond ``Decimal``'s own precision. Pure: the result may be negative and
    deciding what to do about that is left to the caller.
    """

    tendered = to_decimal(amount_tendered)
    return PaymentRecord(amount_tendered=tendered, change=tendered - sale_state.grand_total)


class Register:
    """The terminal's register. Stateless; one instance may serve every sale."""

    def calculate_change(
        self, sale_state: SaleState, amount_tendered: Decimal | int | float | str
    ) -> PaymentRecord:
        return calculate_change(sale_state, amount_tendered)

    def can_settle(
        self, sale_state: SaleState, amount_tendered: Decimal | int | float | str
    ) -> bool:
        return calculate_change(sale_state, amount_tendered).change >= ZERO
