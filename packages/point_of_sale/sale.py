"""A sale: one cart and the running total derived from it.

Totals are recomputed from scratch over every cart line on each call to
``Sale.recompute_totals``; nothing is adjusted incrementally, so the result
does not depend on how many merges happened before.

    subtotal    = sum(unit_price * quantity)
    tax         = sum(unit_price * quantity * tax_rate)
    discount    = discount lookup for the registered customer, clamped to
                  [0, subtotal + tax]
    grand_total = subtotal + tax - discount

Once ``finalize`` has been called the sale is immutable.
"""

from __future__ import annotations

from .cart import CheckoutCart
from .errors import SaleStateError
from .integration import DiscountLookup
from .integration.discounts import NoDiscount
from .models import ZERO, ItemData, SaleState, to_decimal


class Sale:
    def __init__(self, cart: CheckoutCart, discounts: DiscountLookup | None = None) -> None:
        self._cart = cart
        self._discounts: DiscountLookup = discounts or NoDiscount()
        self._customer_id: int | None = None
        self._finalized = False
        self._state = self._compute(None, None)

    @property
    def cart(self) -> CheckoutCart:
        return self._cart

    @property
    def state(self) -> SaleState:
        """The snapshot produced by the most recent recomputation."""
        return self._state

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def customer_id(self) -> int | None:
        return self._customer_id

    def add_item(self, identifier: int, quantity: int = 1) -> SaleState:
        """Scan ``identifier`` into the cart and return the refreshed totals.

        If the recomputation raises (a failing discount lookup), the scan is
        undone so the cart still matches ``state``.
        """

        self._ensure_mutable()
        mark = self._cart.checkpoint()
        scanned = self._cart.add_item(identifier, quantity)
        try:
            return self.recompute_totals(scanned)
        except Exception:
            self._cart.rollback(mark)
            raise

    def recompute_totals(self, last_scanned: ItemData | None = None) -> SaleState:
        """Recompute every total from the current cart contents.

        ``last_scanned`` is informational only (it is echoed on the snapshot
        for display); ``None`` means "recompute with no new item".
        """

        self._ensure_mutable()
        self._state = self._compute(last_scanned, self._customer_id)
        return self._state

    def apply_discount(self, customer_id: int) -> SaleState:
        """Register the customer for the discount lookup and recompute.

        The customer is only registered once the lookup has succeeded.
        """

        self._ensure_mutable()
        state = self._compute(self._state.last_scanned, customer_id)
        self._customer_id = customer_id
        self._state = state
        return state

    def finalize(self) -> SaleState:
        """Run the final recomputation and freeze the sale."""

        state = self.recompute_totals(None)
        self._finalized = True
        return state

    def _ensure_mutable(self) -> None:
        if self._finalized:
            raise SaleStateError("Sale has been concluded and can no longer change")

    def _compute(self, last_scanned: ItemData | None, customer_id: int | None) -> SaleState:
        items = self._cart.items
        subtotal = sum((line.line_subtotal for line in items), ZERO)
        tax = sum((line.line_tax for line in items), ZERO)
        gross = subtotal + tax

        discount = ZERO
        if customer_id is not None:
            provisional = SaleState(
                items=items,
                subtotal=subtotal,
                tax=tax,
                grand_total=gross,
                last_scanned=last_scanned,
                customer_id=customer_id,
            )
            raw = to_decimal(self._discounts.get_discount(customer_id, provisional))
            discount = min(max(raw, ZERO), gross)

        return SaleState(
            items=items,
            subtotal=subtotal,
            tax=tax,
            discount=discount,
            grand_total=gross - discount,
            last_scanned=last_scanned,
            customer_id=customer_id,
        )
