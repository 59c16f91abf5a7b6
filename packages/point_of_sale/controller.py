"""Sale orchestration: start sale → scan items → conclude sale.

The controller keeps no per-sale state of its own. Each sale lives in a
``SaleSession`` that callers receive from ``start_new_sale`` and pass back into
every later call, which makes the state machine below explicit:

    NO_SALE ──start_new_sale──▶ OPEN ──conclude_sale──▶ CONCLUDED
                                 │  ▲                       │
                                 └──┘ scan_item /           └─start_new_sale─▶ OPEN
                                      signal_discount

Any call outside the phase that allows it raises ``SaleStateError``.

Error translation happens here and only here:

- ``ItemNotFoundError``       → ``InvalidInputError``
- ``CatalogUnreachableError`` → logged once → ``ConnectionFailedError``
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal

from .cart import CheckoutCart
from .errors import (
    CatalogUnreachableError,
    ConnectionFailedError,
    InsufficientPaymentError,
    InvalidInputError,
    ItemNotFoundError,
    SaleStateError,
)
from .integration import DiscountLookup, InventoryLookup, SalesLog
from .logging_setup import ExceptionLogger, get_logger
from .models import ZERO, Receipt, SalePhase, SaleState
from .register import Register
from .sale import Sale

_logger = get_logger("point_of_sale.controller")


@dataclass(slots=True)
class SaleSession:
    """Caller-held state of one terminal's current sale.

    ``sale`` is set while the phase is ``OPEN``; ``receipt`` once it is
    ``CONCLUDED``.
    """

    phase: SalePhase = SalePhase.NO_SALE
    sale: Sale | None = None
    receipt: Receipt | None = None


class SaleController:
    def __init__(
        self,
        inventory: InventoryLookup,
        *,
        discounts: DiscountLookup | None = None,
        sales_log: SalesLog | None = None,
        register: Register | None = None,
        exception_logger: ExceptionLogger | None = None,
    ) -> None:
        self._inventory = inventory
        self._discounts = discounts
        self._sales_log = sales_log
        self._register = register or Register()
        self._exception_logger = exception_logger or ExceptionLogger()

    def start_new_sale(self, session: SaleSession | None = None) -> SaleSession:
        """Open a fresh sale with an empty cart.

        Accepts a session in ``NO_SALE`` or ``CONCLUDED`` (its previous sale
        and receipt are discarded) or ``None`` for a brand new session.
        """

        if session is None:
            session = SaleSession()
        elif session.phase is SalePhase.OPEN:
            raise SaleStateError("A sale is already open; conclude it before starting another")

        session.sale = Sale(CheckoutCart(self._inventory), self._discounts)
        session.receipt = None
        session.phase = SalePhase.OPEN
        _logger.info("sale started")
        return session

    def scan_item(self, session: SaleSession, identifier: int, quantity: int = 1) -> SaleState:
        """Add ``quantity`` units of ``identifier`` and return the new running total.

        Raises ``InvalidInputError`` for identifiers unknown to the catalog and
        ``ConnectionFailedError`` when the catalog is unreachable. The cart is
        unchanged in both cases.
        """

        sale = self._require_open(session, "scan an item")
        try:
            state = sale.add_item(identifier, quantity)
        except ItemNotFoundError as e:
            raise InvalidInputError(str(e)) from e
        except CatalogUnreachableError as e:
            self._exception_logger.log(e)
            raise ConnectionFailedError("Could not reach the inventory catalog") from e

        _logger.debug(
            "scanned %s x%d; running total %s", identifier, quantity, state.grand_total
        )
        return state

    def signal_discount(self, session: SaleSession, customer_id: int) -> SaleState:
        """Apply the discount the discount lookup grants ``customer_id``."""

        sale = self._require_open(session, "apply a discount")
        state = sale.apply_discount(customer_id)
        _logger.info("customer %s registered; discount %s", customer_id, state.discount)
        return state

    def conclude_sale(
        self, session: SaleSession, amount_tendered: Decimal | int | float | str
    ) -> Receipt:
        """Settle the open sale and return its receipt.

        Totals are recomputed one last time before payment. A tender below the
        grand total raises ``InsufficientPaymentError`` and leaves the sale
        open. The sales log is best effort: a failure there is logged and does
        not undo the conclusion.
        """

        sale = self._require_open(session, "conclude a sale")
        state = sale.recompute_totals(None)
        payment = self._register.calculate_change(state, amount_tendered)
        if payment.change < ZERO:
            raise InsufficientPaymentError(payment.amount_tendered, state.grand_total)

        state = sale.finalize()
        receipt = Receipt(sale_state=state, payment=payment, concluded_at=datetime.now(UTC))

        if self._sales_log is not None:
            try:
                self._sales_log.record(state, payment)
            except Exception:
                _logger.exception("sales log failed to record concluded sale")

        session.sale = None
        session.receipt = receipt
        session.phase = SalePhase.CONCLUDED
        _logger.info(
            "sale concluded: %d line(s), total %s, change %s",
            len(state.items),
            state.grand_total,
            payment.change,
        )
        return receipt

    @staticmethod
    def _require_open(session: SaleSession, action: str) -> Sale:
        if session.phase is not SalePhase.OPEN or session.sale is None:
            raise SaleStateError(
                f"Cannot {action} in phase {session.phase.value!r}; start a new sale first"
            )
        return session.sale
