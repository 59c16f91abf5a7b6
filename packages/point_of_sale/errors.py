"""Exception hierarchy for ``point_of_sale``.

Two layers:

- Integration errors (``ItemNotFoundError``, ``CatalogUnreachableError``) are
  raised by inventory adapters and pass through the cart untouched.
- Caller-facing errors (``InvalidInputError``, ``ConnectionFailedError``,
  ``SaleStateError``, ``InsufficientPaymentError``) are what the sale
  controller raises. The first two always chain the integration error that
  caused them (``raise ... from err``).
"""

from __future__ import annotations

from decimal import Decimal


class PointOfSaleError(Exception):
    """Base class for all errors raised by this package."""


# ---------------------------------------------------------------------------
# Integration layer
# ---------------------------------------------------------------------------


class ItemNotFoundError(PointOfSaleError):
    """The catalog has no entry for the requested identifier."""

    def __init__(self, identifier: int) -> None:
        super().__init__(f"No catalog item with identifier {identifier}")
        self.identifier = identifier


class CatalogUnreachableError(PointOfSaleError):
    """The inventory catalog could not be reached (transport/availability)."""


# ---------------------------------------------------------------------------
# Caller-facing
# ---------------------------------------------------------------------------


class InvalidInputError(PointOfSaleError):
    """The scanned identifier is unknown; re-prompt for another one."""


class ConnectionFailedError(PointOfSaleError):
    """The inventory catalog is unavailable; the failure has been logged."""


class SaleStateError(PointOfSaleError):
    """An operation was invoked outside the sale phase that permits it."""


class InsufficientPaymentError(PointOfSaleError):
    """The tendered amount does not cover the grand total."""

    def __init__(self, amount_tendered: Decimal, grand_total: Decimal) -> None:
        super().__init__(
            f"Payment of {amount_tendered} does not cover grand total {grand_total}"
        )
        self.amount_tendered = amount_tendered
        self.grand_total = grand_total


__all__ = [
    "CatalogUnreachableError",
    "ConnectionFailedError",
    "InsufficientPaymentError",
    "InvalidInputError",
    "ItemNotFoundError",
    "PointOfSaleError",
    "SaleStateError",
]
