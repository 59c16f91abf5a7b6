"""Public interface for the ``point_of_sale`` package.

Re-exports the sale core (cart, sale, register, controller), its data models
and error types. Collaborator adapters live in ``point_of_sale.integration``.
"""

from .cart import CheckoutCart
from .controller import SaleController, SaleSession
from .errors import (
    CatalogUnreachableError,
    ConnectionFailedError,
    InsufficientPaymentError,
    InvalidInputError,
    ItemNotFoundError,
    PointOfSaleError,
    SaleStateError,
)
from .models import ItemData, LineItem, PaymentRecord, Receipt, SalePhase, SaleState
from .register import Register, calculate_change
from .sale import Sale

__all__ = [
    # Core
    "CheckoutCart",
    "Register",
    "Sale",
    "SaleController",
    "SaleSession",
    "calculate_change",
    # Models
    "ItemData",
    "LineItem",
    "PaymentRecord",
    "Receipt",
    "SalePhase",
    "SaleState",
    # Errors
    "CatalogUnreachableError",
    "ConnectionFailedError",
    "InsufficientPaymentError",
    "InvalidInputError",
    "ItemNotFoundError",
    "PointOfSaleError",
    "SaleStateError",
]
