"""The checkout cart: distinct line items for the sale in progress.

``CheckoutCart.add_item`` is the only way to add to the cart; ``rollback``
only restores an earlier ``checkpoint``. ``add_item`` resolves the
identifier through the inventory lookup first and touches the cart only after
a successful resolution, so a failed scan never leaves a partial line behind.
Lookup errors propagate unchanged; retrying and logging are the caller's job.
"""

from __future__ import annotations

from collections.abc import Iterator

from .integration import InventoryLookup
from .models import ItemData, LineItem


class CheckoutCart:
    def __init__(self, inventory: InventoryLookup) -> None:
        self._inventory = inventory
        # Lines in first-scanned order, plus identifier -> position for O(1) merges.
        self._lines: list[LineItem] = []
        self._positions: dict[int, int] = {}

    def add_item(self, identifier: int, quantity: int = 1) -> ItemData:
        """Resolve ``identifier`` and add ``quantity`` units of it to the cart.

        A line for the same identifier is merged into (quantity increased in
        place, order preserved); otherwise a new line is appended. Returns the
        resolved catalog data in both cases.

        Raises ``ValueError`` for a non-positive ``quantity``, and whatever the
        inventory lookup raises (``ItemNotFoundError``,
        ``CatalogUnreachableError``).
        """

        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValueError("quantity must be a positive integer")

        scanned = self._inventory.resolve(identifier)

        pos = self._positions.get(scanned.identifier)
        if pos is None:
            self._positions[scanned.identifier] = len(self._lines)
            self._lines.append(LineItem(scanned, quantity))
        else:
            current = self._lines[pos]
            self._lines[pos] = LineItem(current.item, current.quantity + quantity)
        return scanned

    @property
    def items(self) -> tuple[LineItem, ...]:
        return tuple(self._lines)

    def quantity_of(self, identifier: int) -> int:
        pos = self._positions.get(identifier)
        return 0 if pos is None else self._lines[pos].quantity

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[LineItem]:
        return iter(tuple(self._lines))

    def checkpoint(self) -> tuple[LineItem, ...]:
        """Capture the current lines for a later ``rollback``."""
        return tuple(self._lines)

    def rollback(self, mark: tuple[LineItem, ...]) -> None:
        self._lines = list(mark)
        self._positions = {line.identifier: pos for pos, line in enumerate(mark)}
