"""Inventory lookup adapters.

- ``InMemoryInventory``: dict-backed catalog, loadable from a JSON seed file.
  Useful for tests, demos and offline terminals.
- ``SqlInventory``: reads ``pos_catalog_items`` from the shared database
  through ``db.client.session_scope``. Driver/connection failures surface as
  ``CatalogUnreachableError``; a missing or inactive row as
  ``ItemNotFoundError``.
"""

from __future__ import annotations

from collections.abc import Iterable
from os import PathLike

from sqlalchemy import select
from sqlalchemy.exc import DBAPIError

from db.client import session_scope
from db.models.pos import PosCatalogItem

from ..errors import CatalogUnreachableError, ItemNotFoundError
from ..logging_setup import get_logger
from ..models import ItemData

_logger = get_logger("point_of_sale.integration.inventory")


class InMemoryInventory:
    """Catalog held in a dict keyed by identifier.

    ``online`` can be flipped to ``False`` to make every lookup fail with
    ``CatalogUnreachableError``, which mimics a terminal losing its link to
    the inventory system.
    """

    def __init__(self, items: Iterable[ItemData] = (), *, online: bool = True) -> None:
        self._items: dict[int, ItemData] = {}
        for item in items:
            if item.identifier in self._items:
                raise ValueError(f"Duplicate catalog identifier: {item.identifier}")
            self._items[item.identifier] = item
        self.online = online

    @classmethod
    def from_json(cls, path: str | PathLike[str]) -> InMemoryInventory:
        from ..ingest.seed_catalog import load_catalog_json

        return cls(load_catalog_json(path))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._items

    def resolve(self, identifier: int) -> ItemData:
        if not self.online:
            raise CatalogUnreachableError("Inventory catalog is offline")
        try:
            return self._items[identifier]
        except KeyError:
            raise ItemNotFoundError(identifier) from None


class SqlInventory:
    """Catalog backed by the ``pos_catalog_items`` table."""

    def __init__(self, database_url: str | None = None) -> None:
        self._database_url = database_url

    def resolve(self, identifier: int) -> ItemData:
        stmt = select(PosCatalogItem).where(
            PosCatalogItem.identifier == identifier,
            PosCatalogItem.is_active.is_(True),
        )
        try:
            with session_scope(database_url=self._database_url) as session:
                row = session.execute(stmt).scalar_one_or_none()
                if row is None:
                    raise ItemNotFoundError(identifier)
                _logger.debug("resolved catalog item %s", identifier)
                return ItemData(
                    identifier=row.identifier,
                    unit_price=row.unit_price,
                    tax_rate=row.tax_rate,
                    description=row.description,
                )
        except DBAPIError as e:
            raise CatalogUnreachableError(f"Inventory database unavailable: {e}") from e
