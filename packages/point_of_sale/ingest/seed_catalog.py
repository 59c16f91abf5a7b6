from __future__ import annotations

# Seeder for the inventory catalog.
#
# Usage (example):
#   python -m point_of_sale.ingest.seed_catalog \
#     --database-url sqlite+pysqlite:///pos.db \
#     --file packages/point_of_sale/ingest/seeds/catalog.v1.json
#
# This script:
#   1) Deletes every row of pos_catalog_items.
#   2) Inserts the seed rows after validating them as ItemData (prices and
#      tax rates as decimal strings, identifiers unique).
import argparse
import json
from os import PathLike
from pathlib import Path

from pydantic import TypeAdapter
from sqlalchemy import delete

from db.client import session_scope
from db.models.pos import PosCatalogItem

from ..models import ItemData

DEFAULT_SEED = Path(__file__).resolve().parent / "seeds" / "catalog.v1.json"

_CATALOG_ADAPTER = TypeAdapter(list[ItemData])


def load_catalog_json(path: str | PathLike[str]) -> list[ItemData]:
    """Read and validate a JSON list of catalog rows.

    Raises ``ValueError`` (pydantic ``ValidationError`` included) when the file
    is not a list of valid rows or repeats an identifier.
    """

    with Path(path).open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError("Catalog JSON must be a list of item objects")
    items = _CATALOG_ADAPTER.validate_python(data)

    seen: set[int] = set()
    for item in items:
        if item.identifier in seen:
            raise ValueError(f"Duplicate catalog identifier in {path}: {item.identifier}")
        seen.add(item.identifier)
    return items


def reseed_catalog(*, database_url: str | None, file: str | PathLike[str]) -> int:
    items = load_catalog_json(file)
    with session_scope(database_url=database_url) as session:
        # Destructive reset; the catalog is owned upstream and reloaded whole.
        session.execute(delete(PosCatalogItem))
        for item in items:
            session.add(
                PosCatalogItem(
                    identifier=item.identifier,
                    description=item.description,
                    unit_price=item.unit_price,
                    tax_rate=item.tax_rate,
                    is_active=True,
                )
            )
        session.flush()
    return len(items)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Reseed the inventory catalog")
    ap.add_argument(
        "--database-url",
        required=False,
        default=None,
        help="SQLAlchemy database URL; falls back to $DATABASE_URL when not set",
    )
    ap.add_argument("--file", type=Path, required=False, default=DEFAULT_SEED)
    args = ap.parse_args(argv)

    reseed_catalog(database_url=args.database_url or None, file=args.file)
    return 0


if __name__ == "__main__":  # pragma: no cover - manual utility
    raise SystemExit(main())
