# ruff: noqa: I001
"""CLI for the ``point_of_sale`` package.

This module exposes callable command handlers (``cmd_checkout``,
``cmd_seed_catalog``) and a Typer-based console interface. Environment
variables (``DATABASE_URL``, ``POS_CATALOG_PATH``, ``POS_LOG_LEVEL``) are
loaded from a local ``.env`` using ``python-dotenv`` before delegating to
command logic. Business logic lives in ``point_of_sale.controller`` and the
modules it drives.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from pathlib import Path

import typer
from dotenv import load_dotenv

from .logging_setup import configure_logging


# ---- Small module‑level helpers used by CLI commands -------------------------


def _parse_item_spec(spec: str) -> tuple[int, int]:
    """Parse ``"ID"`` or ``"ID:QTY"`` into ``(identifier, quantity)``."""

    ident_raw, sep, qty_raw = spec.strip().partition(":")
    try:
        identifier = int(ident_raw)
        quantity = int(qty_raw) if sep else 1
    except ValueError:
        raise ValueError(f"invalid item '{spec}', expected ID or ID:QTY") from None
    if quantity < 1:
        raise ValueError(f"invalid item '{spec}', quantity must be at least 1")
    return identifier, quantity


def _parse_discount_spec(spec: str) -> tuple[int, str]:
    """Parse ``"CUSTOMER=PCT"`` into ``(customer_id, percentage)``."""

    cust_raw, sep, pct_raw = spec.strip().partition("=")
    if not sep:
        raise ValueError(f"invalid discount '{spec}', expected CUSTOMER=PCT")
    try:
        return int(cust_raw), pct_raw.strip()
    except ValueError:
        raise ValueError(f"invalid discount '{spec}', customer must be an integer") from None


def _resolve_catalog_path(catalog: Path | None) -> Path:
    if catalog is not None:
        return catalog
    env_path = os.getenv("POS_CATALOG_PATH")
    if env_path:
        return Path(env_path)
    from .ingest.seed_catalog import DEFAULT_SEED

    return DEFAULT_SEED


# ---- Command handlers ---------------------------------------------------------


def cmd_checkout(
    items: Sequence[str],
    pay: str,
    *,
    catalog: Path | None = None,
    database_url: str | None = None,
    customer: int | None = None,
    discounts: Sequence[str] = (),
    log_sales: bool = False,
) -> int:
    """Run one sale end to end and print its receipt to stdout.

    Behavior
    --------
    - Inventory comes from the SQL catalog when ``database_url`` is given,
      otherwise from a JSON catalog file (``catalog``, ``$POS_CATALOG_PATH``
      or the bundled seed).
    - Each ``items`` entry is scanned in order; ``"ID:QTY"`` scans QTY units.
    - ``customer`` registers a discount customer; ``discounts`` entries of the
      form ``CUSTOMER=PCT`` make up the discount table.
    - ``log_sales`` records the concluded sale in the SQL sales log (requires
      a database URL).

    Errors are written to stderr and the function returns ``1``. On success,
    returns ``0``.
    """

    from .controller import SaleController
    from .errors import (
        ConnectionFailedError,
        InsufficientPaymentError,
        InvalidInputError,
    )
    from .integration import (
        InMemoryInventory,
        SqlInventory,
        SqlSalesLog,
        TableDiscount,
    )
    from .models import to_decimal

    try:
        scans = [_parse_item_spec(s) for s in items]
        rates = dict(_parse_discount_spec(s) for s in discounts)
        amount = to_decimal(pay)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    db_url = database_url or None
    if log_sales and not (db_url or os.getenv("DATABASE_URL")):
        print("Error: --log-sales requires --database-url or DATABASE_URL.", file=sys.stderr)
        return 1

    if db_url:
        inventory = SqlInventory(database_url=db_url)
    else:
        catalog_path = _resolve_catalog_path(catalog)
        try:
            inventory = InMemoryInventory.from_json(catalog_path)
        except FileNotFoundError:
            print(f"Error: Catalog file not found: {catalog_path}", file=sys.stderr)
            return 1
        except ValueError as e:
            print(f"Error: Invalid catalog '{catalog_path}': {e}", file=sys.stderr)
            return 1

    try:
        discount_table = TableDiscount(rates) if rates else None
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    controller = SaleController(
        inventory,
        discounts=discount_table,
        sales_log=SqlSalesLog(database_url=db_url) if log_sales else None,
    )
    session = controller.start_new_sale()

    for identifier, quantity in scans:
        try:
            state = controller.scan_item(session, identifier, quantity)
        except InvalidInputError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except ConnectionFailedError as e:
            print(f"Error: {e}. Try again later.", file=sys.stderr)
            return 1
        label = state.last_scanned.description if state.last_scanned else str(identifier)
        print(
            f"{label} x{quantity}\t"
            f"running total {state.grand_total:.2f}"
        )

    if customer is not None:
        controller.signal_discount(session, customer)

    try:
        receipt = controller.conclude_sale(session, amount)
    except InsufficientPaymentError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for line in receipt.lines():
        print(line)
    return 0


def cmd_seed_catalog(file: Path, *, database_url: str | None = None) -> int:
    """Replace the SQL catalog with the rows of a JSON seed file."""

    from .ingest.seed_catalog import reseed_catalog

    try:
        count = reseed_catalog(database_url=database_url or None, file=file)
    except FileNotFoundError:
        print(f"Error: File not found: {file}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: Invalid catalog '{file}': {e}", file=sys.stderr)
        return 1
    except RuntimeError as e:
        # db.client raises RuntimeError when no database URL is configured
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Seeded {count} catalog item(s)")
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Point-of-sale terminal: scan items against the inventory catalog and "
        "conclude sales. Loads DATABASE_URL and POS_* settings from a local .env."
    ),
)


@app.command("checkout")
def checkout_cmd(
    *,
    item: list[str] = typer.Option(
        ..., "--item", "-i", help="Item to scan as ID or ID:QTY; repeat for more items."
    ),
    pay: str = typer.Option(..., "--pay", help="Amount tendered by the customer."),
    catalog: Path | None = typer.Option(
        None,
        help="JSON catalog file (falls back to POS_CATALOG_PATH, then the bundled seed).",
        dir_okay=False,
    ),
    database_url: str | None = typer.Option(
        None, help="Use the SQL catalog at this URL instead of a JSON file."
    ),
    customer: int | None = typer.Option(
        None, help="Customer/loyalty identifier to look up a discount for."
    ),
    discount: list[str] = typer.Option(
        [], "--discount", help="Discount table entry CUSTOMER=PCT; repeatable."
    ),
    log_sales: bool = typer.Option(
        False, help="Record the concluded sale in the SQL sales log."
    ),
) -> None:
    """Scan the given items, conclude the sale and print the receipt."""

    code = cmd_checkout(
        item,
        pay,
        catalog=catalog,
        database_url=database_url,
        customer=customer,
        discounts=discount,
        log_sales=log_sales,
    )
    raise typer.Exit(code)


@app.command("seed-catalog")
def seed_catalog_cmd(
    *,
    file: Path = typer.Option(..., "--file", help="JSON seed file.", dir_okay=False),
    database_url: str | None = typer.Option(
        None, help="Override DATABASE_URL (falls back to env var)."
    ),
) -> None:
    """Load a JSON seed file into the SQL inventory catalog."""

    raise typer.Exit(cmd_seed_catalog(file, database_url=database_url))


@app.callback()
def _root() -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures package logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()


if __name__ == "__main__":  # pragma: no cover - exercised via console script
    # Running as a module: `python -m point_of_sale.cli`
    app()
