"""Sales log adapters: where concluded sales are recorded."""

from __future__ import annotations

from db.client import session_scope
from db.models.pos import PosSale, PosSaleLine

from ..logging_setup import get_logger
from ..models import PaymentRecord, SaleState

_logger = get_logger("point_of_sale.integration.sales_log")


class InMemorySalesLog:
    """Keep recorded sales in a list, in conclusion order."""

    def __init__(self) -> None:
        self.entries: list[tuple[SaleState, PaymentRecord]] = []

    def record(self, sale_state: SaleState, payment: PaymentRecord) -> None:
        self.entries.append((sale_state, payment))


class SqlSalesLog:
    """Write each concluded sale to ``pos_sales`` with one ``pos_sale_lines`` row per line."""

    def __init__(self, database_url: str | None = None) -> None:
        self._database_url = database_url

    def record(self, sale_state: SaleState, payment: PaymentRecord) -> None:
        with session_scope(database_url=self._database_url) as session:
            sale = PosSale(
                customer_id=sale_state.customer_id,
                subtotal=sale_state.subtotal,
                tax=sale_state.tax,
                discount=sale_state.discount,
                grand_total=sale_state.grand_total,
                amount_tendered=payment.amount_tendered,
                change_due=payment.change,
            )
            session.add(sale)
            session.flush()  # assigns sale.id for the lines below
            for position, line in enumerate(sale_state.items):
                session.add(
                    PosSaleLine(
                        sale_id=sale.id,
                        position=position,
                        identifier=line.identifier,
                        description=line.item.description,
                        unit_price=line.item.unit_price,
                        tax_rate=line.item.tax_rate,
                        quantity=line.quantity,
                    )
                )
            _logger.info("recorded sale %s with %d line(s)", sale.id, len(sale_state.items))
