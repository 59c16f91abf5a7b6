from __future__ import annotations

import logging
from datetime import UTC
from decimal import Decimal

import pytest

from point_of_sale.controller import SaleController, SaleSession
from point_of_sale.errors import (
    CatalogUnreachableError,
    ConnectionFailedError,
    InsufficientPaymentError,
    InvalidInputError,
    ItemNotFoundError,
    SaleStateError,
)
from point_of_sale.integration import InMemorySalesLog
from point_of_sale.logging_setup import ExceptionLogger
from point_of_sale.models import SalePhase
from tests.helpers.collaborators import (
    CountingInventory,
    FailingSalesLog,
    FixedDiscount,
    RecordingExceptionLogger,
    SwitchableDiscount,
    make_inventory,
    make_item,
)


def _controller(**kwargs) -> tuple[SaleController, CountingInventory]:
    inventory = CountingInventory(make_inventory(make_item(102, "5.00", "0.25")))
    return SaleController(inventory, **kwargs), inventory


# ---- Happy path --------------------------------------------------------------


def test_reference_scenario_end_to_end():
    sales_log = InMemorySalesLog()
    controller, _ = _controller(sales_log=sales_log)

    session = controller.start_new_sale()
    assert session.phase is SalePhase.OPEN

    state = controller.scan_item(session, 101)
    assert (state.subtotal, state.tax, state.grand_total) == (
        Decimal("10.00"),
        Decimal("0.60"),
        Decimal("10.60"),
    )

    state = controller.scan_item(session, 101)
    assert len(state.items) == 1
    assert state.items[0].quantity == 2
    assert (state.subtotal, state.tax, state.grand_total) == (
        Decimal("20.00"),
        Decimal("1.20"),
        Decimal("21.20"),
    )

    receipt = controller.conclude_sale(session, Decimal("25.00"))
    assert receipt.payment.change == Decimal("3.80")
    assert receipt.sale_state.grand_total == Decimal("21.20")
    assert receipt.sale_state.last_scanned is None
    assert receipt.concluded_at.tzinfo is UTC

    assert session.phase is SalePhase.CONCLUDED
    assert session.sale is None
    assert session.receipt is receipt
    assert sales_log.entries == [(receipt.sale_state, receipt.payment)]


def test_scan_with_quantity_merges_into_existing_line():
    controller, _ = _controller()
    session = controller.start_new_sale()
    controller.scan_item(session, 102, 2)
    controller.scan_item(session, 101)
    state = controller.scan_item(session, 102, 3)
    assert [(line.identifier, line.quantity) for line in state.items] == [(102, 5), (101, 1)]


def test_signal_discount_flows_into_receipt():
    controller, _ = _controller(discounts=FixedDiscount("0.60"))
    session = controller.start_new_sale()
    controller.scan_item(session, 101)
    state = controller.signal_discount(session, 42)
    assert state.grand_total == Decimal("10.00")

    receipt = controller.conclude_sale(session, "10")
    assert receipt.sale_state.discount == Decimal("0.60")
    assert receipt.sale_state.customer_id == 42
    assert receipt.payment.change == Decimal("0")


# ---- Error translation -------------------------------------------------------


def test_unknown_identifier_becomes_invalid_input_and_cart_is_unchanged():
    exc_logger = RecordingExceptionLogger()
    controller, _ = _controller(exception_logger=exc_logger)
    session = controller.start_new_sale()
    controller.scan_item(session, 101)

    with pytest.raises(InvalidInputError) as excinfo:
        controller.scan_item(session, 999)

    assert isinstance(excinfo.value.__cause__, ItemNotFoundError)
    assert exc_logger.logged == []
    assert session.phase is SalePhase.OPEN
    assert session.sale is not None
    assert [(line.identifier, line.quantity) for line in session.sale.cart.items] == [(101, 1)]


def test_unreachable_catalog_becomes_connection_failed_logged_once():
    exc_logger = RecordingExceptionLogger()
    controller, inventory = _controller(exception_logger=exc_logger)
    session = controller.start_new_sale()
    controller.scan_item(session, 101)
    inventory.unreachable = True

    with pytest.raises(ConnectionFailedError) as excinfo:
        controller.scan_item(session, 101)

    assert isinstance(excinfo.value.__cause__, CatalogUnreachableError)
    assert exc_logger.logged == [excinfo.value.__cause__]
    assert session.sale is not None
    assert session.sale.cart.quantity_of(101) == 1
    assert session.sale.state.grand_total == Decimal("10.60")


def test_default_exception_logger_writes_one_error_record(caplog: pytest.LogCaptureFixture):
    controller, inventory = _controller(
        exception_logger=ExceptionLogger(logging.getLogger("tests.pos.errors"))
    )
    session = controller.start_new_sale()
    inventory.unreachable = True

    with caplog.at_level(logging.ERROR, logger="tests.pos.errors"):
        with pytest.raises(ConnectionFailedError):
            controller.scan_item(session, 101)

    records = [r for r in caplog.records if r.name == "tests.pos.errors"]
    assert len(records) == 1
    assert records[0].exc_info is not None
    assert "CatalogUnreachableError" in records[0].getMessage()


def test_failing_discount_lookup_leaves_cart_and_totals_in_step():
    discounts = SwitchableDiscount("0.60")
    discounts.failing = True
    controller, _ = _controller(discounts=discounts)
    session = controller.start_new_sale()
    controller.scan_item(session, 101)

    with pytest.raises(RuntimeError):
        controller.signal_discount(session, 42)
    assert session.sale is not None and session.sale.customer_id is None

    state = controller.scan_item(session, 101)
    assert state.items[0].quantity == session.sale.cart.quantity_of(101) == 2
    assert state.grand_total == Decimal("21.20")

    discounts.failing = False
    controller.signal_discount(session, 42)
    discounts.failing = True
    with pytest.raises(RuntimeError):
        controller.scan_item(session, 101)
    assert session.sale.cart.quantity_of(101) == 2
    assert session.sale.state.items == session.sale.cart.items
    assert session.sale.state.grand_total == Decimal("20.60")


# ---- State machine guards ----------------------------------------------------


def test_operations_before_start_are_rejected():
    controller, inventory = _controller()
    session = SaleSession()

    with pytest.raises(SaleStateError):
        controller.scan_item(session, 101)
    with pytest.raises(SaleStateError):
        controller.conclude_sale(session, "10")
    with pytest.raises(SaleStateError):
        controller.signal_discount(session, 1)
    assert inventory.calls == []
    assert session.phase is SalePhase.NO_SALE


def test_operations_after_conclusion_are_rejected():
    controller, _ = _controller()
    session = controller.start_new_sale()
    controller.scan_item(session, 101)
    receipt = controller.conclude_sale(session, "20")

    with pytest.raises(SaleStateError):
        controller.scan_item(session, 101)
    with pytest.raises(SaleStateError):
        controller.conclude_sale(session, "20")
    assert session.receipt is receipt


def test_starting_while_open_is_rejected():
    controller, _ = _controller()
    session = controller.start_new_sale()
    controller.scan_item(session, 101)
    with pytest.raises(SaleStateError):
        controller.start_new_sale(session)
    assert session.sale is not None and session.sale.cart.quantity_of(101) == 1


def test_new_sale_after_conclusion_starts_from_empty_cart():
    controller, _ = _controller()
    session = controller.start_new_sale()
    controller.scan_item(session, 101)
    controller.conclude_sale(session, "20")

    same = controller.start_new_sale(session)
    assert same is session
    assert session.phase is SalePhase.OPEN
    assert session.receipt is None
    assert session.sale is not None
    assert session.sale.state.items == ()


def test_sessions_are_independent():
    controller, _ = _controller()
    first = controller.start_new_sale()
    second = controller.start_new_sale()
    controller.scan_item(first, 101)
    assert second.sale is not None and len(second.sale.cart) == 0


# ---- Payment -----------------------------------------------------------------


def test_insufficient_payment_is_rejected_and_sale_stays_open():
    sales_log = InMemorySalesLog()
    controller, _ = _controller(sales_log=sales_log)
    session = controller.start_new_sale()
    controller.scan_item(session, 101)

    with pytest.raises(InsufficientPaymentError) as excinfo:
        controller.conclude_sale(session, "10.59")

    assert excinfo.value.grand_total == Decimal("10.60")
    assert session.phase is SalePhase.OPEN
    assert sales_log.entries == []

    # The customer can still add to the sale and pay again.
    controller.scan_item(session, 101)
    receipt = controller.conclude_sale(session, "30")
    assert receipt.payment.change == Decimal("8.80")


def test_empty_sale_can_be_concluded():
    controller, _ = _controller()
    session = controller.start_new_sale()
    receipt = controller.conclude_sale(session, 0)
    assert receipt.sale_state.items == ()
    assert receipt.payment.change == Decimal("0")


def test_sales_log_failure_does_not_undo_conclusion(caplog: pytest.LogCaptureFixture):
    sales_log = FailingSalesLog()
    controller, _ = _controller(sales_log=sales_log)
    session = controller.start_new_sale()
    controller.scan_item(session, 101)

    with caplog.at_level(logging.ERROR, logger="point_of_sale.controller"):
        receipt = controller.conclude_sale(session, "11")

    assert sales_log.attempts == 1
    assert receipt.payment.change == Decimal("0.40")
    assert session.phase is SalePhase.CONCLUDED
    assert any("sales log failed" in r.getMessage() for r in caplog.records)
