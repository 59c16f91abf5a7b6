from __future__ import annotations

from decimal import Decimal

import pytest

from point_of_sale.models import SaleState
from point_of_sale.register import Register, calculate_change


def _state(grand_total: str) -> SaleState:
    total = Decimal(grand_total)
    return SaleState(items=(), subtotal=total, tax=Decimal("0"), grand_total=total)


@pytest.mark.parametrize(
    ("total", "tendered", "change"),
    [
        ("21.20", "25.00", "3.80"),
        ("10.60", "10.60", "0.00"),
        ("0.3333", "1", "0.6667"),
        ("99.99", "100", "0.01"),
    ],
)
def test_change_is_tendered_minus_grand_total_exactly(total, tendered, change):
    payment = calculate_change(_state(total), Decimal(tendered))
    assert payment.amount_tendered == Decimal(tendered)
    assert payment.change == Decimal(change)


def test_float_and_string_tenders_do_not_pick_up_binary_error():
    state = _state("0.20")
    assert calculate_change(state, 0.3).change == Decimal("0.10")
    assert calculate_change(state, "0.30").change == Decimal("0.10")


def test_insufficient_tender_yields_negative_change_without_raising():
    payment = calculate_change(_state("21.20"), "20")
    assert payment.change == Decimal("-1.20")


def test_register_delegates_and_reports_whether_tender_settles():
    register = Register()
    state = _state("21.20")
    assert register.calculate_change(state, "25").change == Decimal("3.80")
    assert register.can_settle(state, "21.20")
    assert not register.can_settle(state, "21.19")


def test_tender_must_be_a_number():
    with pytest.raises(ValueError):
        calculate_change(_state("1"), "twenty")
