from __future__ import annotations

import pytest

from parking.errors import UnsupportedMethodError
from parking.services.payment_intents import build_intent


def test_paytm_intent():
    assert (
        build_intent("Paytm", "alice", 7, 50)
        == "paytm://pay?pa=alice&pn=SmartParking&am=50&tn=Parking Reservation for Slot 7"
    )


def test_google_pay_intent_uses_gpay_handle():
    assert (
        build_intent("Google Pay", "alice", 7, 50)
        == "upi://pay?pa=alice@gpay&pn=SmartParking&am=50&tn=Parking Reservation for Slot 7"
    )


def test_integral_float_amount_renders_without_decimal_part():
    intent = build_intent("Paytm", "alice", 7, 50.0)
    assert "&am=50&" in intent

    intent = build_intent("Paytm", "alice", 7, 12.5)
    assert "&am=12.5&" in intent


def test_payee_name_is_configurable(monkeypatch):
    monkeypatch.setenv("PAYEE_NAME", "CityPark")
    assert "&pn=CityPark&" in build_intent("Paytm", "alice", 7, 50)
    assert "&pn=Lot9&" in build_intent("Paytm", "alice", 7, 50, payee_name="Lot9")


@pytest.mark.parametrize("method", ["Cash", "paytm", "", "GooglePay"])
def test_unsupported_method_raises(method):
    with pytest.raises(UnsupportedMethodError) as ei:
        build_intent(method, "alice", 7, 50)
    assert ei.value.status_code == 400
    assert ei.value.message == "Invalid payment method"
