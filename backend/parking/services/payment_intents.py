from __future__ import annotations

from typing import Any, Optional

from parking import config
from parking.errors import UnsupportedMethodError
from parking.schemas import PaymentMethod
from parking.utils import format_number


def _memo(slot_number: Any) -> str:
    return f"Parking Reservation for Slot {slot_number}"


def build_intent(
    payment_method: str,
    user_id: str,
    slot_number: Any,
    amount: Any,
    *,
    payee_name: Optional[str] = None,
) -> str:
    """Build the provider-specific payment intent string encoded into the QR image.

    Paytm uses its own scheme; Google Pay goes through the generic UPI scheme
    with a `@gpay` handle. Any other method raises UnsupportedMethodError.
    """

    pn = payee_name or config.payee_name()
    am = format_number(amount)
    tn = _memo(slot_number)

    if payment_method == PaymentMethod.PAYTM.value:
        return f"paytm://pay?pa={user_id}&pn={pn}&am={am}&tn={tn}"
    if payment_method == PaymentMethod.GOOGLE_PAY.value:
        return f"upi://pay?pa={user_id}@gpay&pn={pn}&am={am}&tn={tn}"

    raise UnsupportedMethodError(payment_method)
