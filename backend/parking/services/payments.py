from __future__ import annotations

import logging
from typing import Any, Dict

from motor.motor_asyncio import AsyncIOMotorDatabase

from parking.errors import NotFoundError
from parking.repositories.payment_repository import PaymentRepository
from parking.schemas import PaymentStatus
from parking.services.notifications import NotificationDispatcher
from parking.services.payment_intents import build_intent
from parking.services.qr_codes import generate_code_image
from parking.utils import format_number, now_utc
from parking.validation import positive_int, positive_number, require_fields

logger = logging.getLogger("payments")

PAYMENT_FIELDS = ("userId", "slotNumber", "paymentMethod", "amount", "paymentNumber", "email")
QR_FIELDS = ("userId", "slotNumber", "amount", "paymentMethod")
CONFIRM_FIELDS = ("userId", "slotNumber", "paymentId")

CONFIRMATION_SUBJECT = "Payment Confirmation"


def confirmation_email_text(slot_number: Any, amount: Any) -> str:
    return (
        f"Your payment for parking slot {slot_number} has been confirmed. "
        f"Amount: {format_number(amount)}."
    )


class PaymentService:
    """Payment records and their Pending -> InProcess -> Confirmed lifecycle."""

    def __init__(self, db: AsyncIOMotorDatabase, notifications: NotificationDispatcher) -> None:
        self._repo = PaymentRepository(db)
        self._notifications = notifications

    async def initiate(
        self,
        *,
        user_id: Any,
        slot_number: Any,
        payment_method: Any,
        amount: Any,
        payment_number: Any,
        email: Any,
    ) -> Dict[str, Any]:
        """Record a payment attempt in status InProcess and queue the confirmation email.

        The email goes out on a detached task after the write succeeds; its
        outcome is only logged and never changes the result.
        """

        values = {
            "userId": user_id,
            "slotNumber": slot_number,
            "paymentMethod": payment_method,
            "amount": amount,
            "paymentNumber": payment_number,
            "email": email,
        }
        require_fields(values, PAYMENT_FIELDS, "All payment details are required")
        slot = positive_int("slotNumber", slot_number)
        amt = positive_number("amount", amount)

        doc: Dict[str, Any] = {
            "userId": str(user_id),
            "slotNumber": slot,
            "paymentMethod": str(payment_method),
            "paymentNumber": str(payment_number),
            "amount": amt,
            "paymentStatus": PaymentStatus.IN_PROCESS.value,
            "generatedAt": now_utc(),
        }
        saved = await self._repo.insert(doc)

        self._notifications.dispatch(
            to_email=str(email),
            subject=CONFIRMATION_SUBJECT,
            text=confirmation_email_text(slot, amt),
        )
        return saved

    async def generate_code(
        self,
        *,
        user_id: Any,
        slot_number: Any,
        amount: Any,
        payment_method: Any,
    ) -> str:
        values = {
            "userId": user_id,
            "slotNumber": slot_number,
            "amount": amount,
            "paymentMethod": payment_method,
        }
        require_fields(values, QR_FIELDS, "Missing required details")
        slot = positive_int("slotNumber", slot_number)
        amt = positive_number("amount", amount)

        intent = build_intent(str(payment_method), str(user_id), slot, amt)
        return await generate_code_image(intent)

    async def confirm(self, *, user_id: Any, slot_number: Any, payment_id: Any) -> Dict[str, Any]:
        """Mark the payment identified by (userId, slotNumber, paymentId) Confirmed.

        Re-confirming refreshes paidAt. Raises NotFoundError when nothing matches.
        """

        values = {"userId": user_id, "slotNumber": slot_number, "paymentId": payment_id}
        require_fields(values, CONFIRM_FIELDS, "Payment confirmation details are required")
        slot = positive_int("slotNumber", slot_number)

        updated = await self._repo.mark_confirmed(
            user_id=str(user_id),
            slot_number=slot,
            payment_id=str(payment_id),
            paid_at=now_utc(),
        )
        if updated is None:
            raise NotFoundError("Payment not found", details={"paymentId": str(payment_id)})

        logger.info("Payment %s confirmed for user=%s slot=%s", updated["_id"], updated["userId"], slot)
        return updated
