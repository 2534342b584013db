from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

# Request bodies keep every field optional so that an absent field is reported
# with the endpoint's own 400 message instead of a generic schema error.
# Numeric identifiers (phone numbers, numeric user ids) are accepted as strings.


class _RequestIn(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)


class PaymentStatus(str, Enum):
    PENDING = "Pending"
    IN_PROCESS = "InProcess"
    CONFIRMED = "Confirmed"


class PaymentMethod(str, Enum):
    PAYTM = "Paytm"
    GOOGLE_PAY = "Google Pay"


class ReserveSlotIn(_RequestIn):
    userId: Optional[str] = None
    slotNumber: Optional[int] = None


class ProcessPaymentIn(_RequestIn):
    userId: Optional[str] = None
    slotNumber: Optional[int] = None
    paymentMethod: Optional[str] = None
    amount: Optional[float] = None
    paymentNumber: Optional[str] = None
    email: Optional[str] = None


class GenerateQrCodeIn(_RequestIn):
    userId: Optional[str] = None
    slotNumber: Optional[int] = None
    amount: Optional[float] = None
    paymentMethod: Optional[str] = None


class ConfirmPaymentIn(_RequestIn):
    userId: Optional[str] = None
    slotNumber: Optional[int] = None
    paymentId: Optional[str] = None


class ReservationOut(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    userId: str
    slotNumber: int
    reservedAt: datetime


class PaymentOut(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    userId: str
    slotNumber: int
    paymentMethod: str
    paymentNumber: str
    amount: float
    paymentStatus: PaymentStatus = PaymentStatus.PENDING
    generatedAt: Optional[datetime] = None
    paidAt: Optional[datetime] = None


class ReserveSlotOut(BaseModel):
    message: str
    reservation: ReservationOut


class PaymentEnvelopeOut(BaseModel):
    message: str
    payment: PaymentOut


class QrCodeOut(BaseModel):
    qrCode: str
