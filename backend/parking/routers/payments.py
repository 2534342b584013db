from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, PlainTextResponse

from parking.deps import get_payment_service
from parking.errors import AppError, NotFoundError, ValidationError
from parking.schemas import (
    ConfirmPaymentIn,
    GenerateQrCodeIn,
    PaymentEnvelopeOut,
    ProcessPaymentIn,
    QrCodeOut,
)
from parking.services.payments import PaymentService
from parking.utils import serialize_doc

logger = logging.getLogger("payments_api")

router = APIRouter(tags=["payments"])

CONFIRMATION_PAGE = "<h2>Payment Confirmed Successfully!</h2><p>You can now proceed with your reservation.</p>"


@router.post(
    "/process-payment",
    status_code=201,
    response_model=PaymentEnvelopeOut,
    response_model_exclude_none=True,
)
async def process_payment(payload: ProcessPaymentIn, service: PaymentService = Depends(get_payment_service)):
    logger.info("Received payment request: user=%s slot=%s method=%s", payload.userId, payload.slotNumber, payload.paymentMethod)

    payment = await service.initiate(
        user_id=payload.userId,
        slot_number=payload.slotNumber,
        payment_method=payload.paymentMethod,
        amount=payload.amount,
        payment_number=payload.paymentNumber,
        email=payload.email,
    )
    return {"message": "Payment recorded and confirmation email queued", "payment": serialize_doc(payment)}


@router.post("/generate-qrcode", response_model=QrCodeOut)
async def generate_qrcode(payload: GenerateQrCodeIn, service: PaymentService = Depends(get_payment_service)):
    qr_code = await service.generate_code(
        user_id=payload.userId,
        slot_number=payload.slotNumber,
        amount=payload.amount,
        payment_method=payload.paymentMethod,
    )
    return {"qrCode": qr_code}


@router.post("/confirm-payment", response_model=PaymentEnvelopeOut, response_model_exclude_none=True)
async def confirm_payment(payload: ConfirmPaymentIn, service: PaymentService = Depends(get_payment_service)):
    payment = await service.confirm(
        user_id=payload.userId,
        slot_number=payload.slotNumber,
        payment_id=payload.paymentId,
    )
    return {"message": "Payment confirmed!", "payment": serialize_doc(payment)}


@router.get("/dummy-confirmation", response_class=HTMLResponse)
async def dummy_confirmation(
    userId: Optional[str] = None,
    slotNumber: Optional[str] = None,
    paymentId: Optional[str] = None,
    service: PaymentService = Depends(get_payment_service),
):
    """Browser-facing confirmation, reached from the payment redirect link."""

    try:
        await service.confirm(user_id=userId, slot_number=slotNumber, payment_id=paymentId)
    except ValidationError as exc:
        return PlainTextResponse(exc.message, status_code=400)
    except NotFoundError:
        return PlainTextResponse("Payment not found", status_code=404)
    except AppError as exc:
        logger.error("Error in dummy confirmation: %s", exc)
        return PlainTextResponse("Error processing payment confirmation", status_code=500)
    except Exception:
        logger.exception("Unexpected error in dummy confirmation")
        return PlainTextResponse("Error processing payment confirmation", status_code=500)

    return HTMLResponse(CONFIRMATION_PAGE)
