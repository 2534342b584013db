from __future__ import annotations

from fastapi import Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from parking import config
from parking.db import get_db
from parking.services.notifications import NotificationDispatcher, ResendNotifier
from parking.services.payments import PaymentService
from parking.services.reservations import ReservationService


def build_notification_dispatcher() -> NotificationDispatcher:
    return NotificationDispatcher(ResendNotifier(), enabled=config.email_notifications_enabled())


def get_notification_dispatcher(request: Request) -> NotificationDispatcher:
    dispatcher = getattr(request.app.state, "notifications", None)
    if dispatcher is None:
        dispatcher = build_notification_dispatcher()
        request.app.state.notifications = dispatcher
    return dispatcher


def get_reservation_service(db: AsyncIOMotorDatabase = Depends(get_db)) -> ReservationService:
    return ReservationService(db)


def get_payment_service(
    db: AsyncIOMotorDatabase = Depends(get_db),
    notifications: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> PaymentService:
    return PaymentService(db, notifications)
