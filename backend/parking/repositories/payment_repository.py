from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from parking.errors import PersistenceError
from parking.repositories.base_repository import PAYMENTS, get_collection
from parking.schemas import PaymentStatus
from parking.utils import to_object_id

logger = logging.getLogger("payment_repository")


class PaymentRepository:
    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self._db = db
        self._col = get_collection(db, PAYMENTS)

    async def insert(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        try:
            res = await self._col.insert_one(doc)
        except PyMongoError as exc:
            logger.error("Error processing payment: %s", exc, exc_info=True)
            raise PersistenceError("Error processing payment", str(exc)) from exc
        doc["_id"] = res.inserted_id
        return doc

    async def get_by_id(self, payment_id: str) -> Optional[Dict[str, Any]]:
        oid = to_object_id(payment_id)
        if oid is None:
            return None
        try:
            return await self._col.find_one({"_id": oid})
        except PyMongoError as exc:
            raise PersistenceError("Error loading payment", str(exc)) from exc

    async def mark_confirmed(
        self,
        *,
        user_id: str,
        slot_number: int,
        payment_id: str,
        paid_at: datetime,
    ) -> Optional[Dict[str, Any]]:
        """Set status Confirmed and paidAt on the payment matching all three keys.

        Single-document update; returns the updated document, or None when no
        payment matches (nothing is written in that case).
        """

        oid = to_object_id(payment_id)
        if oid is None:
            return None

        try:
            return await self._col.find_one_and_update(
                {"_id": oid, "userId": user_id, "slotNumber": slot_number},
                {"$set": {"paymentStatus": PaymentStatus.CONFIRMED.value, "paidAt": paid_at}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as exc:
            logger.error("Error confirming payment %s: %s", payment_id, exc, exc_info=True)
            raise PersistenceError("Error confirming payment", str(exc)) from exc
