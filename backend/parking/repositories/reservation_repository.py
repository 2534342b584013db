from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from parking.errors import PersistenceError
from parking.repositories.base_repository import RESERVATIONS, get_collection
from parking.utils import to_object_id

logger = logging.getLogger("reservation_repository")


class ReservationRepository:
    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self._db = db
        self._col = get_collection(db, RESERVATIONS)

    async def insert(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a reservation document; `doc` gains its generated `_id`."""
        try:
            res = await self._col.insert_one(doc)
        except PyMongoError as exc:
            logger.error("Error saving reservation: %s", exc, exc_info=True)
            raise PersistenceError("Error reserving slot", str(exc)) from exc
        doc["_id"] = res.inserted_id
        return doc

    async def get_by_id(self, reservation_id: str) -> Optional[Dict[str, Any]]:
        oid = to_object_id(reservation_id)
        if oid is None:
            return None
        try:
            return await self._col.find_one({"_id": oid})
        except PyMongoError as exc:
            raise PersistenceError("Error loading reservation", str(exc)) from exc
