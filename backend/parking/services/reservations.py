from __future__ import annotations

import logging
from typing import Any, Dict

from motor.motor_asyncio import AsyncIOMotorDatabase

from parking.repositories.reservation_repository import ReservationRepository
from parking.utils import now_utc
from parking.validation import positive_int, require_fields

logger = logging.getLogger("reservations")


class ReservationService:
    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self._repo = ReservationRepository(db)

    async def reserve(self, user_id: Any, slot_number: Any) -> Dict[str, Any]:
        """Create a reservation for `slot_number`.

        No deduplication: two identical calls create two records.
        """

        require_fields(
            {"userId": user_id, "slotNumber": slot_number},
            ("userId", "slotNumber"),
            "User ID and Slot Number are required",
        )
        slot = positive_int("slotNumber", slot_number)

        doc: Dict[str, Any] = {
            "userId": str(user_id),
            "slotNumber": slot,
            "reservedAt": now_utc(),
        }
        saved = await self._repo.insert(doc)
        logger.info("Reservation saved: id=%s user=%s slot=%s", saved["_id"], saved["userId"], slot)
        return saved
