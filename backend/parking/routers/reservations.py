from __future__ import annotations

from fastapi import APIRouter, Depends

from parking.deps import get_reservation_service
from parking.schemas import ReserveSlotIn, ReserveSlotOut
from parking.services.reservations import ReservationService
from parking.utils import serialize_doc

router = APIRouter(tags=["reservations"])


@router.post("/reserve-slot", status_code=201, response_model=ReserveSlotOut)
async def reserve_slot(payload: ReserveSlotIn, service: ReservationService = Depends(get_reservation_service)):
    reservation = await service.reserve(payload.userId, payload.slotNumber)
    return {"message": "Slot reserved successfully", "reservation": serialize_doc(reservation)}
