# backend/booking_api/routers/bookings.py
# POST = public, GET / PATCH = admin, DELETE = none (cancel via status)

import logging
from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..deps import get_store, require_admin
from ..schemas.bookings import BookingCreate, BookingRead, BookingUpdate
from ..services.auth import AdminPrincipal
from ..services.booking_store import BookingStore, SlotTakenError
from ..services.events import booking_payload, emit_event
from ..services.slots import calculate_service_slots, get_booking_config
from ..services.slots.config import normalize_time

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["bookings"])


def _now() -> datetime:
    # Local, timezone-naive like the stored dates and times
    return datetime.now()


@router.get("/", response_model=list[BookingRead])
def list_bookings(
    target_date: Optional[date] = Query(None, alias="date"),
    store: BookingStore = Depends(get_store),
    admin: AdminPrincipal = Depends(require_admin),
):
    return store.list_bookings(target_date)


@router.get("/{id}", response_model=BookingRead)
def get_booking(
    id: int,
    store: BookingStore = Depends(get_store),
    admin: AdminPrincipal = Depends(require_admin),
):
    obj = store.get_booking(id)
    if not obj:
        raise HTTPException(status_code=404, detail="Booking not found")
    return obj


@router.post("/", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
def create_booking(
    data: BookingCreate,
    store: BookingStore = Depends(get_store),
):
    now = _now()
    if data.booking_date < now.date():
        raise HTTPException(status_code=400, detail="Date cannot be in the past")
    if data.booking_date == now.date() and normalize_time(data.booking_time) < now.strftime("%H:%M"):
        raise HTTPException(status_code=400, detail="Time cannot be in the past")

    if store.get_active_service(data.service_id) is None:
        raise HTTPException(status_code=400, detail="Unknown service")

    # Fast rejection; the unique index on (date, time) is the real guard
    slots = calculate_service_slots(store, data.booking_date, data.service_id, get_booking_config())
    requested = normalize_time(data.booking_time)
    if not any(s.time == requested and s.available for s in slots):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Slot is not available")

    values = data.model_dump()
    values["booking_date"] = data.booking_date.isoformat()
    values["status"] = "pending"
    values["payment_status"] = "unpaid"

    try:
        obj = store.create_booking(values)
    except SlotTakenError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from None

    logger.info(f"Booking {obj.id} created: {obj.booking_date} {obj.booking_time}")
    emit_event("booking_created", booking_payload(obj))
    return obj


@router.patch("/{id}", response_model=BookingRead)
def update_booking(
    id: int,
    data: BookingUpdate,
    store: BookingStore = Depends(get_store),
    admin: AdminPrincipal = Depends(require_admin),
):
    existing = store.get_booking(id)
    if not existing:
        raise HTTPException(status_code=404, detail="Booking not found")
    previous_status = existing.status

    try:
        obj = store.update_booking(id, data.model_dump(exclude_unset=True), admin)
    except SlotTakenError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from None

    if obj.status != previous_status:
        emit_event("booking_status_changed", {
            **booking_payload(obj),
            "previous_status": previous_status,
        })
    return obj
