# backend/booking_api/routers/slots.py
"""
Slots API endpoints.

GET /availability/slots    - slots of one day for a service
GET /availability/calendar - bookable days over a range
"""

from datetime import date, datetime, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..deps import get_store
from ..schemas.slots import SlotRead, SlotsCalendarResponse, SlotsDayStatus
from ..services.booking_store import BookingStore
from ..services.slots import (
    UnknownServiceError,
    calculate_calendar,
    calculate_service_slots,
    count_open_slots,
    get_booking_config,
    resolve_service_duration,
)


router = APIRouter(prefix="/availability", tags=["slots"])


def parse_date_param(value: str | None) -> date:
    if not value:
        raise HTTPException(status_code=400, detail="Date is required")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise HTTPException(status_code=400, detail="Date must be in YYYY-MM-DD format") from None


@router.get("/slots", response_model=list[SlotRead])
def get_slots(
    target_date: Optional[str] = Query(None, alias="date"),
    service_id: Optional[int] = Query(None, alias="serviceId"),
    store: BookingStore = Depends(get_store),
):
    """Get candidate start times of a day, each flagged available or taken."""
    day = parse_date_param(target_date)

    try:
        slots = calculate_service_slots(store, day, service_id, get_booking_config())
    except UnknownServiceError:
        raise HTTPException(status_code=404, detail="Service not found") from None

    return [SlotRead(time=s.time, available=s.available) for s in slots]


@router.get("/calendar", response_model=SlotsCalendarResponse)
def get_slots_calendar(
    start_date: date | None = None,
    end_date: date | None = None,
    service_id: Optional[int] = Query(None, alias="serviceId"),
    store: BookingStore = Depends(get_store),
):
    """Get calendar of bookable days, clamped to [today, today + horizon]."""
    config = get_booking_config()

    today = date.today()
    if start_date is None:
        start_date = today
    if end_date is None:
        end_date = start_date + timedelta(days=config.horizon_days)

    if start_date < today:
        start_date = today
    if end_date > today + timedelta(days=config.horizon_days):
        end_date = today + timedelta(days=config.horizon_days)
    if end_date < start_date:
        end_date = start_date

    try:
        duration = resolve_service_duration(store, service_id, config)
        calendar = calculate_calendar(store, start_date, end_date, service_id, config)
    except UnknownServiceError:
        raise HTTPException(status_code=404, detail="Service not found") from None

    days = []
    for dt, slots in calendar:
        count = count_open_slots(slots)
        days.append(SlotsDayStatus(
            date=dt,
            has_slots=count > 0,
            open_slots_count=count,
        ))

    return SlotsCalendarResponse(
        start_date=start_date,
        end_date=end_date,
        days=days,
        service_duration_minutes=duration,
        horizon_days=config.horizon_days,
        slot_step_minutes=config.slot_step_minutes,
    )
