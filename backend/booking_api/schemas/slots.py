# backend/booking_api/schemas/slots.py
"""
Pydantic schemas for slots API.
"""

from datetime import date
from pydantic import BaseModel, Field


class SlotRead(BaseModel):
    """A candidate start time and whether it can still be booked."""
    time: str  # "HH:MM"
    available: bool

    model_config = {"from_attributes": True}


class SlotsDayStatus(BaseModel):
    """Status of a single day in calendar."""
    date: date
    has_slots: bool
    open_slots_count: int = 0

    model_config = {"from_attributes": True}


class SlotsCalendarResponse(BaseModel):
    """Response with calendar of bookable days."""
    start_date: date
    end_date: date
    days: list[SlotsDayStatus]

    # Metadata
    service_duration_minutes: int
    horizon_days: int
    slot_step_minutes: int = Field(description="Grid step in minutes")

    model_config = {"from_attributes": True}
