# backend/booking_api/schemas/bookings.py

from datetime import date, datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator

from ..services.slots.config import to_db_time

BookingStatus = Literal["pending", "confirmed", "completed", "cancelled"]
PaymentStatus = Literal["unpaid", "paid", "refunded"]


class BookingCreate(BaseModel):
    service_id: int
    client_name: str = Field(min_length=1)
    client_email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    client_phone: str = Field(min_length=3)
    booking_date: date
    booking_time: str = Field(description="Start time, HH:MM")
    notes: Optional[str] = None

    @field_validator("booking_time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        return to_db_time(v)

    model_config = {"from_attributes": True}


class BookingUpdate(BaseModel):
    """Date and time are not editable: reschedule = cancel + new booking."""
    status: Optional[BookingStatus] = None
    payment_status: Optional[PaymentStatus] = None
    notes: Optional[str] = None

    @field_validator("status", "payment_status")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v

    model_config = {"from_attributes": True}


class BookingRead(BaseModel):
    id: int
    service_id: int
    client_name: str
    client_email: str
    client_phone: str
    booking_date: date
    booking_time: str
    status: str
    payment_status: str
    notes: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}
