# backend/booking_api/schemas/blocked_dates.py

from datetime import date
from typing import Optional
from pydantic import BaseModel


class BlockedDateCreate(BaseModel):
    date: date
    reason: Optional[str] = None

    model_config = {"from_attributes": True}


class BlockedDateRead(BaseModel):
    id: int
    date: date
    reason: Optional[str] = None

    model_config = {"from_attributes": True}
