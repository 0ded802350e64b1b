# backend/booking_api/schemas/availability.py
"""
Weekly schedule rows (one per weekday, 0 = Sunday).

Times are accepted as "HH:MM" or "HH:MM:SS" and stored as "HH:MM:SS".
"""

from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from ..services.slots.config import time_str_to_minutes, to_db_time


def check_time_range(start_time: str | None, end_time: str | None, is_available: bool | None) -> None:
    if is_available is False or start_time is None or end_time is None:
        return
    if time_str_to_minutes(start_time) >= time_str_to_minutes(end_time):
        raise ValueError("start_time must be before end_time")


class WeeklyScheduleBase(BaseModel):
    start_time: str = Field(description="HH:MM")
    end_time: str = Field(description="HH:MM")
    is_available: bool = True

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        return to_db_time(v)

    @model_validator(mode="after")
    def validate_range(self):
        check_time_range(self.start_time, self.end_time, self.is_available)
        return self


class WeeklyScheduleCreate(WeeklyScheduleBase):
    day_of_week: int = Field(ge=0, le=6, description="0 = Sunday ... 6 = Saturday")

    model_config = {"from_attributes": True}


class WeeklyScheduleSet(WeeklyScheduleBase):
    """Body of PUT /availability/day/{day_of_week}."""

    model_config = {"from_attributes": True}


class WeeklyScheduleUpdate(BaseModel):
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    is_available: Optional[bool] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("must not be null")
        return to_db_time(v)

    @field_validator("is_available")
    @classmethod
    def not_null(cls, v: Optional[bool]) -> bool:
        if v is None:
            raise ValueError("must not be null")
        return v

    # Partial bodies only; the router checks the merged row
    @model_validator(mode="after")
    def validate_range(self):
        check_time_range(self.start_time, self.end_time, self.is_available)
        return self

    model_config = {"from_attributes": True}


class WeeklyScheduleRead(BaseModel):
    id: int
    day_of_week: int
    start_time: str
    end_time: str
    is_available: bool

    model_config = {"from_attributes": True}
