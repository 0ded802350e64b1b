# backend/booking_api/services/slots/__init__.py
"""
Slots calculation module.

engine:       pure day → slots computation
availability: loads inputs from the booking store and runs the engine
"""

from .config import BookingConfig, InvalidTimeError, get_booking_config
from .engine import DayHours, OccupiedTime, Slot, build_day_slots, count_open_slots, weekday_index
from .availability import (
    UnknownServiceError,
    calculate_calendar,
    calculate_service_slots,
    resolve_service_duration,
)

__all__ = [
    "BookingConfig",
    "InvalidTimeError",
    "get_booking_config",
    "DayHours",
    "OccupiedTime",
    "Slot",
    "build_day_slots",
    "count_open_slots",
    "weekday_index",
    "UnknownServiceError",
    "calculate_calendar",
    "calculate_service_slots",
    "resolve_service_duration",
]
