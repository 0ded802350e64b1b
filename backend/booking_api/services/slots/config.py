# backend/booking_api/services/slots/config.py
"""
Booking configuration and wall-clock helpers for slots calculation.

All times are timezone-naive "HH:MM" / "HH:MM:SS" strings.
"""

import re
from dataclasses import dataclass
from functools import lru_cache

from ...config import settings


OCCUPANCY_MODES = ("exact", "interval")

# "HH:MM" or "HH:MM:SS"; "24:00" is accepted as an end-of-day bound
_TIME_RE = re.compile(r"^(\d{2}):(\d{2})(?::(\d{2}))?$")


class InvalidTimeError(ValueError):
    """Raised when a stored or submitted time is not a valid wall-clock time."""


@dataclass(frozen=True)
class BookingConfig:
    """
    Configuration for the slots engine.

    Attributes:
        slot_step_minutes: Grid stride between candidate start times (15/30/60)
        horizon_days: How many days ahead the calendar endpoint reports
        default_duration_minutes: Duration used when a service can't be resolved
        occupancy_mode: "exact" (start-time match) or "interval" (overlap)
        reject_unknown_service: Unknown service is an error instead of a fallback
    """
    slot_step_minutes: int = 30  # 15 / 30 / 60
    horizon_days: int = 60
    default_duration_minutes: int = 60
    occupancy_mode: str = "exact"
    reject_unknown_service: bool = False

    def __post_init__(self):
        """Validate configuration."""
        if self.slot_step_minutes not in (15, 30, 60):
            raise ValueError(f"slot_step_minutes must be 15, 30, or 60, got {self.slot_step_minutes}")
        if self.default_duration_minutes <= 0:
            raise ValueError(f"default_duration_minutes must be positive, got {self.default_duration_minutes}")
        if self.occupancy_mode not in OCCUPANCY_MODES:
            raise ValueError(f"occupancy_mode must be one of {OCCUPANCY_MODES}, got {self.occupancy_mode!r}")


@lru_cache
def get_booking_config() -> BookingConfig:
    """Get booking configuration (singleton, built from settings)."""
    return BookingConfig(
        default_duration_minutes=settings.default_service_duration_minutes,
        occupancy_mode=settings.occupancy_mode,
        reject_unknown_service=settings.reject_unknown_service,
    )


def time_str_to_minutes(value: str) -> int:
    """
    Convert "HH:MM" or "HH:MM:SS" to minutes since midnight.

    Seconds are dropped. Raises InvalidTimeError on anything else.
    """
    match = _TIME_RE.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise InvalidTimeError(f"Invalid time: {value!r}")

    hour, minute = int(match.group(1)), int(match.group(2))
    second = int(match.group(3) or 0)
    if minute > 59 or second > 59:
        raise InvalidTimeError(f"Invalid time: {value!r}")
    if hour > 24 or (hour == 24 and (minute or second)):
        raise InvalidTimeError(f"Invalid time: {value!r}")

    return hour * 60 + minute


def minutes_to_time_str(minutes: int) -> str:
    """Convert minutes since midnight to "HH:MM"."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def normalize_time(value: str) -> str:
    """Drop seconds: 09:00:00 -> 09:00."""
    return minutes_to_time_str(time_str_to_minutes(value))


def to_db_time(value: str) -> str:
    """Column format: 09:00 -> 09:00:00."""
    return f"{normalize_time(value)}:00"
