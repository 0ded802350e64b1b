# backend/booking_api/services/slots/engine.py
"""
Slot engine: turns one day's working hours into bookable start times.

Pure functions only, no DB and no clock. Given the same inputs the output
is always the same.

Precedence:
  blocked date > missing / closed weekday row > working hours

Grid:
  t = start, start + step, ... while t + duration <= end
  (origin is the configured day start, not :00/:30)

Occupancy:
  exact:    slot taken iff a live booking starts at exactly that "HH:MM"
  interval: slot taken iff [t, t + duration) overlaps a live booking
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from .config import (
    BookingConfig,
    get_booking_config,
    minutes_to_time_str,
    normalize_time,
    time_str_to_minutes,
)


@dataclass(frozen=True)
class DayHours:
    """Working hours of one weekday ("HH:MM" or "HH:MM:SS")."""
    start_time: str
    end_time: str
    is_available: bool = True


@dataclass(frozen=True)
class OccupiedTime:
    """Start time of a live booking; duration is only used in interval mode."""
    time: str
    duration_minutes: int | None = None


@dataclass(frozen=True)
class Slot:
    time: str  # "HH:MM"
    available: bool


def weekday_index(target_date: date) -> int:
    """Weekday with 0 = Sunday ... 6 = Saturday."""
    return (target_date.weekday() + 1) % 7


def build_day_slots(
    hours: DayHours | None,
    is_blocked: bool,
    occupied: Iterable[OccupiedTime],
    duration_minutes: int,
    config: BookingConfig | None = None,
) -> list[Slot]:
    """
    Build the ordered slot list for one day.

    Returns:
        Slots ascending by time. Empty list = nothing bookable.

    Raises:
        InvalidTimeError: malformed working hours or booking time
        ValueError: non-positive duration
    """
    config = config or get_booking_config()

    if duration_minutes <= 0:
        raise ValueError(f"duration_minutes must be positive, got {duration_minutes}")

    if is_blocked or hours is None or not hours.is_available:
        return []

    start_min = time_str_to_minutes(hours.start_time)
    end_min = time_str_to_minutes(hours.end_time)

    if config.occupancy_mode == "interval":
        intervals = _occupied_intervals(occupied, config.default_duration_minutes)

        def is_taken(t: int) -> bool:
            return any(t < b_end and b_start < t + duration_minutes for b_start, b_end in intervals)
    else:
        taken = {normalize_time(o.time) for o in occupied}

        def is_taken(t: int) -> bool:
            return minutes_to_time_str(t) in taken

    slots: list[Slot] = []
    t = start_min
    # end <= start (or overnight rows) never enter the loop
    while t + duration_minutes <= end_min:
        slots.append(Slot(time=minutes_to_time_str(t), available=not is_taken(t)))
        t += config.slot_step_minutes

    return slots


def count_open_slots(slots: list[Slot]) -> int:
    return sum(1 for s in slots if s.available)


def _occupied_intervals(
    occupied: Iterable[OccupiedTime],
    default_duration: int,
) -> list[tuple[int, int]]:
    """[start, end) minute intervals claimed by live bookings."""
    intervals = []
    for o in occupied:
        start = time_str_to_minutes(o.time)
        duration = o.duration_minutes or default_duration
        intervals.append((start, start + duration))
    return intervals
