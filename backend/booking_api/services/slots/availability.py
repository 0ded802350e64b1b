# backend/booking_api/services/slots/availability.py
"""
Loads engine inputs from the booking store and runs the slot engine.

Day view:      one date, one service → list[Slot]
Calendar view: date range → per-day slot lists (schedule, blocks and
               bookings are loaded once for the whole range)
"""

import logging
from datetime import date, timedelta

from ..booking_store import BookingStore
from .config import BookingConfig, get_booking_config
from .engine import DayHours, OccupiedTime, Slot, build_day_slots, weekday_index

logger = logging.getLogger(__name__)


class UnknownServiceError(LookupError):
    """Service id did not resolve and the fallback is disabled."""


def resolve_service_duration(
    store: BookingStore,
    service_id: int | None,
    config: BookingConfig | None = None,
) -> int:
    """
    Duration for service_id, or the configured default.

    No service_id → default. Unknown/inactive service → default, or
    UnknownServiceError when config.reject_unknown_service is set.
    """
    config = config or get_booking_config()

    if service_id is None:
        return config.default_duration_minutes

    duration = store.get_service_duration(service_id)
    if duration is not None:
        return duration

    if config.reject_unknown_service:
        raise UnknownServiceError(f"Service {service_id} not found")

    logger.warning(
        f"Service {service_id} not found, using default duration "
        f"{config.default_duration_minutes} min"
    )
    return config.default_duration_minutes


def calculate_service_slots(
    store: BookingStore,
    target_date: date,
    service_id: int | None = None,
    config: BookingConfig | None = None,
) -> list[Slot]:
    """Slots for a service on a specific date."""
    config = config or get_booking_config()
    duration = resolve_service_duration(store, service_id, config)

    # Blocked dates short-circuit before anything else is loaded
    if store.is_date_blocked(target_date):
        return []

    row = store.get_weekly_schedule_for_weekday(weekday_index(target_date))
    if row is None or not row.is_available:
        return []

    bookings = store.get_non_cancelled_bookings_for_date(target_date)

    return build_day_slots(
        hours=_to_day_hours(row),
        is_blocked=False,
        occupied=[_to_occupied(b) for b in bookings],
        duration_minutes=duration,
        config=config,
    )


def calculate_calendar(
    store: BookingStore,
    start_date: date,
    end_date: date,
    service_id: int | None = None,
    config: BookingConfig | None = None,
) -> list[tuple[date, list[Slot]]]:
    """Slots for every date in [start_date, end_date]."""
    config = config or get_booking_config()
    duration = resolve_service_duration(store, service_id, config)

    schedule = store.get_weekly_schedule_by_weekday()
    blocked = store.get_blocked_dates_between(start_date, end_date)
    bookings_by_date = store.get_non_cancelled_bookings_between(start_date, end_date)

    days = []
    current = start_date
    while current <= end_date:
        row = schedule.get(weekday_index(current))
        slots = build_day_slots(
            hours=_to_day_hours(row) if row is not None else None,
            is_blocked=current.isoformat() in blocked,
            occupied=[_to_occupied(b) for b in bookings_by_date.get(current.isoformat(), [])],
            duration_minutes=duration,
            config=config,
        )
        days.append((current, slots))
        current += timedelta(days=1)

    return days


# ── Helpers ──────────────────────────────────────────────────────────────


def _to_day_hours(row) -> DayHours:
    return DayHours(
        start_time=row.start_time,
        end_time=row.end_time,
        is_available=bool(row.is_available),
    )


def _to_occupied(booking) -> OccupiedTime:
    service = booking.service
    return OccupiedTime(
        time=booking.booking_time,
        duration_minutes=service.duration if service is not None else None,
    )
