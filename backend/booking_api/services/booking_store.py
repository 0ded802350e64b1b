# backend/booking_api/services/booking_store.py
"""
Booking store: persistence for services, weekly schedule, blocked dates and bookings.

Read shapes consumed by the slots engine:
  get_weekly_schedule_for_weekday / is_date_blocked /
  get_non_cancelled_bookings_for_date / get_service_duration

Privileged writes take an explicit AdminPrincipal (logged as actor).
Double booking is prevented by the partial unique index on
(booking_date, booking_time); a violation surfaces as SlotTakenError.
"""

import logging
from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from ..models.tables import (
    RELEASED_STATUSES,
    Availability as DBAvailability,
    BlockedDates as DBBlockedDates,
    Bookings as DBBookings,
    Services as DBServices,
)
from .auth import AdminPrincipal

logger = logging.getLogger(__name__)


class StoreConflictError(Exception):
    """Unique constraint violated."""


class SlotTakenError(StoreConflictError):
    """A live booking already holds this date and time."""


class BookingStore:
    def __init__(self, db: Session):
        self.db = db

    # ── Engine reads ─────────────────────────────────────────────────────

    def get_weekly_schedule_for_weekday(self, weekday: int) -> DBAvailability | None:
        return (
            self.db.query(DBAvailability)
            .filter(DBAvailability.day_of_week == weekday)
            .first()
        )

    def is_date_blocked(self, target_date: date) -> bool:
        return (
            self.db.query(DBBlockedDates.id)
            .filter(DBBlockedDates.date == target_date.isoformat())
            .first()
            is not None
        )

    def get_non_cancelled_bookings_for_date(self, target_date: date) -> list[DBBookings]:
        return (
            self.db.query(DBBookings)
            .options(joinedload(DBBookings.service))
            .filter(
                DBBookings.booking_date == target_date.isoformat(),
                DBBookings.status.notin_(RELEASED_STATUSES),
            )
            .order_by(DBBookings.booking_time)
            .all()
        )

    def get_service_duration(self, service_id: int) -> int | None:
        """Duration of an active service, None if unknown or inactive."""
        service = self.get_active_service(service_id)
        return service.duration if service else None

    # ── Range reads (calendar) ───────────────────────────────────────────

    def get_weekly_schedule_by_weekday(self) -> dict[int, DBAvailability]:
        return {row.day_of_week: row for row in self.list_weekly_schedule()}

    def get_blocked_dates_between(self, start: date, end: date) -> set[str]:
        rows = (
            self.db.query(DBBlockedDates.date)
            .filter(
                DBBlockedDates.date >= start.isoformat(),
                DBBlockedDates.date <= end.isoformat(),
            )
            .all()
        )
        return {row.date for row in rows}

    def get_non_cancelled_bookings_between(self, start: date, end: date) -> dict[str, list[DBBookings]]:
        rows = (
            self.db.query(DBBookings)
            .options(joinedload(DBBookings.service))
            .filter(
                DBBookings.booking_date >= start.isoformat(),
                DBBookings.booking_date <= end.isoformat(),
                DBBookings.status.notin_(RELEASED_STATUSES),
            )
            .all()
        )
        by_date: dict[str, list[DBBookings]] = {}
        for booking in rows:
            by_date.setdefault(booking.booking_date, []).append(booking)
        return by_date

    # ── Services ─────────────────────────────────────────────────────────

    def get_active_service(self, service_id: int) -> DBServices | None:
        return (
            self.db.query(DBServices)
            .filter(
                DBServices.id == service_id,
                DBServices.is_active.is_(True),
            )
            .first()
        )

    def list_active_services(self) -> list[DBServices]:
        return (
            self.db.query(DBServices)
            .filter(DBServices.is_active.is_(True))
            .order_by(DBServices.sort_order, DBServices.id)
            .all()
        )

    def get_service(self, service_id: int) -> DBServices | None:
        return self.db.get(DBServices, service_id)

    def create_service(self, data: dict, actor: AdminPrincipal) -> DBServices:
        obj = DBServices(**data)
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        logger.info(f"Service {obj.id} created by {actor.name}: {obj.name}")
        return obj

    def update_service(self, service_id: int, data: dict, actor: AdminPrincipal) -> DBServices | None:
        obj = self.db.get(DBServices, service_id)
        if not obj:
            return None

        for field, value in data.items():
            setattr(obj, field, value)

        self.db.commit()
        self.db.refresh(obj)
        logger.info(f"Service {service_id} updated by {actor.name}: {data}")
        return obj

    def deactivate_service(self, service_id: int, actor: AdminPrincipal) -> bool:
        """Soft delete: bookings keep their FK, the service stops being offered."""
        obj = self.db.get(DBServices, service_id)
        if not obj:
            return False

        obj.is_active = False
        self.db.commit()
        logger.info(f"Service {service_id} deactivated by {actor.name}")
        return True

    # ── Weekly schedule ──────────────────────────────────────────────────

    def list_weekly_schedule(self) -> list[DBAvailability]:
        return self.db.query(DBAvailability).order_by(DBAvailability.day_of_week).all()

    def get_weekly_schedule(self, id: int) -> DBAvailability | None:
        return self.db.get(DBAvailability, id)

    def create_weekly_schedule(self, data: dict, actor: AdminPrincipal) -> DBAvailability:
        obj = DBAvailability(**data)
        self.db.add(obj)
        self._commit_or_conflict(f"Schedule for weekday {data.get('day_of_week')} already exists")
        self.db.refresh(obj)
        logger.info(f"Weekly schedule created: weekday={obj.day_of_week} by {actor.name}")
        return obj

    def update_weekly_schedule(self, id: int, data: dict, actor: AdminPrincipal) -> DBAvailability | None:
        obj = self.db.get(DBAvailability, id)
        if not obj:
            return None

        for field, value in data.items():
            setattr(obj, field, value)

        self._commit_or_conflict(f"Schedule for weekday {obj.day_of_week} already exists")
        self.db.refresh(obj)
        logger.info(f"Weekly schedule updated: weekday={obj.day_of_week} by {actor.name}")
        return obj

    def set_weekly_schedule(self, day_of_week: int, data: dict, actor: AdminPrincipal) -> DBAvailability:
        """Insert or replace the row for a weekday."""
        obj = self.get_weekly_schedule_for_weekday(day_of_week)
        if obj is None:
            obj = DBAvailability(day_of_week=day_of_week)
            self.db.add(obj)

        for field, value in data.items():
            setattr(obj, field, value)

        self._commit_or_conflict(f"Schedule for weekday {day_of_week} already exists")
        self.db.refresh(obj)
        logger.info(f"Weekly schedule set: weekday={day_of_week} by {actor.name}")
        return obj

    # ── Blocked dates ────────────────────────────────────────────────────

    def list_blocked_dates(self) -> list[DBBlockedDates]:
        return self.db.query(DBBlockedDates).order_by(DBBlockedDates.date).all()

    def add_blocked_date(self, target_date: date, reason: str | None, actor: AdminPrincipal) -> DBBlockedDates:
        obj = DBBlockedDates(date=target_date.isoformat(), reason=reason)
        self.db.add(obj)
        self._commit_or_conflict(f"Date {target_date.isoformat()} is already blocked")
        self.db.refresh(obj)
        logger.info(f"Blocked date added: {obj.date} by {actor.name}")
        return obj

    def remove_blocked_date(self, id: int, actor: AdminPrincipal) -> bool:
        obj = self.db.get(DBBlockedDates, id)
        if not obj:
            return False

        self.db.delete(obj)
        self.db.commit()
        logger.info(f"Blocked date removed: {obj.date} by {actor.name}")
        return True

    # ── Bookings ─────────────────────────────────────────────────────────

    def list_bookings(self, target_date: date | None = None) -> list[DBBookings]:
        query = self.db.query(DBBookings)
        if target_date is not None:
            query = query.filter(DBBookings.booking_date == target_date.isoformat())
        return query.order_by(DBBookings.created_at, DBBookings.id).all()

    def get_booking(self, id: int) -> DBBookings | None:
        return self.db.get(DBBookings, id)

    def create_booking(self, data: dict) -> DBBookings:
        obj = DBBookings(**data)
        self.db.add(obj)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning(
                f"Booking conflict: {data.get('booking_date')} {data.get('booking_time')} already taken"
            )
            raise SlotTakenError("Slot is no longer available") from None
        self.db.refresh(obj)
        return obj

    def update_booking(self, id: int, data: dict, actor: AdminPrincipal) -> DBBookings | None:
        obj = self.db.get(DBBookings, id)
        if not obj:
            return None

        for field, value in data.items():
            setattr(obj, field, value)

        try:
            self.db.commit()
        except IntegrityError:
            # e.g. reactivating a cancelled booking whose slot was retaken
            self.db.rollback()
            raise SlotTakenError("Slot is no longer available") from None

        self.db.refresh(obj)
        logger.info(f"Booking {id} updated by {actor.name}: {data}")
        return obj

    # ── Helpers ──────────────────────────────────────────────────────────

    def _commit_or_conflict(self, message: str) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise StoreConflictError(message) from None
