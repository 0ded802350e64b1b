from datetime import date

import pytest

from booking_api.models.tables import BlockedDates, Bookings
from booking_api.services.auth import AdminPrincipal
from booking_api.services.booking_store import BookingStore, SlotTakenError, StoreConflictError
from booking_api.services.slots import BookingConfig, UnknownServiceError, calculate_service_slots

from .conftest import upcoming

ADMIN = AdminPrincipal(name="admin", issued_at=0)
TARGET = date(2030, 6, 3)  # Monday


def booking_values(service_id, booking_time="10:00:00", status="pending", booking_date=TARGET):
    return {
        "service_id": service_id,
        "client_name": "Ada",
        "client_email": "ada@example.com",
        "client_phone": "5550100",
        "booking_date": booking_date.isoformat(),
        "booking_time": booking_time,
        "status": status,
    }


@pytest.fixture
def store(db):
    return BookingStore(db)


def test_weekly_row_lookup_uses_sunday_based_index(store, week):
    row = store.get_weekly_schedule_for_weekday(0)
    assert row.day_of_week == 0
    assert row.start_time == "09:00:00"


def test_missing_weekly_row(store):
    assert store.get_weekly_schedule_for_weekday(3) is None


def test_is_date_blocked(store, db):
    db.add(BlockedDates(date=TARGET.isoformat(), reason="Holiday"))
    db.commit()

    assert store.is_date_blocked(TARGET) is True
    assert store.is_date_blocked(date(2030, 6, 4)) is False


def test_cancelled_bookings_are_not_returned(store, hour_service):
    store.create_booking(booking_values(hour_service.id, "10:00:00"))
    store.create_booking(booking_values(hour_service.id, "11:00:00", status="cancelled"))
    store.create_booking(booking_values(hour_service.id, "12:00:00", booking_date=date(2030, 6, 4)))

    live = store.get_non_cancelled_bookings_for_date(TARGET)
    assert [b.booking_time for b in live] == ["10:00:00"]


def test_service_duration_only_for_active_services(store, db, hour_service):
    assert store.get_service_duration(hour_service.id) == 60

    hour_service.is_active = False
    db.commit()

    assert store.get_service_duration(hour_service.id) is None
    assert store.get_service_duration(9999) is None


def test_second_live_booking_for_same_slot_conflicts(store, hour_service):
    store.create_booking(booking_values(hour_service.id))

    with pytest.raises(SlotTakenError):
        store.create_booking(booking_values(hour_service.id))

    # Session is usable after the rollback
    assert len(store.list_bookings(TARGET)) == 1


def test_cancelled_booking_releases_slot(store, hour_service):
    first = store.create_booking(booking_values(hour_service.id))
    store.update_booking(first.id, {"status": "cancelled"}, ADMIN)

    second = store.create_booking(booking_values(hour_service.id))
    assert second.status == "pending"


def test_reactivating_cancelled_booking_on_taken_slot_conflicts(store, hour_service):
    first = store.create_booking(booking_values(hour_service.id))
    store.update_booking(first.id, {"status": "cancelled"}, ADMIN)
    store.create_booking(booking_values(hour_service.id))

    with pytest.raises(SlotTakenError):
        store.update_booking(first.id, {"status": "confirmed"}, ADMIN)


def test_update_missing_booking(store):
    assert store.update_booking(404, {"status": "confirmed"}, ADMIN) is None


def test_set_weekly_schedule_upserts(store):
    created = store.set_weekly_schedule(
        2, {"start_time": "10:00:00", "end_time": "14:00:00", "is_available": True}, ADMIN
    )
    updated = store.set_weekly_schedule(
        2, {"start_time": "11:00:00", "end_time": "15:00:00", "is_available": False}, ADMIN
    )

    assert updated.id == created.id
    assert updated.start_time == "11:00:00"
    assert updated.is_available is False
    assert len(store.list_weekly_schedule()) == 1


def test_duplicate_weekday_conflicts(store, week):
    with pytest.raises(StoreConflictError):
        store.create_weekly_schedule(
            {"day_of_week": 1, "start_time": "08:00:00", "end_time": "12:00:00", "is_available": True},
            ADMIN,
        )


def test_blocked_date_add_and_remove(store):
    blocked = store.add_blocked_date(TARGET, "Vacation", ADMIN)

    with pytest.raises(StoreConflictError):
        store.add_blocked_date(TARGET, None, ADMIN)

    assert store.remove_blocked_date(blocked.id, ADMIN) is True
    assert store.remove_blocked_date(blocked.id, ADMIN) is False
    assert store.is_date_blocked(TARGET) is False


def test_range_reads(store, hour_service):
    store.add_blocked_date(date(2030, 6, 5), None, ADMIN)
    store.add_blocked_date(date(2030, 7, 1), None, ADMIN)
    store.create_booking(booking_values(hour_service.id, "09:00:00"))
    store.create_booking(booking_values(hour_service.id, "09:30:00", status="cancelled"))

    assert store.get_blocked_dates_between(date(2030, 6, 1), date(2030, 6, 30)) == {"2030-06-05"}
    by_date = store.get_non_cancelled_bookings_between(date(2030, 6, 1), date(2030, 6, 30))
    assert list(by_date) == [TARGET.isoformat()]
    assert len(by_date[TARGET.isoformat()]) == 1


# ── Store + engine ───────────────────────────────────────────────────────


def test_service_slots_mark_booked_time(store, week, hour_service):
    store.create_booking(booking_values(hour_service.id, "10:00:00"))
    store.create_booking(booking_values(hour_service.id, "11:00:00", status="cancelled"))

    slots = calculate_service_slots(store, TARGET, hour_service.id, BookingConfig())

    assert len(slots) == 15
    assert [s.time for s in slots if not s.available] == ["10:00"]


def test_service_slots_blocked_date(store, week, hour_service):
    store.add_blocked_date(TARGET, None, ADMIN)
    assert calculate_service_slots(store, TARGET, hour_service.id, BookingConfig()) == []


def test_service_slots_unknown_service_falls_back(store, week):
    slots = calculate_service_slots(store, TARGET, 12345, BookingConfig(default_duration_minutes=60))
    assert len(slots) == 15


def test_service_slots_unknown_service_rejected(store, week):
    with pytest.raises(UnknownServiceError):
        calculate_service_slots(store, TARGET, 12345, BookingConfig(reject_unknown_service=True))


def test_service_slots_interval_mode_uses_booked_service_duration(store, week, hour_service, day_service):
    # An 8 hour booking at 09:00 occupies the whole day
    store.create_booking(booking_values(day_service.id, "09:00:00"))

    slots = calculate_service_slots(store, TARGET, hour_service.id, BookingConfig(occupancy_mode="interval"))

    assert slots
    assert not any(s.available for s in slots)


def test_upcoming_helper_matches_weekday():
    d = upcoming(3)
    assert (d.weekday() + 1) % 7 == 3
    assert d > date.today()
