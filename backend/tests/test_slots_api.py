from datetime import date, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from booking_api.models.tables import Availability, BlockedDates, Bookings
from booking_api.services.booking_store import BookingStore
from booking_api.services.slots import BookingConfig

from .conftest import upcoming

MONDAY = upcoming(1)


def add_booking(db, service_id, booking_time, status="pending", booking_date=MONDAY):
    db.add(Bookings(
        service_id=service_id,
        client_name="Grace",
        client_email="grace@example.com",
        client_phone="5550101",
        booking_date=booking_date.isoformat(),
        booking_time=booking_time,
        status=status,
    ))
    db.commit()


def get_slots(client, **params):
    return client.get("/availability/slots", params=params)


def test_date_is_required(client):
    r = get_slots(client)
    assert r.status_code == 400
    assert r.json()["detail"] == "Date is required"


@pytest.mark.parametrize("bad", ["tomorrow", "2030-13-01", "03/06/2030"])
def test_invalid_date(client, bad):
    assert get_slots(client, date=bad).status_code == 400


def test_open_day(client, week, hour_service):
    r = get_slots(client, date=MONDAY.isoformat(), serviceId=hour_service.id)

    assert r.status_code == 200
    body = r.json()
    assert len(body) == 15
    assert body[0] == {"time": "09:00", "available": True}
    assert body[-1] == {"time": "16:00", "available": True}


def test_booked_time_is_unavailable(client, db, week, hour_service):
    add_booking(db, hour_service.id, "10:00:00")

    body = get_slots(client, date=MONDAY.isoformat(), serviceId=hour_service.id).json()

    assert len(body) == 15
    assert [s["time"] for s in body if not s["available"]] == ["10:00"]


def test_cancelled_booking_keeps_slot_open(client, db, week, hour_service):
    add_booking(db, hour_service.id, "11:00:00", status="cancelled")

    body = get_slots(client, date=MONDAY.isoformat(), serviceId=hour_service.id).json()

    assert {"time": "11:00", "available": True} in body
    assert all(s["available"] for s in body)


def test_long_service(client, week, day_service):
    body = get_slots(client, date=MONDAY.isoformat(), serviceId=day_service.id).json()
    assert body == [{"time": "09:00", "available": True}]


def test_blocked_date(client, db, week, hour_service):
    db.add(BlockedDates(date=MONDAY.isoformat(), reason="Closed"))
    db.commit()
    add_booking(db, hour_service.id, "10:00:00")

    assert get_slots(client, date=MONDAY.isoformat(), serviceId=hour_service.id).json() == []


def test_no_row_for_weekday(client, hour_service):
    assert get_slots(client, date=MONDAY.isoformat(), serviceId=hour_service.id).json() == []


def test_closed_weekday(client, db, hour_service):
    db.add(Availability(day_of_week=1, start_time="09:00:00", end_time="17:00:00", is_available=False))
    db.commit()

    assert get_slots(client, date=MONDAY.isoformat(), serviceId=hour_service.id).json() == []


def test_without_service_uses_default_duration(client, week):
    body = get_slots(client, date=MONDAY.isoformat()).json()
    assert len(body) == 15


def test_unknown_service_falls_back_to_default(client, week):
    body = get_slots(client, date=MONDAY.isoformat(), serviceId=9999).json()
    assert len(body) == 15


def test_unknown_service_rejected_when_configured(client, week, monkeypatch):
    monkeypatch.setattr(
        "booking_api.routers.slots.get_booking_config",
        lambda: BookingConfig(reject_unknown_service=True),
    )

    r = get_slots(client, date=MONDAY.isoformat(), serviceId=9999)
    assert r.status_code == 404


def test_malformed_stored_time_is_an_error(client, db, hour_service):
    db.add(Availability(day_of_week=1, start_time="9 o'clock", end_time="17:00:00", is_available=True))
    db.commit()

    r = get_slots(client, date=MONDAY.isoformat(), serviceId=hour_service.id)
    assert r.status_code == 500
    assert r.json()["detail"] == "Invalid schedule data"


def test_storage_failure_fails_closed(client, week, monkeypatch):
    def broken(self, target_date):
        raise OperationalError("SELECT 1", {}, Exception("database is down"))

    monkeypatch.setattr(BookingStore, "is_date_blocked", broken)

    r = get_slots(client, date=MONDAY.isoformat())
    assert r.status_code == 503
    assert r.json() == {"detail": "Storage unavailable"}


def test_repeated_requests_match(client, db, week, hour_service):
    add_booking(db, hour_service.id, "13:30:00")
    params = {"date": MONDAY.isoformat(), "serviceId": hour_service.id}

    assert get_slots(client, **params).json() == get_slots(client, **params).json()


# ── Calendar ─────────────────────────────────────────────────────────────


def test_calendar_reports_open_and_blocked_days(client, db, week, day_service):
    blocked = MONDAY + timedelta(days=1)
    db.add(BlockedDates(date=blocked.isoformat()))
    db.commit()
    add_booking(db, day_service.id, "09:00:00")

    r = client.get("/availability/calendar", params={
        "start_date": MONDAY.isoformat(),
        "end_date": (MONDAY + timedelta(days=2)).isoformat(),
        "serviceId": day_service.id,
    })

    assert r.status_code == 200
    body = r.json()
    assert body["service_duration_minutes"] == 480
    assert body["slot_step_minutes"] == 30
    assert body["days"] == [
        {"date": MONDAY.isoformat(), "has_slots": False, "open_slots_count": 0},
        {"date": blocked.isoformat(), "has_slots": False, "open_slots_count": 0},
        {"date": (MONDAY + timedelta(days=2)).isoformat(), "has_slots": True, "open_slots_count": 1},
    ]


def test_calendar_is_clamped_to_horizon(client, week):
    today = date.today()
    r = client.get("/availability/calendar", params={
        "start_date": (today - timedelta(days=10)).isoformat(),
        "end_date": (today + timedelta(days=400)).isoformat(),
    })

    body = r.json()
    assert body["start_date"] == today.isoformat()
    assert body["end_date"] == (today + timedelta(days=body["horizon_days"])).isoformat()
    assert len(body["days"]) == body["horizon_days"] + 1
