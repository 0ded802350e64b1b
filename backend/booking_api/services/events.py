"""
backend/booking_api/services/events.py

Event emitter: pushes booking events to a Redis list for downstream
notifiers (confirmation e-mail, calendar sync).

Queue: events:bookings
Delivery is best-effort; a failed push never fails the request.
"""

import json
import time
import logging

from .. import redis_client as redis_module

logger = logging.getLogger(__name__)

BOOKING_EVENTS_QUEUE = "events:bookings"


def emit_event(event_type: str, payload: dict) -> bool:
    """
    Emit a booking event.

    Returns True if the event was queued.
    """
    client = redis_module.redis_client
    if client is None:
        logger.debug(f"Redis not configured, event {event_type} dropped")
        return False

    event = {
        "type": event_type,
        **payload,
        "ts": int(time.time()),
    }
    try:
        client.rpush(BOOKING_EVENTS_QUEUE, json.dumps(event))
        logger.info(f"Event emitted: {event_type} → {BOOKING_EVENTS_QUEUE}")
        return True
    except Exception as e:
        logger.error(f"Failed to emit event {event_type}: {e}")
        return False


def booking_payload(booking) -> dict:
    return {
        "booking_id": booking.id,
        "service_id": booking.service_id,
        "booking_date": booking.booking_date,
        "booking_time": booking.booking_time,
        "status": booking.status,
        "client_email": booking.client_email,
    }
