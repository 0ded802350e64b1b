# backend/booking_api/seed.py
"""
Initial data for an empty database.

Usage:
    python -m booking_api.seed
"""

import logging

from sqlalchemy.orm import Session

from .models.tables import Availability, Services

logger = logging.getLogger(__name__)


# 0 = Sunday: short day, the rest of the week 09:00-17:00
WEEKLY_SCHEDULE = [
    {"day_of_week": 0, "start_time": "09:00:00", "end_time": "14:00:00", "is_available": True},
    *[
        {"day_of_week": day, "start_time": "09:00:00", "end_time": "17:00:00", "is_available": True}
        for day in range(1, 7)
    ],
]

SERVICES = [
    {
        "name": "Concept Development Meeting",
        "description": "A working session on your vision, idea or concept, "
                       "with results you can take home and refine.",
        "duration": 120,
        "price": 5000,
        "sort_order": 1,
    },
    {
        "name": "Logo design",
        "description": "Still renders and moving icons built from your ideas for the logo.",
        "duration": 120,
        "price": 5000,
        "sort_order": 2,
    },
    {
        "name": "Website Skeleton Design",
        "description": "A creative meeting that ends with a visual outline of your website.",
        "duration": 120,
        "price": 5000,
        "sort_order": 3,
    },
    {
        "name": "Website Launch",
        "description": "Take your finished site live.",
        "duration": 120,
        "price": 10000,
        "sort_order": 4,
    },
]


def seed_database_if_empty(db: Session) -> bool:
    """Insert the weekly schedule and starter services. Returns False if data exists."""
    if db.query(Services.id).first() is not None:
        logger.info("Database already has data, skipping seed")
        return False

    logger.info("Seeding database with initial data...")

    existing_days = {row.day_of_week for row in db.query(Availability.day_of_week).all()}
    for item in WEEKLY_SCHEDULE:
        if item["day_of_week"] not in existing_days:
            db.add(Availability(**item))

    for item in SERVICES:
        db.add(Services(**item))

    db.commit()
    logger.info("Database seeded successfully")
    return True


if __name__ == "__main__":
    from .database import SessionLocal

    logging.basicConfig(level=logging.INFO)
    session = SessionLocal()
    try:
        seed_database_if_empty(session)
    finally:
        session.close()
