from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Text,
    func,
    text,
    true,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()
metadata = Base.metadata

# Statuses that no longer hold a slot
RELEASED_STATUSES = ("cancelled",)


class Services(Base):
    __tablename__ = 'services'

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    duration = Column(Integer, nullable=False)
    price = Column(Integer, nullable=False)
    image_url = Column(Text)
    is_active = Column(Boolean, nullable=False, server_default=true())
    sort_order = Column(Integer, nullable=False, server_default=text('0'))

    bookings = relationship('Bookings', back_populates='service')


class Availability(Base):
    __tablename__ = 'availability'

    id = Column(Integer, primary_key=True)
    day_of_week = Column(Integer, nullable=False, unique=True)  # 0 = Sunday
    start_time = Column(Text, nullable=False)  # "HH:MM:SS"
    end_time = Column(Text, nullable=False)
    is_available = Column(Boolean, nullable=False, server_default=true())


class BlockedDates(Base):
    __tablename__ = 'blocked_dates'

    id = Column(Integer, primary_key=True)
    date = Column(Text, nullable=False, unique=True)  # "YYYY-MM-DD"
    reason = Column(Text)


class Bookings(Base):
    __tablename__ = 'bookings'
    __table_args__ = (
        # One live booking per start time; cancelled rows release the slot.
        Index(
            'uq_bookings_live_slot',
            'booking_date',
            'booking_time',
            unique=True,
            sqlite_where=text("status != 'cancelled'"),
            postgresql_where=text("status != 'cancelled'"),
        ),
    )

    id = Column(Integer, primary_key=True)
    service_id = Column(ForeignKey('services.id'), nullable=False)
    client_name = Column(Text, nullable=False)
    client_email = Column(Text, nullable=False)
    client_phone = Column(Text, nullable=False)
    booking_date = Column(Text, nullable=False)  # "YYYY-MM-DD"
    booking_time = Column(Text, nullable=False)  # "HH:MM:SS"
    status = Column(Text, nullable=False, server_default=text("'pending'"))
    payment_status = Column(Text, nullable=False, server_default=text("'unpaid'"))
    notes = Column(Text)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    service = relationship('Services', back_populates='bookings')
