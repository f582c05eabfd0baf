"""Booking record model definition."""

from datetime import date, datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, Date, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base


class BookingStatus(str, Enum):
    """Booking status enumeration. Records are only ever created as PENDING."""
    PENDING = "pending"


class Booking(Base):
    """A confirmed booking request awaiting a call back from the operator."""

    __tablename__ = "bookings"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    booking_id: Mapped[str] = mapped_column(String(32), nullable=False, unique=True, index=True)

    # Customer
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(16), nullable=False, index=True)

    # Trip
    from_city: Mapped[str] = mapped_column(String(128), nullable=False)
    to_city: Mapped[str | None] = mapped_column(String(128), nullable=True)
    travel_date: Mapped[date] = mapped_column(Date, nullable=False)
    return_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    pickup_time: Mapped[str] = mapped_column(String(16), nullable=False)
    car_type: Mapped[str] = mapped_column(String(20), nullable=False)
    trip_type: Mapped[str] = mapped_column(String(20), nullable=False)

    estimated_fare: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=BookingStatus.PENDING.value,
        index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        nullable=False,
        server_default=func.now()
    )

    __table_args__ = (
        CheckConstraint("estimated_fare > 0", name="ck_booking_fare_positive"),
        CheckConstraint("length(booking_id) > 0", name="ck_booking_id_not_empty"),
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(booking_id='{self.booking_id}', trip_type={self.trip_type}, "
            f"car_type={self.car_type}, estimated_fare={self.estimated_fare}, status={self.status})>"
        )
