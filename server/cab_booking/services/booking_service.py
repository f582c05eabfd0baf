"""Booking service for persisting confirmed booking requests."""

import logging
import secrets
import string
import time
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import StorageError
from ..core.observability import metrics_collector
from ..models.booking import Booking, BookingStatus
from ..schemas.booking import BookingRequest
from .fare_service import FareResolver, estimate_fare
from .validation import validate_booking

logger = logging.getLogger(__name__)

BOOKING_ID_PREFIX = "ZC"
BOOKING_ID_SUFFIX_LENGTH = 6
BOOKING_ID_LENGTH = len(BOOKING_ID_PREFIX) + 6 + BOOKING_ID_SUFFIX_LENGTH

_BASE36_UPPER = string.digits + string.ascii_uppercase


def generate_booking_id(now_ms: Optional[int] = None) -> str:
    """
    Generate a booking reference.

    ``ZC`` + the last six digits of the Unix millisecond clock + six random
    uppercase base-36 characters. Uniqueness is probabilistic; callers do not
    check for collisions.
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    clock = f"{now_ms % 1_000_000:06d}"
    suffix = ''.join(secrets.choice(_BASE36_UPPER) for _ in range(BOOKING_ID_SUFFIX_LENGTH))
    return f"{BOOKING_ID_PREFIX}{clock}{suffix}"


def confirmation_message(booking_id: str, estimated_fare: int) -> str:
    return (
        f"Your booking ID is {booking_id}. Estimated fare: ₹{estimated_fare}. "
        "Our team will contact you shortly to confirm details and arrange payment."
    )


class BookingService:
    """Service for booking records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_booking(
        self,
        request: BookingRequest,
        estimated_fare: int,
        booking_id: Optional[str] = None,
    ) -> Booking:
        """
        Persist a booking record with status ``pending``.

        Args:
            request: Validated booking form fields
            estimated_fare: Fare shown to the customer
            booking_id: Pre-generated reference; generated when omitted

        Returns:
            Created booking entity

        Raises:
            StorageError: If the insert fails
        """
        booking = Booking(
            booking_id=booking_id or generate_booking_id(),
            name=request.name,
            email=request.email,
            phone=request.phone,
            from_city=request.from_city,
            to_city=request.destination,
            travel_date=request.travel_date,
            return_date=request.return_date if request.is_roundtrip else None,
            pickup_time=request.pickup_time,
            car_type=request.car_type,
            trip_type=request.trip_type,
            estimated_fare=estimated_fare,
            status=BookingStatus.PENDING.value,
        )

        try:
            self.db.add(booking)
            await self.db.commit()
            await self.db.refresh(booking)
        except SQLAlchemyError as e:
            await self.db.rollback()
            metrics_collector.record_booking_failure("submit")
            logger.error(
                "Booking insert failed",
                extra={
                    "booking_id": booking.booking_id,
                    "trip_type": request.trip_type,
                    "error": str(e)
                },
                exc_info=True
            )
            raise StorageError(detail="Booking could not be stored", operation="bookings/insert") from e

        metrics_collector.record_booking(booking.trip_type, booking.car_type)
        logger.info(
            "Booking stored",
            extra={
                "booking_id": booking.booking_id,
                "trip_type": booking.trip_type,
                "car_type": booking.car_type,
                "estimated_fare": booking.estimated_fare,
            }
        )
        return booking

    async def submit_booking(self, request: BookingRequest, resolver: FareResolver) -> Booking:
        """
        Validate, estimate and persist in one step.

        Raises:
            BookingValidationError: If a form check fails; nothing is looked up or stored
            StorageError: If the route lookup or the insert fails
        """
        validate_booking(request)
        try:
            estimate = await estimate_fare(request, resolver)
        except StorageError:
            metrics_collector.record_booking_failure("estimate")
            raise
        return await self.create_booking(request, estimate.estimated_fare)

    async def get_booking_by_booking_id(self, booking_id: str) -> Booking | None:
        """Get booking by its customer-facing reference."""
        stmt = select(Booking).where(Booking.booking_id == booking_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()
