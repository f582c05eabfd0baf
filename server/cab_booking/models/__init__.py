"""Models module exporting all database models."""

from .booking import Booking, BookingStatus
from .contact import ContactMessage
from .route import Route

__all__ = [
    # Contact intake
    "ContactMessage",

    # Fare reference data
    "Route",

    # Bookings
    "Booking",
    "BookingStatus",
]
