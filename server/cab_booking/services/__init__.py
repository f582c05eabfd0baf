"""Service layer package."""

from .booking_form import BookingForm, FormBusyError, FormState
from .booking_service import BookingService, generate_booking_id
from .contact_service import ContactService
from .fare_service import FareResolver, StaticFareResolver, estimate_fare
from .route_service import RouteService, RouteTableFareResolver
from .validation import is_valid_booking, validate_booking

__all__ = [
    "BookingForm",
    "BookingService",
    "ContactService",
    "FareResolver",
    "FormBusyError",
    "FormState",
    "RouteService",
    "RouteTableFareResolver",
    "StaticFareResolver",
    "estimate_fare",
    "generate_booking_id",
    "is_valid_booking",
    "validate_booking",
]
