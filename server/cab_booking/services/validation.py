"""Booking form validation.

Checks run in a fixed order and stop at the first failure, which is raised
as a :class:`BookingValidationError` carrying the warning category and the
message shown to the customer.
"""

import re
from datetime import date
from typing import Optional

from ..core.exceptions import BookingValidationError
from ..schemas.booking import BookingRequest, CarType, TripType

PHONE_PATTERN = re.compile(r"[6-9][0-9]{9}")
EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")

_CAR_TYPES = {car.value for car in CarType}
_TRIP_TYPES = {trip.value for trip in TripType}


def is_valid_phone(phone: str) -> bool:
    """True for a 10-digit Indian mobile number starting with 6, 7, 8 or 9."""
    return PHONE_PATTERN.fullmatch(phone) is not None


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def _check_contact_details(request: BookingRequest) -> None:
    if not request.name:
        raise BookingValidationError("Name Required", "Please enter your full name.", field="name")
    if not is_valid_email(request.email):
        raise BookingValidationError(
            "Valid Email Required", "Please enter a valid email address.", field="email"
        )
    if not is_valid_phone(request.phone):
        raise BookingValidationError(
            "Valid Phone Required",
            "Please enter a valid 10-digit mobile number starting with 6, 7, 8 or 9.",
            field="phone",
        )


def _check_trip_details(request: BookingRequest) -> None:
    if request.trip_type not in _TRIP_TYPES:
        raise BookingValidationError(
            "Invalid Trip Type", "Please choose one way, round trip, local rental or airport transfer.",
            field="trip_type",
        )

    if request.is_local:
        if not (request.from_city and request.travel_date and request.car_type and request.pickup_time):
            raise BookingValidationError(
                "Incomplete Form",
                "Please fill in pickup location, date, time, and car type for local rental.",
            )
    else:
        if not (request.from_city and request.to_city and request.travel_date
                and request.car_type and request.pickup_time):
            raise BookingValidationError(
                "Incomplete Form", "Please fill in all required fields including pickup time."
            )
        if request.is_roundtrip and not request.return_date:
            raise BookingValidationError(
                "Return Date Required",
                "Please select a return date for round trip booking.",
                field="return_date",
            )

    if request.car_type not in _CAR_TYPES:
        raise BookingValidationError("Invalid Car Type", "Please select a car from the list.", field="car_type")


def _check_dates(request: BookingRequest, today: date) -> None:
    if request.travel_date < today:
        raise BookingValidationError(
            "Invalid Date", "Travel date cannot be in the past.", field="date"
        )
    if request.is_roundtrip and request.return_date < request.travel_date:
        raise BookingValidationError(
            "Invalid Return Date",
            "Return date cannot be before the travel date.",
            field="return_date",
        )


def validate_booking(
    request: BookingRequest,
    *,
    today: Optional[date] = None,
    require_contact: bool = True,
) -> None:
    """
    Validate a booking request, raising on the first failed check.

    Args:
        request: Booking form fields
        today: Current calendar day; defaults to the server's local date
        require_contact: Check name, email and phone as well (the form that
            persists bookings collects them, the estimate-only form does not)

    Raises:
        BookingValidationError: Describing the first failed check
    """
    if require_contact:
        _check_contact_details(request)
    _check_trip_details(request)
    _check_dates(request, today or date.today())


def is_valid_booking(
    request: BookingRequest,
    *,
    today: Optional[date] = None,
    require_contact: bool = True,
) -> bool:
    """Pass/fail form of :func:`validate_booking`."""
    try:
        validate_booking(request, today=today, require_contact=require_contact)
    except BookingValidationError:
        return False
    return True
