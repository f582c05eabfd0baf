"""Booking-related Pydantic schemas."""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .route import RouteInfo


class TripType(str, Enum):
    """Trip type enumeration."""
    ONEWAY = "oneway"
    ROUNDTRIP = "roundtrip"
    LOCAL = "local"
    AIRPORT = "airport"


class CarType(str, Enum):
    """Car type enumeration."""
    HATCHBACK = "hatchback"
    SEDAN = "sedan"
    SUV = "suv"
    CRYSTA = "crysta"
    SCORPIO = "scorpio"


DEFAULT_PICKUP_TIME = "09:00"


class BookingRequest(BaseModel):
    """
    The fields of the booking form.

    Every field is optional at the schema level: presence, phone format and
    dates are checked by the booking validator so that each failure maps to
    one customer-facing warning. Accepts both snake_case and the camelCase
    names the site's frontend sends (``fromCity``, ``date``, ...).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field("", max_length=255, description="Customer name")
    email: str = Field("", max_length=255, description="Customer email")
    phone: str = Field("", max_length=32, description="10-digit Indian mobile number")
    from_city: str = Field("", max_length=128, description="Origin city or local pickup location")
    to_city: Optional[str] = Field("", max_length=128, description="Destination city, ignored for local trips")
    travel_date: Optional[date] = Field(None, alias="date", description="Travel or pickup date")
    return_date: Optional[date] = Field(None, description="Return date, round trips only")
    pickup_time: str = Field(DEFAULT_PICKUP_TIME, max_length=16, description="Pickup time (HH:MM)")
    car_type: str = Field("", max_length=20, description="One of hatchback, sedan, suv, crysta, scorpio")
    trip_type: str = Field(TripType.ONEWAY.value, max_length=20, description="One of oneway, roundtrip, local, airport")

    @field_validator("travel_date", "return_date", mode="before")
    @classmethod
    def blank_date_is_missing(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("to_city", mode="before")
    @classmethod
    def missing_destination_is_blank(cls, v):
        # Local rentals may send null for the destination
        return "" if v is None else v

    @field_validator("name", "email", "phone", "from_city", "to_city", "pickup_time", "car_type", "trip_type")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @property
    def is_local(self) -> bool:
        return self.trip_type == TripType.LOCAL.value

    @property
    def is_roundtrip(self) -> bool:
        return self.trip_type == TripType.ROUNDTRIP.value

    @property
    def destination(self) -> Optional[str]:
        """Destination city, or None for local rentals where it does not apply."""
        if self.is_local or not self.to_city:
            return None
        return self.to_city


class FareEstimate(BaseModel):
    """Advisory fare estimate for a booking request."""

    estimated_fare: int = Field(..., ge=0, description="Estimated fare in whole rupees")
    advance_amount: int = Field(..., ge=0, description="Fixed advance payment in rupees")
    advance_note: str = Field(..., description="Advance payment note shown with every estimate")
    trip_type: str = Field(..., description="Trip type the estimate was computed for")
    route: Optional[RouteInfo] = Field(None, description="Matched route, if any")


class BookingConfirmation(BaseModel):
    """Response schema for a persisted booking."""

    model_config = ConfigDict(from_attributes=True)

    success: bool = Field(True, description="Always true for a stored booking")
    booking_id: str = Field(..., description="Booking reference, e.g. ZC123456AB12CD")
    estimated_fare: int = Field(..., ge=0, description="Estimated fare in whole rupees")
    status: str = Field(..., description="Booking status")
    message: str = Field(..., description="Confirmation message for the customer")
    created_at: Optional[datetime] = Field(None, description="Booking creation time (ISO 8601)")
