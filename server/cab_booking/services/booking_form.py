"""Booking form controller.

Holds the fields of one customer's booking form and drives the
estimate-then-confirm flow::

    idle -> estimating -> estimated -> submitting -> confirmed
                 \\                          \\
                  +-> failed                 +-> failed

Any field change drops the current estimate and returns the form to
``idle``. Pressing *book* without a current estimate only estimates; the
customer has to press *book* again to submit. One action runs at a time
and the fields cannot be changed while it is outstanding.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Callable, Optional, Protocol

from ..core.exceptions import BookingValidationError
from ..core.observability import get_logger, metrics_collector
from ..models.booking import Booking
from ..schemas.booking import BookingRequest, FareEstimate, TripType
from ..schemas.route import RouteInfo
from .booking_service import confirmation_message, generate_booking_id
from .fare_service import FareResolver, estimate_fare
from .validation import validate_booking

logger = get_logger(__name__)

ESTIMATE_FAILED_MESSAGE = "We could not calculate your fare right now. Please try again."
BOOKING_FAILED_MESSAGE = "We could not place your booking. Please try again."

# Field names and their frontend aliases (fromCity, date, ...) both accepted
_FIELD_NAMES = {
    **{field.alias: name for name, field in BookingRequest.model_fields.items() if field.alias},
    **{name: name for name in BookingRequest.model_fields},
}


class FormState(str, Enum):
    """Booking form state enumeration."""
    IDLE = "idle"
    ESTIMATING = "estimating"
    ESTIMATED = "estimated"
    SUBMITTING = "submitting"
    CONFIRMED = "confirmed"
    FAILED = "failed"


class NoticeKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Notice:
    """Message for the customer after an action."""

    kind: NoticeKind
    title: str
    message: str


class FormBusyError(RuntimeError):
    """Raised when an action is triggered while another is still running."""


class BookingWriter(Protocol):
    """Persists a booking; :class:`~cab_booking.services.booking_service.BookingService` is one."""

    async def create_booking(
        self, request: BookingRequest, estimated_fare: int, booking_id: Optional[str] = None
    ) -> Booking:
        ...


class BookingForm:
    """
    One customer's booking form.

    Args:
        resolver: Where routes for estimates come from
        writer: Where confirmed bookings are stored
        trip_type: Trip type preselected by the page that opened the form
        route: Route preselected by the page that opened the form
        require_contact: Whether the form collects and checks name, email and phone
        today: Clock for the date check; defaults to ``date.today``
    """

    def __init__(
        self,
        resolver: FareResolver,
        writer: BookingWriter,
        *,
        trip_type: Optional[str] = None,
        route: Optional[RouteInfo] = None,
        require_contact: bool = True,
        today: Callable[[], date] = date.today,
    ):
        self.resolver = resolver
        self.writer = writer
        self.require_contact = require_contact
        self._today = today

        self.fields = BookingRequest()
        self.state = FormState.IDLE
        self.estimate: Optional[FareEstimate] = None
        self.notice: Optional[Notice] = None
        self.last_booking: Optional[Booking] = None
        self._busy = False

        # Hand-off from the previous page is applied once, here
        if trip_type:
            self.fields = self.fields.model_copy(update={"trip_type": trip_type})
        if route is not None:
            self.fields = self.fields.model_copy(
                update={"from_city": route.from_city, "to_city": route.to_city}
            )

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def estimated_fare(self) -> Optional[int]:
        return self.estimate.estimated_fare if self.estimate else None

    def set_field(self, name: str, value: Any) -> None:
        """Change one field; the current estimate is discarded."""
        self.update(**{name: value})

    def update(self, **changes: Any) -> None:
        """Change several fields at once; the current estimate is discarded."""
        self._check_not_busy()
        unknown = set(changes) - set(_FIELD_NAMES)
        if unknown:
            raise ValueError(f"Unknown booking form fields: {sorted(unknown)}")

        data = self.fields.model_dump()
        data.update({_FIELD_NAMES[key]: value for key, value in changes.items()})
        self.fields = BookingRequest.model_validate(data)
        self._clear_estimate()

    def select_route(self, route: RouteInfo) -> None:
        """Fill origin and destination from one of the popular routes."""
        self.update(from_city=route.from_city, to_city=route.to_city)

    def reset(self) -> None:
        """Return every field to its default."""
        self._check_not_busy()
        self.fields = BookingRequest()
        self._clear_estimate()

    def _clear_estimate(self) -> None:
        self.estimate = None
        if self.state != FormState.IDLE:
            self.state = FormState.IDLE

    def _check_not_busy(self) -> None:
        # Fields are locked while an estimate or submission is outstanding
        if self._busy:
            raise FormBusyError(f"Booking form is busy ({self.state.value})")

    def _begin(self) -> None:
        self._check_not_busy()
        self._busy = True
        self.notice = None

    def _validate(self) -> bool:
        try:
            validate_booking(self.fields, today=self._today(), require_contact=self.require_contact)
        except BookingValidationError as e:
            self.notice = Notice(NoticeKind.WARNING, e.title, e.message)
            logger.info("Booking form rejected", code=e.code, trip_type=self.fields.trip_type)
            return False
        return True

    async def get_estimate(self) -> Optional[int]:
        """
        Validate the form and estimate the fare.

        Returns:
            The estimated fare, or None when validation or the lookup failed
        """
        self._begin()
        try:
            return await self._estimate()
        finally:
            self._busy = False

    async def _estimate(self) -> Optional[int]:
        if not self._validate():
            self.state = FormState.IDLE
            return None

        self.state = FormState.ESTIMATING
        try:
            self.estimate = await estimate_fare(self.fields, self.resolver)
        except Exception as e:
            self.state = FormState.FAILED
            self.notice = Notice(NoticeKind.ERROR, "Estimate Failed", ESTIMATE_FAILED_MESSAGE)
            metrics_collector.record_booking_failure("estimate")
            logger.error("Fare estimate failed", error=str(e), trip_type=self.fields.trip_type)
            return None

        self.state = FormState.ESTIMATED
        trip_label = {
            TripType.ROUNDTRIP.value: "Round Trip",
            TripType.LOCAL.value: "Local Rental",
            TripType.AIRPORT.value: "Airport Transfer",
        }.get(self.fields.trip_type, "One Way")
        self.notice = Notice(
            NoticeKind.INFO,
            "Estimated Fare",
            f"{trip_label}: ₹{self.estimate.estimated_fare}. {self.estimate.advance_note}.",
        )
        return self.estimate.estimated_fare

    async def book(self) -> Optional[str]:
        """
        Confirm the booking.

        Without a current estimate this only estimates and returns None; the
        customer confirms by calling ``book`` again.

        Returns:
            The booking ID once stored, otherwise None
        """
        self._begin()
        try:
            if self.estimate is None:
                await self._estimate()
                return None
            return await self._submit()
        finally:
            self._busy = False

    async def _submit(self) -> Optional[str]:
        if not self._validate():
            return None

        self.state = FormState.SUBMITTING
        booking_id = generate_booking_id()
        fare = self.estimate.estimated_fare
        log = logger.with_context(booking_id=booking_id, trip_type=self.fields.trip_type)

        try:
            booking = await self.writer.create_booking(self.fields, fare, booking_id=booking_id)
        except Exception as e:
            # Fields and estimate are kept so the customer can retry as is
            self.state = FormState.FAILED
            self.notice = Notice(NoticeKind.ERROR, "Booking Failed", BOOKING_FAILED_MESSAGE)
            log.error("Booking submission failed", error=str(e))
            return None

        self.last_booking = booking
        self.fields = BookingRequest()
        self.estimate = None
        self.state = FormState.CONFIRMED
        self.notice = Notice(
            NoticeKind.SUCCESS, "Booking Confirmed!", confirmation_message(booking.booking_id, fare)
        )
        log.info("Booking confirmed", estimated_fare=fare)
        return booking.booking_id
