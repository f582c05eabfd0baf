"""Fare estimation.

Estimates are advisory. A local rental is a flat fare; every other trip
resolves its city pair against route reference data, picks a price tier by
vehicle class where the route carries prices, and scales round trips.

Where routes come from is a :class:`FareResolver`: the in-memory popular
routes (:class:`StaticFareResolver`) or the ``routes`` table
(:class:`~cab_booking.services.route_service.RouteTableFareResolver`).
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Protocol

from ..core.observability import metrics_collector
from ..schemas.booking import BookingRequest, FareEstimate, TripType
from ..schemas.route import RouteInfo
from .catalog import POPULAR_ROUTES, SEDAN_TIER, SUV_TIER

logger = logging.getLogger(__name__)

LOCAL_BASE_FARE = 1500
DEFAULT_BASE_FARE = 2000
ROUNDTRIP_MULTIPLIER = Decimal("1.8")
ADVANCE_AMOUNT = 500
ADVANCE_NOTE = f"Pay ₹{ADVANCE_AMOUNT} advance"


class FareResolver(Protocol):
    """Route reference data: looks up the route for a city pair and lists the known routes."""

    async def resolve(self, from_city: str, to_city: str) -> Optional[RouteInfo]:
        ...

    async def list_routes(self) -> list[RouteInfo]:
        ...


def normalize_city(name: str) -> str:
    """Lookup key for a city name: trimmed, lowercased, inner whitespace collapsed."""
    return " ".join(name.split()).lower()


def route_matches(route: RouteInfo, from_city: str, to_city: str) -> bool:
    """True when the route joins the two cities, in either direction."""
    origin, destination = normalize_city(from_city), normalize_city(to_city)
    route_from, route_to = normalize_city(route.from_city), normalize_city(route.to_city)
    return (route_from, route_to) in ((origin, destination), (destination, origin))


def find_route(routes: Iterable[RouteInfo], from_city: str, to_city: str) -> Optional[RouteInfo]:
    """Return the first route joining the two cities, or None."""
    return next((route for route in routes if route_matches(route, from_city, to_city)), None)


def base_fare_for(route: Optional[RouteInfo], car_type: str) -> int:
    """
    Base fare before the round-trip adjustment.

    Uses the route's price for the car's tier when it has one; otherwise
    the flat default fare.
    """
    if route is None:
        return DEFAULT_BASE_FARE

    if car_type in SEDAN_TIER and route.sedan_price is not None:
        return route.sedan_price
    if car_type in SUV_TIER and route.suv_price is not None:
        return route.suv_price
    return DEFAULT_BASE_FARE


def apply_trip_multiplier(base_fare: int, trip_type: str) -> int:
    """Scale a round trip's base fare by 1.8, rounding half up to whole rupees."""
    if trip_type != TripType.ROUNDTRIP.value:
        return base_fare
    scaled = Decimal(base_fare) * ROUNDTRIP_MULTIPLIER
    return int(scaled.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_fare(trip_type: str, car_type: str, route: Optional[RouteInfo]) -> int:
    """Estimated fare in whole rupees for an already resolved route."""
    if trip_type == TripType.LOCAL.value:
        return LOCAL_BASE_FARE
    return apply_trip_multiplier(base_fare_for(route, car_type), trip_type)


class StaticFareResolver:
    """Resolves routes from an in-memory list, first match wins."""

    def __init__(self, routes: Optional[list[RouteInfo]] = None):
        self.routes = list(POPULAR_ROUTES if routes is None else routes)

    async def list_routes(self) -> list[RouteInfo]:
        return list(self.routes)

    async def resolve(self, from_city: str, to_city: str) -> Optional[RouteInfo]:
        return find_route(self.routes, from_city, to_city)


async def estimate_fare(request: BookingRequest, resolver: FareResolver) -> FareEstimate:
    """
    Estimate the fare for a validated booking request.

    Local rentals never consult the resolver. Errors raised by the resolver
    propagate to the caller.
    """
    route = None
    if not request.is_local:
        route = await resolver.resolve(request.from_city, request.to_city)

    fare = calculate_fare(request.trip_type, request.car_type, route)
    metrics_collector.record_estimate(request.trip_type, route is not None)

    logger.info(
        "Fare estimated",
        extra={
            "trip_type": request.trip_type,
            "car_type": request.car_type,
            "from_city": request.from_city,
            "to_city": request.destination,
            "matched_route": route is not None,
            "estimated_fare": fare,
        }
    )

    return FareEstimate(
        estimated_fare=fare,
        advance_amount=ADVANCE_AMOUNT,
        advance_note=ADVANCE_NOTE,
        trip_type=request.trip_type,
        route=route,
    )
