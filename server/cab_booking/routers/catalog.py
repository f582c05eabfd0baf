"""Catalog router: car types and known routes for the booking form."""

import logging

from fastapi import APIRouter

from ..core.dependencies import FARE_RESOLVER_DEPENDENCY
from ..schemas.route import CarOption, RouteInfo
from ..services.catalog import CAR_OPTIONS
from ..services.fare_service import FareResolver

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/cars", response_model=list[CarOption])
async def list_cars() -> list[CarOption]:
    """Vehicle classes offered on the booking form."""
    return CAR_OPTIONS


@router.get("/routes", response_model=list[RouteInfo])
async def list_routes(resolver: FareResolver = FARE_RESOLVER_DEPENDENCY) -> list[RouteInfo]:
    """
    Routes offered as one-click selections.

    Listed by the configured fare resolver: the routes table, or the static
    popular routes without touching the database.
    """
    routes = await resolver.list_routes()
    logger.debug("Routes listed", extra={"route_count": len(routes)})
    return routes
