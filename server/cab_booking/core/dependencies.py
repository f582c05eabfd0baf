"""FastAPI dependencies for database sessions and fare resolution."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from .config import settings
from .database import get_db
from ..services.fare_service import FareResolver, StaticFareResolver
from ..services.route_service import RouteTableFareResolver


def get_fare_resolver(db: AsyncSession = Depends(get_db)) -> FareResolver:
    """
    Fare resolver selected by ``FARE_SOURCE``.

    ``routes`` queries the routes table through the request's session;
    ``static`` uses the popular routes and their flat fare.
    """
    if settings.fare_source == "static":
        return StaticFareResolver()
    return RouteTableFareResolver(db)


# Define dependencies to avoid B008 linting errors
DB_DEPENDENCY = Depends(get_db)
FARE_RESOLVER_DEPENDENCY = Depends(get_fare_resolver)
