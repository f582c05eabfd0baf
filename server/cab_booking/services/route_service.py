"""Route service for the ``routes`` reference table."""

import logging
from typing import Optional

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import StorageError
from ..models.route import Route
from ..schemas.route import RouteInfo
from .catalog import seed_routes
from .fare_service import normalize_city

logger = logging.getLogger(__name__)


class RouteService:
    """Service for route reference data."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_routes(self) -> list[Route]:
        """All routes in lookup order."""
        result = await self.db.execute(select(Route).order_by(Route.id))
        return list(result.scalars())

    async def find_route(self, from_city: str, to_city: str) -> Optional[Route]:
        """
        First route joining the two cities in either direction.

        Args:
            from_city: Origin as typed on the form
            to_city: Destination as typed on the form

        Returns:
            Matching route with the lowest id, or None
        """
        origin, destination = normalize_city(from_city), normalize_city(to_city)
        stmt = (
            select(Route)
            .where(
                or_(
                    and_(Route.from_key == origin, Route.to_key == destination),
                    and_(Route.from_key == destination, Route.to_key == origin),
                )
            )
            .order_by(Route.id)
            .limit(1)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def add_route(self, route: RouteInfo) -> Route:
        """Insert a route, deriving its lookup keys."""
        entity = Route(
            from_city=route.from_city,
            to_city=route.to_city,
            from_key=normalize_city(route.from_city),
            to_key=normalize_city(route.to_city),
            distance_km=route.distance_km,
            sedan_price=route.sedan_price,
            suv_price=route.suv_price,
        )
        self.db.add(entity)
        await self.db.commit()
        await self.db.refresh(entity)

        logger.info(
            "Route added",
            extra={"route_id": entity.id, "from_city": entity.from_city, "to_city": entity.to_city}
        )
        return entity

    async def seed_popular_routes(self) -> int:
        """
        Insert the popular routes when the table is empty.

        Returns:
            Number of routes inserted
        """
        count = await self.db.scalar(select(func.count()).select_from(Route))
        if count:
            logger.debug("Routes already seeded", extra={"route_count": count})
            return 0

        inserted = 0
        for route in seed_routes():
            await self.add_route(route)
            inserted += 1

        logger.info("Seeded popular routes", extra={"route_count": inserted})
        return inserted


class RouteTableFareResolver:
    """Fare resolver backed by the ``routes`` table."""

    def __init__(self, db: AsyncSession):
        self.route_service = RouteService(db)

    async def resolve(self, from_city: str, to_city: str) -> Optional[RouteInfo]:
        try:
            route = await self.route_service.find_route(from_city, to_city)
        except SQLAlchemyError as e:
            logger.error(
                "Route lookup failed",
                extra={"from_city": from_city, "to_city": to_city, "error": str(e)}
            )
            raise StorageError(detail="Route lookup failed", operation="routes/lookup") from e
        return RouteInfo.model_validate(route) if route else None

    async def list_routes(self) -> list[RouteInfo]:
        """All routes in lookup order."""
        try:
            routes = await self.route_service.list_routes()
        except SQLAlchemyError as e:
            logger.error("Route listing failed", extra={"error": str(e)})
            raise StorageError(detail="Routes could not be listed", operation="routes/list") from e
        return [RouteInfo.model_validate(route) for route in routes]
