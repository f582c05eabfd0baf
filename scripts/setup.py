#!/usr/bin/env python3
"""Setup script for the cab booking API: create tables and seed routes."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add the server directory to the Python path
server_dir = Path(__file__).parent.parent / "server"
sys.path.insert(0, str(server_dir))

from cab_booking import models  # noqa: E402,F401 - register tables
from cab_booking.core.database import async_session_factory, close_db, init_db  # noqa: E402
from cab_booking.schemas.route import RouteInfo  # noqa: E402
from cab_booking.services.route_service import RouteService  # noqa: E402

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def setup_database():
    """Create any missing tables."""
    logger.info("Setting up database...")
    try:
        await init_db()
        logger.info("Database tables ready")
    except Exception as e:
        logger.error(f"Database setup failed: {e}")
        raise


async def seed_routes(extra_routes: list[RouteInfo]):
    """Seed the popular routes into an empty table, then add any extra routes."""
    async with async_session_factory() as db:
        service = RouteService(db)
        inserted = await service.seed_popular_routes()
        logger.info(f"Popular routes inserted: {inserted}")

        for route in extra_routes:
            if await service.find_route(route.from_city, route.to_city):
                logger.info(f"Route {route.from_city} -> {route.to_city} already exists, skipping")
                continue
            await service.add_route(route)
            logger.info(f"Added route {route.from_city} -> {route.to_city}")


def parse_route(value: str) -> RouteInfo:
    """Parse FROM:TO:KM:SEDAN:SUV, e.g. Kolkata:Siliguri:560:7500:9800."""
    try:
        from_city, to_city, distance, sedan_price, suv_price = value.split(":")
        return RouteInfo(
            from_city=from_city,
            to_city=to_city,
            distance_km=int(distance),
            sedan_price=int(sedan_price),
            suv_price=int(suv_price),
        )
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid route '{value}': {e}") from e


async def main(extra_routes: list[RouteInfo]):
    logger.info("Starting cab booking API setup...")

    try:
        await setup_database()
        await seed_routes(extra_routes)
    finally:
        await close_db()

    logger.info("Setup completed successfully!")
    logger.info("You can now start the API server with: cd server && uvicorn cab_booking.main:app --reload")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--route",
        action="append",
        type=parse_route,
        default=[],
        help="Extra route as FROM:TO:KM:SEDAN_PRICE:SUV_PRICE (repeatable)",
    )
    args = parser.parse_args()
    asyncio.run(main(args.route))
