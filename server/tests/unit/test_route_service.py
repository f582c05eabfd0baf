"""Unit tests for the routes table and its fare resolver."""

import pytest
from sqlalchemy.exc import OperationalError

from cab_booking.core.exceptions import StorageError
from cab_booking.schemas.route import RouteInfo
from cab_booking.services.route_service import RouteService, RouteTableFareResolver


@pytest.mark.asyncio
async def test_seed_popular_routes_once(test_session):
    service = RouteService(test_session)
    assert await service.seed_popular_routes() == 4
    assert await service.seed_popular_routes() == 0

    routes = await service.list_routes()
    assert [route.to_city for route in routes] == ["Digha", "Mandarmani", "Kharagpur", "Durgapur"]
    assert routes[0].distance_km == 185
    assert routes[0].sedan_price == 2200
    assert routes[0].suv_price == 3000


@pytest.mark.asyncio
async def test_find_route_either_direction(seeded_routes):
    service = RouteService(seeded_routes)
    forward = await service.find_route("Kolkata", "Kharagpur")
    backward = await service.find_route("  kharagpur", "KOLKATA ")
    assert forward is not None
    assert backward is not None
    assert forward.id == backward.id
    assert forward.sedan_price == 1600


@pytest.mark.asyncio
async def test_find_route_unknown_pair(seeded_routes):
    service = RouteService(seeded_routes)
    assert await service.find_route("Kolkata", "Siliguri") is None
    assert await service.find_route("Digha", "Durgapur") is None


@pytest.mark.asyncio
async def test_lowest_id_wins(seeded_routes):
    service = RouteService(seeded_routes)
    await service.add_route(
        RouteInfo(from_city="Digha", to_city="Kolkata", distance_km=190, sedan_price=2600, suv_price=3400)
    )
    route = await service.find_route("Digha", "Kolkata")
    assert route.sedan_price == 2200


@pytest.mark.asyncio
async def test_added_route_gets_lookup_keys(test_session):
    service = RouteService(test_session)
    route = await service.add_route(RouteInfo(from_city="New  Town", to_city="Bolpur", distance_km=160))
    assert route.from_key == "new town"
    assert route.to_key == "bolpur"
    assert route.sedan_price is None


@pytest.mark.asyncio
async def test_resolver_returns_route_info(seeded_routes):
    resolver = RouteTableFareResolver(seeded_routes)
    route = await resolver.resolve("Digha", "Kolkata")
    assert isinstance(route, RouteInfo)
    assert route.from_city == "Kolkata"
    assert route.suv_price == 3000

    assert await resolver.resolve("Kolkata", "Puri") is None


@pytest.mark.asyncio
async def test_resolver_wraps_database_errors(test_session, monkeypatch):
    async def failing_execute(*args, **kwargs):
        raise OperationalError("SELECT routes", {}, Exception("connection refused"))

    monkeypatch.setattr(test_session, "execute", failing_execute)

    with pytest.raises(StorageError) as exc_info:
        await RouteTableFareResolver(test_session).resolve("Kolkata", "Digha")
    assert exc_info.value.status_code == 500
    assert exc_info.value.problem_details["retryable"] is True
