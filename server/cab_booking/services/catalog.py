"""Fixed reference data: the car catalogue and the popular routes."""

from ..schemas.booking import CarType
from ..schemas.route import CarOption, RouteInfo

CAR_OPTIONS: list[CarOption] = [
    CarOption(id=CarType.HATCHBACK.value, name="Hatchback", seats="4 Seater", example="Wagon R"),
    CarOption(id=CarType.SEDAN.value, name="Sedan", seats="4 Seater", example="Maruti Dzire"),
    CarOption(id=CarType.SUV.value, name="SUV", seats="6-7 Seater", example="Ertiga"),
    CarOption(id=CarType.CRYSTA.value, name="Crysta", seats="7 Seater", example="Toyota Innova Crysta"),
    CarOption(id=CarType.SCORPIO.value, name="Scorpio", seats="7 Seater", example="Mahindra Scorpio"),
]

# Price tiers on a route's per-class price columns
SEDAN_TIER = frozenset({CarType.HATCHBACK.value, CarType.SEDAN.value})
SUV_TIER = frozenset({CarType.SUV.value, CarType.CRYSTA.value, CarType.SCORPIO.value})

# Distances only: the static table never prices by vehicle class.
POPULAR_ROUTES: list[RouteInfo] = [
    RouteInfo(from_city="Kolkata", to_city="Digha", distance_km=185),
    RouteInfo(from_city="Kolkata", to_city="Mandarmani", distance_km=180),
    RouteInfo(from_city="Kolkata", to_city="Kharagpur", distance_km=120),
    RouteInfo(from_city="Kolkata", to_city="Durgapur", distance_km=165),
]

# One-way (sedan tier, suv tier) prices seeded into the routes table.
SEED_ROUTE_PRICES: dict[tuple[str, str], tuple[int, int]] = {
    ("Kolkata", "Digha"): (2200, 3000),
    ("Kolkata", "Mandarmani"): (2200, 3000),
    ("Kolkata", "Kharagpur"): (1600, 2200),
    ("Kolkata", "Durgapur"): (2000, 2800),
}


def seed_routes() -> list[RouteInfo]:
    """The popular routes with their per-class prices filled in."""
    seeded = []
    for route in POPULAR_ROUTES:
        sedan_price, suv_price = SEED_ROUTE_PRICES[(route.from_city, route.to_city)]
        seeded.append(route.model_copy(update={"sedan_price": sedan_price, "suv_price": suv_price}))
    return seeded
