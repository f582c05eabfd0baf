"""Route and car catalogue Pydantic schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RouteInfo(BaseModel):
    """A known city pair used to resolve fare estimates."""

    model_config = ConfigDict(from_attributes=True)

    from_city: str = Field(..., description="Origin city")
    to_city: str = Field(..., description="Destination city")
    distance_km: int = Field(..., ge=1, description="Road distance in kilometres")
    sedan_price: Optional[int] = Field(None, ge=0, description="One-way price for hatchback and sedan")
    suv_price: Optional[int] = Field(None, ge=0, description="One-way price for suv, crysta and scorpio")


class CarOption(BaseModel):
    """A vehicle class offered on the booking form."""

    id: str = Field(..., description="Car type identifier")
    name: str = Field(..., description="Display name")
    seats: str = Field(..., description="Seating capacity label")
    example: str = Field(..., description="Example model")
