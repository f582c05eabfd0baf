"""Route reference data model."""

from sqlalchemy import CheckConstraint, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base


class Route(Base):
    """
    A known city pair with its distance and per-class prices.

    ``from_key`` and ``to_key`` hold the normalized city names used for
    lookups. Rows are matched in ``id`` order, so the first inserted route
    wins when several could match.
    """

    __tablename__ = "routes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    from_city: Mapped[str] = mapped_column(String(128), nullable=False)
    to_city: Mapped[str] = mapped_column(String(128), nullable=False)
    from_key: Mapped[str] = mapped_column(String(128), nullable=False)
    to_key: Mapped[str] = mapped_column(String(128), nullable=False)

    distance_km: Mapped[int] = mapped_column(Integer, nullable=False)
    sedan_price: Mapped[int | None] = mapped_column(Integer, nullable=True)
    suv_price: Mapped[int | None] = mapped_column(Integer, nullable=True)

    __table_args__ = (
        CheckConstraint("distance_km > 0", name="ck_route_distance_positive"),
        CheckConstraint("sedan_price IS NULL OR sedan_price >= 0", name="ck_route_sedan_price_non_negative"),
        CheckConstraint("suv_price IS NULL OR suv_price >= 0", name="ck_route_suv_price_non_negative"),
        Index("ix_routes_city_keys", "from_key", "to_key"),
    )

    def __repr__(self) -> str:
        return f"<Route(id={self.id}, from='{self.from_city}', to='{self.to_city}', distance_km={self.distance_km})>"
