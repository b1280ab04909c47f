"""Flight model definition."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import uuid4

from sqlalchemy import CheckConstraint, DateTime, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base


class CabinClass(str, Enum):
    """Fare tier determining the multiplier applied to a flight's base fare."""
    ECONOMY = "Economy"
    BUSINESS = "Business"
    FIRST_CLASS = "FirstClass"


class Flight(Base):
    """Flight entity holding the seat inventory that bookings consume."""

    __tablename__ = "flights"

    # Primary key
    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=lambda: str(uuid4())
    )

    # Flight details
    flight_number: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    departure_country: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    destination_country: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    departure_airport: Mapped[str] = mapped_column(String(100), nullable=False)
    arrival_airport: Mapped[str] = mapped_column(String(100), nullable=False)
    departure_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)

    # Per-seat economy fare
    base_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    available_seats: Mapped[int] = mapped_column(Integer, nullable=False)

    # Constraints
    __table_args__ = (
        CheckConstraint("available_seats >= 0", name="ck_flight_available_seats_non_negative"),
        CheckConstraint("base_price > 0", name="ck_flight_base_price_positive"),
    )

    def price_for_class(self, cabin_class: CabinClass) -> Decimal:
        """Per-seat price of this flight in ``cabin_class``."""
        from ..services.pricing import price_for_class

        return price_for_class(self.base_price, cabin_class)

    def __str__(self) -> str:
        return (
            f"{self.flight_number} - {self.departure_country} to {self.destination_country} - "
            f"{self.departure_date:%Y-%m-%d %H:%M}"
        )

    def __repr__(self) -> str:
        return (
            f"<Flight(id={self.id}, flight_number={self.flight_number}, "
            f"departure_date={self.departure_date}, available_seats={self.available_seats})>"
        )
