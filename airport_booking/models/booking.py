"""Booking model definition."""

from datetime import datetime
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import Boolean, CheckConstraint, DateTime, Enum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base
from .flight import CabinClass


class Booking(Base):
    """
    Booking entity tying a passenger to seats on a flight.

    Bookings are never deleted by the booking core: cancellation sets
    ``cancelled`` and keeps seats and class as they were for audit.
    """

    __tablename__ = "bookings"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=lambda: str(uuid4())
    )

    # References, not ownership
    flight_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("flights.id"),
        nullable=False,
        index=True
    )
    passenger_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("passengers.id"),
        nullable=False,
        index=True
    )

    # Booking details
    number_of_seats: Mapped[int] = mapped_column(Integer, nullable=False)
    selected_class: Mapped[CabinClass] = mapped_column(
        Enum(CabinClass, native_enum=False, length=20, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=CabinClass.ECONOMY
    )
    total_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    cancelled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    booked_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # Constraints
    __table_args__ = (
        CheckConstraint("number_of_seats > 0", name="ck_booking_seats_positive"),
        CheckConstraint("total_price >= 0", name="ck_booking_total_price_non_negative"),
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, flight_id={self.flight_id}, passenger_id={self.passenger_id}, "
            f"seats={self.number_of_seats}, class={self.selected_class}, cancelled={self.cancelled})>"
        )
