"""Cabin-class fare pricing."""

from decimal import Decimal

from ..models.flight import CabinClass

CLASS_MULTIPLIERS: dict[CabinClass, Decimal] = {
    CabinClass.ECONOMY: Decimal("1.0"),
    CabinClass.BUSINESS: Decimal("2.5"),
    CabinClass.FIRST_CLASS: Decimal("4.0"),
}


def price_for_class(base_price: Decimal, cabin_class: CabinClass) -> Decimal:
    """Per-seat price for ``cabin_class`` given the flight's economy base fare."""
    return Decimal(base_price) * CLASS_MULTIPLIERS[CabinClass(cabin_class)]


def total_price(base_price: Decimal, cabin_class: CabinClass, seats: int) -> Decimal:
    """Price of ``seats`` seats in ``cabin_class``."""
    return price_for_class(base_price, cabin_class) * seats
