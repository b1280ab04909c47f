"""Service layer package."""

from .booking_service import BookingService
from .flight_inventory import FlightInventory
from .passenger_directory import PassengerDirectory
from .pricing import CLASS_MULTIPLIERS, price_for_class, total_price

__all__ = [
    "BookingService",
    "FlightInventory",
    "PassengerDirectory",
    "CLASS_MULTIPLIERS",
    "price_for_class",
    "total_price",
]
