"""Models module exporting all database models."""

from .booking import Booking
from .flight import CabinClass, Flight
from .passenger import Passenger

__all__ = [
    # Inventory
    "Flight",
    "CabinClass",

    # Identity
    "Passenger",

    # Booking
    "Booking",
]
