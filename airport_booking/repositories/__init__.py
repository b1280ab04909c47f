"""Repository interfaces and their in-memory and SQLAlchemy implementations."""

from .base import BookingRepository, FlightRepository, PassengerRepository, Repository
from .memory import InMemoryBookingRepository, InMemoryFlightRepository, InMemoryPassengerRepository
from .sql import SqlBookingRepository, SqlFlightRepository, SqlPassengerRepository

__all__ = [
    "Repository",
    "FlightRepository",
    "PassengerRepository",
    "BookingRepository",
    "InMemoryFlightRepository",
    "InMemoryPassengerRepository",
    "InMemoryBookingRepository",
    "SqlFlightRepository",
    "SqlPassengerRepository",
    "SqlBookingRepository",
]
