"""Constructor wiring of repositories and services."""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from ..repositories.base import BookingRepository, FlightRepository, PassengerRepository
from ..repositories.memory import InMemoryBookingRepository, InMemoryFlightRepository, InMemoryPassengerRepository
from ..repositories.sql import SqlBookingRepository, SqlFlightRepository, SqlPassengerRepository
from ..services.booking_service import BookingService
from ..services.flight_inventory import FlightInventory
from ..services.passenger_directory import PassengerDirectory
from .config import settings
from .locking import StripedLock


@dataclass
class BookingServices:
    """The three services a front end talks to, sharing one set of repositories."""

    inventory: FlightInventory
    passengers: PassengerDirectory
    bookings: BookingService


class ServiceContainer:
    """
    Long-lived owner of the lock pools.

    Services are cheap and may be built per request (e.g. one per database
    session), but they must share these locks for per-flight and per-booking
    serialization to hold. Each entity kind gets its own pool so a flight ID
    and a booking ID can never land on the same lock.

    A container belongs to one event loop, the one its locks are first
    contended on. Build one container per loop (e.g. one per
    ``asyncio.run`` call); sharing it across loops raises ``RuntimeError``.
    """

    def __init__(self, lock_stripes: int = settings.lock_stripes):
        self.flight_locks = StripedLock(lock_stripes)
        self.passenger_locks = StripedLock(lock_stripes)
        self.booking_locks = StripedLock(lock_stripes)

    def build(
        self,
        flights: FlightRepository,
        passengers: PassengerRepository,
        bookings: BookingRepository,
    ) -> BookingServices:
        """Wire services over the given repositories."""
        inventory = FlightInventory(flights, locks=self.flight_locks)
        directory = PassengerDirectory(passengers, locks=self.passenger_locks)
        return BookingServices(
            inventory=inventory,
            passengers=directory,
            bookings=BookingService(bookings, inventory, directory, locks=self.booking_locks),
        )

    def for_session(self, session: AsyncSession) -> BookingServices:
        """Wire services over SQLAlchemy repositories sharing ``session``."""
        return self.build(
            SqlFlightRepository(session),
            SqlPassengerRepository(session),
            SqlBookingRepository(session),
        )

    def in_memory(self) -> BookingServices:
        """Wire services over fresh, empty in-memory repositories."""
        return self.build(
            InMemoryFlightRepository(),
            InMemoryPassengerRepository(),
            InMemoryBookingRepository(),
        )
