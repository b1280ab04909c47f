"""Repository interfaces consumed by the booking services."""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

from ..models import Booking, Flight, Passenger
from ..schemas.flight import SearchFlightsRequest

T = TypeVar("T")


class Repository(ABC, Generic[T]):
    """
    CRUD persistence for one entity type, keyed by string id.

    Entities returned by a repository are the caller's to mutate; changes
    reach storage only through ``add`` and ``update``.
    """

    @abstractmethod
    async def get_by_id(self, entity_id: str) -> Optional[T]:
        """Return the entity with ``entity_id``, or None."""
        raise NotImplementedError

    @abstractmethod
    async def get_all(self) -> list[T]:
        """Return every stored entity."""
        raise NotImplementedError

    @abstractmethod
    async def add(self, entity: T) -> None:
        """Persist a new entity. Raises ConflictError on a duplicate key."""
        raise NotImplementedError

    @abstractmethod
    async def update(self, entity: T) -> None:
        """Persist changes to an existing entity. Raises NotFoundError if absent."""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, entity_id: str) -> bool:
        """Remove the entity; False when nothing was stored under ``entity_id``."""
        raise NotImplementedError


class FlightRepository(Repository[Flight]):
    """Persistence for flights."""

    @abstractmethod
    async def search(self, criteria: SearchFlightsRequest) -> list[Flight]:
        """Return flights matching every set criterion."""
        raise NotImplementedError


class PassengerRepository(Repository[Passenger]):
    """Persistence for passengers."""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Passenger]:
        """Return the passenger registered under ``email``, or None."""
        raise NotImplementedError


class BookingRepository(Repository[Booking]):
    """Persistence for bookings."""

    @abstractmethod
    async def list_by_passenger_id(self, passenger_id: str) -> list[Booking]:
        """Return all bookings, cancelled included, made by ``passenger_id``."""
        raise NotImplementedError
