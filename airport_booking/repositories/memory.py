"""In-memory repositories, used in tests and for embedding the core without a database."""

from datetime import date
from typing import Generic, Optional, TypeVar
from uuid import uuid4

from sqlalchemy import inspect

from ..core.exceptions import ConflictError, NotFoundError
from ..models import Booking, Flight, Passenger
from ..schemas.flight import SearchFlightsRequest
from ..services.pricing import price_for_class
from .base import BookingRepository, FlightRepository, PassengerRepository

T = TypeVar("T")


def clone_entity(entity: T) -> T:
    """Copy the column values of a mapped entity into a new transient instance."""
    mapper = inspect(type(entity))
    return type(entity)(**{attr.key: getattr(entity, attr.key) for attr in mapper.column_attrs})


class InMemoryRepository(Generic[T]):
    """Dict-backed storage that hands out copies, never the stored objects."""

    resource_type = "resource"

    def __init__(self, entities: Optional[list[T]] = None):
        self._items: dict[str, T] = {}
        for entity in entities or []:
            self._store(entity)

    def _store(self, entity: T) -> None:
        if entity.id is None:
            entity.id = str(uuid4())
        self._items[entity.id] = clone_entity(entity)

    async def get_by_id(self, entity_id: str) -> Optional[T]:
        entity = self._items.get(entity_id)
        return clone_entity(entity) if entity is not None else None

    async def get_all(self) -> list[T]:
        return [clone_entity(entity) for entity in self._items.values()]

    async def add(self, entity: T) -> None:
        if entity.id is not None and entity.id in self._items:
            raise ConflictError(
                detail=f"A {self.resource_type} with ID '{entity.id}' already exists",
                conflicting_resource={"resource_type": self.resource_type, "id": entity.id}
            )
        self._store(entity)

    async def update(self, entity: T) -> None:
        if entity.id not in self._items:
            raise NotFoundError(resource_type=self.resource_type, resource_id=entity.id)
        self._store(entity)

    async def delete(self, entity_id: str) -> bool:
        return self._items.pop(entity_id, None) is not None


class InMemoryFlightRepository(InMemoryRepository[Flight], FlightRepository):
    resource_type = "flight"

    async def search(self, criteria: SearchFlightsRequest) -> list[Flight]:
        return [
            clone_entity(flight)
            for flight in self._items.values()
            if _matches(flight, criteria)
        ]


def _matches(flight: Flight, criteria: SearchFlightsRequest) -> bool:
    if criteria.departure_country and flight.departure_country != criteria.departure_country:
        return False
    if criteria.destination_country and flight.destination_country != criteria.destination_country:
        return False
    if criteria.departure_airport and flight.departure_airport != criteria.departure_airport:
        return False
    if criteria.arrival_airport and flight.arrival_airport != criteria.arrival_airport:
        return False
    if criteria.departure_date and _day_of(flight) != criteria.departure_date:
        return False
    if criteria.max_price is not None and price_for_class(flight.base_price, criteria.cabin_class) > criteria.max_price:
        return False
    if criteria.available_only and flight.available_seats <= 0:
        return False
    return True


def _day_of(flight: Flight) -> date:
    return flight.departure_date.date()


class InMemoryPassengerRepository(InMemoryRepository[Passenger], PassengerRepository):
    resource_type = "passenger"

    def _check_email_free(self, passenger: Passenger) -> None:
        for stored in self._items.values():
            if stored.email == passenger.email and stored.id != passenger.id:
                raise ConflictError(
                    detail=f"A passenger with email '{passenger.email}' already exists",
                    conflicting_resource={"resource_type": "passenger", "email": passenger.email}
                )

    async def get_by_email(self, email: str) -> Optional[Passenger]:
        for passenger in self._items.values():
            if passenger.email == email:
                return clone_entity(passenger)
        return None

    async def add(self, entity: Passenger) -> None:
        self._check_email_free(entity)
        await super().add(entity)

    async def update(self, entity: Passenger) -> None:
        self._check_email_free(entity)
        await super().update(entity)


class InMemoryBookingRepository(InMemoryRepository[Booking], BookingRepository):
    resource_type = "booking"

    async def list_by_passenger_id(self, passenger_id: str) -> list[Booking]:
        return [
            clone_entity(booking)
            for booking in self._items.values()
            if booking.passenger_id == passenger_id
        ]
