"""Flight inventory service: seat availability, reservation and flight management."""

import logging
from typing import Optional
from uuid import uuid4

from ..core.exceptions import InvalidArgumentError, NotFoundError
from ..core.locking import StripedLock
from ..core.observability import metrics_collector
from ..models.flight import Flight
from ..repositories.base import FlightRepository
from ..schemas.flight import CreateFlightRequest, SearchFlightsRequest

logger = logging.getLogger(__name__)

# Flight columns a flight-management update may change
FLIGHT_DETAIL_FIELDS = (
    "flight_number",
    "departure_country",
    "destination_country",
    "departure_airport",
    "arrival_airport",
    "departure_date",
    "base_price",
)


def _require_positive_seats(seats: int) -> None:
    if isinstance(seats, bool) or not isinstance(seats, int) or seats < 1:
        raise InvalidArgumentError(
            detail=f"Seat count must be a positive integer, got {seats!r}",
            field="seats"
        )


class FlightInventory:
    """
    Service owning a flight's available-seat counter.

    ``reserve_seats`` and ``release_seats`` are the only paths that change
    ``available_seats``; both run under a per-flight lock, so within one
    process they behave as atomic compare-and-decrement and increment.
    """

    def __init__(self, flights: FlightRepository, locks: Optional[StripedLock] = None):
        self.flights = flights
        self.locks = locks or StripedLock()

    async def get_flight(self, flight_id: str) -> Optional[Flight]:
        """Get flight by ID."""
        return await self.flights.get_by_id(flight_id)

    async def get_flight_or_raise(self, flight_id: str) -> Flight:
        """Get flight by ID or raise NotFoundError."""
        flight = await self.flights.get_by_id(flight_id)
        if not flight:
            logger.warning(
                "Flight not found",
                extra={"flight_id": flight_id}
            )
            raise NotFoundError(
                resource_type="flight",
                resource_id=flight_id
            )
        return flight

    async def list_flights(self) -> list[Flight]:
        """Get all flights."""
        return await self.flights.get_all()

    async def search_flights(self, request: SearchFlightsRequest) -> list[Flight]:
        """
        Search flights by route, date and price.

        Args:
            request: Search criteria; unset fields do not filter

        Returns:
            Matching flights
        """
        flights = await self.flights.search(request)

        logger.info(
            "Flight search completed",
            extra={
                "total_found": len(flights),
                "filters": request.model_dump(exclude_none=True, mode="json")
            }
        )

        return flights

    async def add_flight(self, request: CreateFlightRequest) -> Flight:
        """
        Add a flight to the inventory.

        Args:
            request: Validated flight details

        Returns:
            Created flight entity

        Raises:
            ConflictError: If a flight with the same ID already exists
        """
        flight = Flight(
            id=request.flight_id or str(uuid4()),
            flight_number=request.flight_number,
            departure_country=request.departure_country,
            destination_country=request.destination_country,
            departure_airport=request.departure_airport,
            arrival_airport=request.arrival_airport,
            departure_date=request.departure_date,
            base_price=request.base_price,
            available_seats=request.available_seats
        )

        await self.flights.add(flight)

        logger.info(
            "Flight created successfully",
            extra={
                "flight_id": flight.id,
                "flight_number": flight.flight_number,
                "departure_date": flight.departure_date.isoformat(),
                "available_seats": flight.available_seats
            }
        )

        return flight

    async def update_flight(self, flight: Flight) -> Flight:
        """
        Persist flight details edited by a flight-management caller.

        Only the descriptive fields are copied onto the stored flight; its
        ``available_seats`` is kept as stored, since seats change only through
        ``reserve_seats``/``release_seats``.

        Returns:
            The updated flight as stored

        Raises:
            NotFoundError: If flight not found
        """
        # Read the edits first: the stored copy may be the same session object
        details = {field: getattr(flight, field) for field in FLIGHT_DETAIL_FIELDS}
        requested_seats = flight.available_seats

        async with self.locks.hold(flight.id):
            stored = await self.get_flight_or_raise(flight.id)
            for field, value in details.items():
                setattr(stored, field, value)
            await self.flights.update(stored)

        if requested_seats != stored.available_seats:
            logger.warning(
                "Flight update ignored a seat count change",
                extra={
                    "flight_id": stored.id,
                    "requested_seats": requested_seats,
                    "available_seats": stored.available_seats
                }
            )
        logger.info(
            "Flight updated",
            extra={"flight_id": stored.id, "available_seats": stored.available_seats}
        )

        return stored

    async def delete_flight(self, flight_id: str) -> bool:
        """
        Delete a flight; False when it did not exist.

        Bookings on a deleted flight can still be cancelled; their seats are
        not returned anywhere.
        """
        async with self.locks.hold(flight_id):
            deleted = await self.flights.delete(flight_id)

        logger.info(
            "Flight delete requested",
            extra={"flight_id": flight_id, "deleted": deleted}
        )
        return deleted

    async def is_available(self, flight_id: str, requested_seats: int) -> bool:
        """
        Check whether a flight can take ``requested_seats`` more passengers.

        Returns False when the flight does not exist.
        """
        flight = await self.flights.get_by_id(flight_id)
        if flight is None:
            return False
        return requested_seats <= flight.available_seats

    async def reserve_seats(self, flight_id: str, seats: int) -> bool:
        """
        Take ``seats`` seats from a flight's inventory.

        Args:
            flight_id: Flight to reserve on
            seats: Number of seats, at least one

        Returns:
            True if the seats were reserved, False if the flight has fewer
            available seats (nothing is changed in that case)

        Raises:
            InvalidArgumentError: If seats is not a positive integer
            NotFoundError: If flight not found
        """
        _require_positive_seats(seats)

        async with self.locks.hold(flight_id):
            flight = await self.get_flight_or_raise(flight_id)

            if seats > flight.available_seats:
                logger.warning(
                    "Seat reservation failed - insufficient capacity",
                    extra={
                        "flight_id": flight_id,
                        "requested_seats": seats,
                        "available_seats": flight.available_seats
                    }
                )
                metrics_collector.record_reservation_rejected(flight_id)
                return False

            flight.available_seats -= seats
            await self.flights.update(flight)

        metrics_collector.record_seats_reserved(flight_id, seats)
        logger.info(
            "Seats reserved",
            extra={
                "flight_id": flight_id,
                "seats": seats,
                "remaining_seats": flight.available_seats
            }
        )
        return True

    async def release_seats(self, flight_id: str, seats: int) -> None:
        """
        Return ``seats`` previously reserved seats to a flight's inventory.

        No upper bound is enforced, so callers must only release seats they
        reserved through this service.

        Raises:
            InvalidArgumentError: If seats is not a positive integer
            NotFoundError: If flight not found
        """
        _require_positive_seats(seats)

        async with self.locks.hold(flight_id):
            flight = await self.get_flight_or_raise(flight_id)
            flight.available_seats += seats
            await self.flights.update(flight)

        metrics_collector.record_seats_released(flight_id, seats)
        logger.info(
            "Seats released",
            extra={
                "flight_id": flight_id,
                "seats": seats,
                "available_seats": flight.available_seats
            }
        )
