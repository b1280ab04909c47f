"""Booking service: the orchestration of passengers, seat inventory and pricing."""

import logging
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from ..core.exceptions import FailedPreconditionError, NotFoundError, ResourceExhaustedError
from ..core.locking import StripedLock
from ..core.observability import get_tracer, metrics_collector
from ..models.booking import Booking
from ..repositories.base import BookingRepository
from ..schemas.booking import CreateBookingRequest, ModifyBookingRequest, ModifyBookingResult
from .flight_inventory import FlightInventory
from .passenger_directory import PassengerDirectory
from .pricing import total_price

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


class BookingService:
    """
    Service owning the booking lifecycle.

    A booking is Active from creation until cancelled; Cancelled is terminal.
    Every seat a non-cancelled booking counts is held against its flight
    through ``FlightInventory``. When persisting a booking fails after the
    inventory changed, the inventory change is reversed before the error is
    re-raised, so no seats are left held without a booking.

    Mutations of one booking are serialized on its ID; the flight lock is
    always taken inside the booking lock, never the other way round.
    """

    def __init__(
        self,
        bookings: BookingRepository,
        inventory: FlightInventory,
        passengers: PassengerDirectory,
        locks: Optional[StripedLock] = None,
    ):
        self.bookings = bookings
        self.inventory = inventory
        self.passengers = passengers
        self.locks = locks or StripedLock()

    async def create_booking(self, request: CreateBookingRequest) -> Booking:
        """
        Book seats on a flight for a passenger identified by email.

        Args:
            request: Booking request; first_name/phone are only used to
                register a passenger whose email is unknown

        Returns:
            Created booking entity

        Raises:
            InvalidArgumentError: If email is empty
            FailedPreconditionError: If the passenger is unknown and cannot be registered
            NotFoundError: If flight not found
            ResourceExhaustedError: If the flight has too few available seats
        """
        with tracer.start_as_current_span("booking.create") as span:
            span.set_attribute("booking.flight_id", request.flight_id)
            span.set_attribute("booking.seats", request.seats)

            passenger = await self.passengers.find_or_register(
                request.email, request.first_name, request.phone
            )
            flight = await self.inventory.get_flight_or_raise(request.flight_id)

            if not await self.inventory.reserve_seats(flight.id, request.seats):
                raise await self._capacity_error(flight.id, request.seats)

            booking = Booking(
                id=str(uuid4()),
                flight_id=flight.id,
                passenger_id=passenger.id,
                number_of_seats=request.seats,
                selected_class=request.cabin_class,
                total_price=total_price(flight.base_price, request.cabin_class, request.seats),
                cancelled=False,
                booked_at=datetime.now(timezone.utc)
            )

            try:
                await self.bookings.add(booking)
            except Exception:
                logger.error(
                    "Booking persistence failed - releasing reserved seats",
                    extra={"flight_id": flight.id, "seats": request.seats, "passenger_id": passenger.id}
                )
                await self._compensate(flight.id, -request.seats, "create")
                raise

            span.set_attribute("booking.id", booking.id)

        metrics_collector.record_booking_created(booking.selected_class.value)
        logger.info(
            "Booking created successfully",
            extra={
                "booking_id": booking.id,
                "flight_id": booking.flight_id,
                "passenger_id": booking.passenger_id,
                "seats": booking.number_of_seats,
                "cabin_class": booking.selected_class.value,
                "total_price": str(booking.total_price)
            }
        )

        return booking

    async def get_booking(self, booking_id: str) -> Optional[Booking]:
        """Get booking by ID."""
        return await self.bookings.get_by_id(booking_id)

    async def get_booking_or_raise(self, booking_id: str) -> Booking:
        """Get booking by ID or raise NotFoundError."""
        booking = await self.bookings.get_by_id(booking_id)
        if not booking:
            logger.warning(
                "Booking not found",
                extra={"booking_id": booking_id}
            )
            raise NotFoundError(
                resource_type="booking",
                resource_id=booking_id
            )
        return booking

    async def list_bookings(self) -> list[Booking]:
        """Get all bookings, cancelled included."""
        return await self.bookings.get_all()

    async def list_bookings_for_passenger(self, email: str) -> list[Booking]:
        """
        Get every booking made by the passenger registered under ``email``.

        Raises:
            NotFoundError: If no passenger uses this email
        """
        passenger = await self.passengers.get_passenger_by_email_or_raise(email)
        return await self.bookings.list_by_passenger_id(passenger.id)

    async def cancel_booking(self, booking_id: str) -> bool:
        """
        Cancel a booking and return its seats to the flight.

        Cancelling a missing or already cancelled booking does nothing.
        When the booking's flight has been deleted, the booking is still
        cancelled and no seats are released.

        Returns:
            True if the booking was cancelled by this call, False otherwise
        """
        with tracer.start_as_current_span("booking.cancel") as span:
            span.set_attribute("booking.id", booking_id)

            async with self.locks.hold(booking_id):
                booking = await self.bookings.get_by_id(booking_id)
                if booking is None or booking.cancelled:
                    logger.info(
                        "Booking cancellation skipped - missing or already cancelled",
                        extra={"booking_id": booking_id, "found": booking is not None}
                    )
                    return False

                try:
                    await self.inventory.release_seats(booking.flight_id, booking.number_of_seats)
                    released = True
                except NotFoundError:
                    logger.warning(
                        "Booking flight no longer exists - cancelling without releasing seats",
                        extra={"booking_id": booking_id, "flight_id": booking.flight_id}
                    )
                    released = False

                booking.cancelled = True
                try:
                    await self.bookings.update(booking)
                except Exception:
                    logger.error(
                        "Booking cancellation persistence failed - re-reserving seats",
                        extra={"booking_id": booking_id, "flight_id": booking.flight_id}
                    )
                    if released:
                        await self._compensate(booking.flight_id, booking.number_of_seats, "cancel")
                    raise

        metrics_collector.record_booking_cancelled()
        logger.info(
            "Booking cancelled successfully",
            extra={
                "booking_id": booking_id,
                "flight_id": booking.flight_id,
                "seats_restored": booking.number_of_seats if released else 0
            }
        )

        return True

    async def modify_booking(self, booking_id: str, request: ModifyBookingRequest) -> ModifyBookingResult:
        """
        Change the cabin class and seat count of an active booking.

        Growing a booking reserves only the additional seats; shrinking it
        releases the surplus. The total price is recomputed from the flight's
        base fare.

        Raises:
            NotFoundError: If booking or its flight not found
            FailedPreconditionError: If the booking is cancelled
            ResourceExhaustedError: If the flight cannot supply the additional
                seats (booking and flight are left unchanged)
        """
        with tracer.start_as_current_span("booking.modify") as span:
            span.set_attribute("booking.id", booking_id)

            async with self.locks.hold(booking_id):
                booking = await self.get_booking_or_raise(booking_id)

                if booking.cancelled:
                    logger.warning(
                        "Booking modification failed - booking is cancelled",
                        extra={"booking_id": booking_id}
                    )
                    raise FailedPreconditionError(
                        detail=f"Booking {booking_id} is cancelled and cannot be modified",
                        code="BOOKING_CANCELLED",
                        context={"booking_id": booking_id}
                    )

                flight = await self.inventory.get_flight_or_raise(booking.flight_id)
                seat_delta = request.seats - booking.number_of_seats

                if seat_delta > 0:
                    if not await self.inventory.reserve_seats(flight.id, seat_delta):
                        raise await self._capacity_error(flight.id, seat_delta)
                elif seat_delta < 0:
                    await self.inventory.release_seats(flight.id, -seat_delta)

                previous_total_price = booking.total_price
                booking.selected_class = request.cabin_class
                booking.number_of_seats = request.seats
                booking.total_price = total_price(flight.base_price, request.cabin_class, request.seats)

                try:
                    await self.bookings.update(booking)
                except Exception:
                    logger.error(
                        "Booking modification persistence failed - reverting inventory change",
                        extra={"booking_id": booking_id, "seat_delta": seat_delta}
                    )
                    if seat_delta:
                        await self._compensate(flight.id, -seat_delta, "modify")
                    raise

            span.set_attribute("booking.seat_delta", seat_delta)

        metrics_collector.record_booking_modified(booking.selected_class.value)
        logger.info(
            "Booking modified successfully",
            extra={
                "booking_id": booking_id,
                "seat_delta": seat_delta,
                "seats": booking.number_of_seats,
                "cabin_class": booking.selected_class.value,
                "previous_total_price": str(previous_total_price),
                "total_price": str(booking.total_price)
            }
        )

        return ModifyBookingResult(
            success=True,
            booking=booking,
            seat_delta=seat_delta,
            previous_total_price=previous_total_price,
            message=f"Booking now holds {booking.number_of_seats} {booking.selected_class.value} seat(s)"
        )

    async def _capacity_error(self, flight_id: str, requested_seats: int) -> ResourceExhaustedError:
        flight = await self.inventory.get_flight(flight_id)
        return ResourceExhaustedError(
            flight_id=flight_id,
            requested_seats=requested_seats,
            available_seats=flight.available_seats if flight else 0
        )

    async def _compensate(self, flight_id: str, seats: int, operation: str) -> None:
        """
        Undo an inventory change: positive ``seats`` re-reserves, negative releases.

        A failed compensation is logged, and the caller re-raises its original
        error either way.
        """
        try:
            if seats < 0:
                await self.inventory.release_seats(flight_id, -seats)
                restored = True
            else:
                restored = await self.inventory.reserve_seats(flight_id, seats)
        except Exception:
            logger.exception(
                "Inventory compensation failed",
                extra={"flight_id": flight_id, "seats": seats, "operation": operation}
            )
            return

        if not restored:
            logger.error(
                "Inventory compensation failed - seats were taken by another booking",
                extra={"flight_id": flight_id, "seats": seats, "operation": operation}
            )
            return

        metrics_collector.record_compensation(operation)
