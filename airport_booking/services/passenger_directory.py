"""Passenger directory: lookup by email and find-or-register."""

import logging
from typing import Optional
from uuid import uuid4

from ..core.exceptions import FailedPreconditionError, InvalidArgumentError, NotFoundError
from ..core.locking import StripedLock
from ..core.observability import metrics_collector
from ..models.passenger import Passenger
from ..repositories.base import PassengerRepository

logger = logging.getLogger(__name__)


def normalize_email(email: Optional[str]) -> str:
    """Canonical form of an email used as the passenger lookup key."""
    return (email or "").strip().lower()


class PassengerDirectory:
    """Service for passenger identity, keyed by email."""

    def __init__(self, passengers: PassengerRepository, locks: Optional[StripedLock] = None):
        self.passengers = passengers
        self.locks = locks or StripedLock()

    async def find_by_email(self, email: str) -> Optional[Passenger]:
        """Get passenger by email, or None if no passenger uses it."""
        key = normalize_email(email)
        if not key:
            return None
        return await self.passengers.get_by_email(key)

    async def get_passenger(self, passenger_id: str) -> Optional[Passenger]:
        """Get passenger by ID."""
        return await self.passengers.get_by_id(passenger_id)

    async def get_passenger_by_email_or_raise(self, email: str) -> Passenger:
        """Get passenger by email or raise NotFoundError."""
        passenger = await self.find_by_email(email)
        if not passenger:
            logger.warning(
                "Passenger not found",
                extra={"email": email}
            )
            raise NotFoundError(
                resource_type="passenger",
                detail=f"No passenger is registered with email '{email}'"
            )
        return passenger

    async def register(
        self,
        email: str,
        first_name: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> Passenger:
        """
        Register a new passenger.

        Args:
            email: Passenger email, required
            first_name: Optional first name
            phone: Optional phone number

        Returns:
            Created passenger entity

        Raises:
            InvalidArgumentError: If email is missing or empty
            ConflictError: If the email is already registered
        """
        key = normalize_email(email)
        if not key:
            raise InvalidArgumentError(detail="Email is required", field="email")

        passenger = Passenger(
            id=str(uuid4()),
            email=key,
            first_name=first_name,
            phone=phone
        )
        await self.passengers.add(passenger)

        metrics_collector.record_passenger_registered()
        logger.info(
            "Passenger registered",
            extra={"passenger_id": passenger.id, "email": passenger.email}
        )

        return passenger

    async def find_or_register(
        self,
        email: str,
        first_name: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> Passenger:
        """
        Return the passenger with ``email``, registering one if needed.

        A new passenger is only registered when a first name or phone is
        supplied; an unknown email alone is not enough to create a record.

        Raises:
            InvalidArgumentError: If email is missing or empty
            FailedPreconditionError: If the passenger is unknown and no
                registration details were supplied
        """
        key = normalize_email(email)
        if not key:
            raise InvalidArgumentError(detail="Email is required", field="email")

        # Serialize on the email so concurrent first bookings register once
        async with self.locks.hold(key):
            passenger = await self.passengers.get_by_email(key)
            if passenger:
                return passenger

            if not (first_name and first_name.strip()) and not (phone and phone.strip()):
                logger.warning(
                    "Passenger registration refused - insufficient details",
                    extra={"email": key}
                )
                raise FailedPreconditionError(
                    detail="cannot register: insufficient details",
                    code="INSUFFICIENT_PASSENGER_DETAILS",
                    context={"email": key}
                )

            return await self.register(key, first_name, phone)

    async def update_passenger(self, passenger: Passenger) -> None:
        """Persist edited passenger details."""
        passenger.email = normalize_email(passenger.email)
        if not passenger.email:
            raise InvalidArgumentError(detail="Email is required", field="email")

        await self.passengers.update(passenger)

        logger.info(
            "Passenger updated",
            extra={"passenger_id": passenger.id}
        )

    async def delete_passenger(self, passenger_id: str) -> bool:
        """Delete a passenger; False when it did not exist."""
        deleted = await self.passengers.delete(passenger_id)

        logger.info(
            "Passenger delete requested",
            extra={"passenger_id": passenger_id, "deleted": deleted}
        )
        return deleted
