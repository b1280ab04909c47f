"""SQLAlchemy-backed repositories over an ``AsyncSession``."""

import logging
from datetime import datetime, time, timedelta
from typing import Generic, Optional, TypeVar

from sqlalchemy import and_, delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ConflictError, NotFoundError
from ..models import Booking, Flight, Passenger
from ..schemas.flight import SearchFlightsRequest
from ..services.pricing import CLASS_MULTIPLIERS
from .base import BookingRepository, FlightRepository, PassengerRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SqlRepository(Generic[T]):
    """Commit-per-write repository; a failed write rolls the session back and re-raises."""

    model: type
    resource_type = "resource"

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _commit(self, entity_id: Optional[str] = None) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(
                "Write rejected by database constraint",
                extra={
                    "resource_type": self.resource_type,
                    "resource_id": entity_id,
                    "error": str(e.orig)
                }
            )
            raise ConflictError(
                detail=f"The {self.resource_type} conflicts with a stored record",
                conflicting_resource={"resource_type": self.resource_type, "id": entity_id}
            ) from e
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    async def get_by_id(self, entity_id: str) -> Optional[T]:
        stmt = select(self.model).where(self.model.id == entity_id).execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_all(self) -> list[T]:
        result = await self.db.execute(select(self.model))
        return list(result.scalars())

    async def add(self, entity: T) -> None:
        self.db.add(entity)
        await self._commit(entity.id)

    async def update(self, entity: T) -> None:
        if await self.db.get(self.model, entity.id) is None:
            raise NotFoundError(resource_type=self.resource_type, resource_id=entity.id)
        await self.db.merge(entity)
        await self._commit(entity.id)

    async def delete(self, entity_id: str) -> bool:
        result = await self.db.execute(delete(self.model).where(self.model.id == entity_id))
        await self._commit(entity_id)
        return result.rowcount > 0


class SqlFlightRepository(SqlRepository[Flight], FlightRepository):
    model = Flight
    resource_type = "flight"

    async def search(self, criteria: SearchFlightsRequest) -> list[Flight]:
        conditions = []

        if criteria.departure_country:
            conditions.append(Flight.departure_country == criteria.departure_country)

        if criteria.destination_country:
            conditions.append(Flight.destination_country == criteria.destination_country)

        if criteria.departure_airport:
            conditions.append(Flight.departure_airport == criteria.departure_airport)

        if criteria.arrival_airport:
            conditions.append(Flight.arrival_airport == criteria.arrival_airport)

        if criteria.departure_date:
            day_start = datetime.combine(criteria.departure_date, time.min)
            conditions.append(Flight.departure_date >= day_start)
            conditions.append(Flight.departure_date < day_start + timedelta(days=1))

        if criteria.max_price is not None:
            multiplier = CLASS_MULTIPLIERS[criteria.cabin_class]
            conditions.append(Flight.base_price * multiplier <= criteria.max_price)

        if criteria.available_only:
            conditions.append(Flight.available_seats > 0)

        stmt = select(Flight)
        if conditions:
            stmt = stmt.where(and_(*conditions))
        stmt = stmt.order_by(Flight.departure_date, Flight.id)

        result = await self.db.execute(stmt)
        return list(result.scalars())


class SqlPassengerRepository(SqlRepository[Passenger], PassengerRepository):
    model = Passenger
    resource_type = "passenger"

    async def get_by_email(self, email: str) -> Optional[Passenger]:
        stmt = select(Passenger).where(Passenger.email == email)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()


class SqlBookingRepository(SqlRepository[Booking], BookingRepository):
    model = Booking
    resource_type = "booking"

    async def list_by_passenger_id(self, passenger_id: str) -> list[Booking]:
        stmt = select(Booking).where(Booking.passenger_id == passenger_id).order_by(Booking.booked_at)
        result = await self.db.execute(stmt)
        return list(result.scalars())
