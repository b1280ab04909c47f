#!/usr/bin/env python3
"""Create the booking database schema and seed sample flights."""

import asyncio
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from airport_booking.core.database import async_session_factory, close_db, engine, init_db
from airport_booking.core.dependencies import ServiceContainer
from airport_booking.core.observability import (
    get_logger,
    instrument_sqlalchemy,
    setup_structured_logging,
    setup_tracing,
)
from airport_booking.schemas.flight import CreateFlightRequest

logger = get_logger(__name__)

SAMPLE_ROUTES = [
    ("XY123", "Palestine", "Jordan", "Ramon", "Queen Alia", Decimal("120.00")),
    ("CD456", "Spain", "Italy", "Madrid", "Rome", Decimal("95.50")),
    ("ZZ999", "USA", "UK", "JFK", "Heathrow", Decimal("410.00")),
]


async def setup_database():
    """Create all tables."""
    logger.info("Setting up database...")
    await init_db(engine)
    logger.info("Database schema created")


async def create_sample_data():
    """Create some sample flights for manual testing."""
    logger.info("Creating sample data...")

    container = ServiceContainer()
    async with async_session_factory() as session:
        services = container.for_session(session)

        if await services.inventory.list_flights():
            logger.info("Sample data already exists, skipping...")
            return

        base_date = datetime.now(timezone.utc).replace(minute=0, second=0, microsecond=0) + timedelta(days=30)
        for i, (number, origin, destination, from_airport, to_airport, price) in enumerate(SAMPLE_ROUTES):
            flight = await services.inventory.add_flight(
                CreateFlightRequest(
                    flight_number=number,
                    departure_country=origin,
                    destination_country=destination,
                    departure_airport=from_airport,
                    arrival_airport=to_airport,
                    departure_date=base_date + timedelta(days=i * 7),
                    base_price=price,
                    available_seats=40
                )
            )
            logger.info("Sample flight created", flight=str(flight), flight_id=flight.id)

    logger.info("Sample data created successfully!")


async def main():
    """Main setup function."""
    setup_structured_logging()
    setup_tracing()
    instrument_sqlalchemy(engine)

    logger.info("Starting airport booking setup...")

    try:
        await setup_database()
        await create_sample_data()
    finally:
        await close_db(engine)

    logger.info("Setup completed successfully!")


if __name__ == "__main__":
    asyncio.run(main())
