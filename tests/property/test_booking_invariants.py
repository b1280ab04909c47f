"""Property-based tests for booking system invariants."""

import asyncio
from datetime import datetime
from decimal import Decimal

from hypothesis import given, settings
from hypothesis import strategies as st

from airport_booking.core.dependencies import ServiceContainer
from airport_booking.core.exceptions import ResourceExhaustedError
from airport_booking.models.flight import CabinClass
from airport_booking.schemas.booking import CreateBookingRequest, ModifyBookingRequest
from airport_booking.schemas.flight import CreateFlightRequest
from airport_booking.services.pricing import price_for_class

# Strategies for generating test data
seat_counts = st.integers(min_value=1, max_value=12)
capacity_values = st.integers(min_value=0, max_value=60)
base_prices = st.decimals(min_value=Decimal("1.00"), max_value=Decimal("5000.00"), places=2)
cabin_classes = st.sampled_from(list(CabinClass))

operations = st.lists(
    st.one_of(
        st.tuples(st.just("create"), seat_counts, cabin_classes),
        st.tuples(st.just("cancel"), st.integers(min_value=0, max_value=20)),
        st.tuples(st.just("modify"), st.integers(min_value=0, max_value=20), seat_counts, cabin_classes),
    ),
    min_size=1,
    max_size=25,
)


async def _new_services(capacity: int, base_price: Decimal):
    services = ServiceContainer(lock_stripes=4).in_memory()
    await services.inventory.add_flight(
        CreateFlightRequest(
            flight_id="F1",
            flight_number="XY123",
            departure_country="Palestine",
            destination_country="Jordan",
            departure_airport="Ramon",
            arrival_airport="Queen Alia",
            departure_date=datetime(2025, 1, 1, 14, 0),
            base_price=base_price,
            available_seats=capacity,
        )
    )
    return services


@settings(max_examples=60, deadline=None)
@given(capacity=capacity_values, base_price=base_prices, ops=operations)
def test_seat_accounting_holds_for_any_operation_sequence(capacity, base_price, ops):
    """Test available seats plus seats held by active bookings always equals capacity."""

    async def scenario():
        services = await _new_services(capacity, base_price)
        booking_ids = []

        for op in ops:
            try:
                if op[0] == "create":
                    _, seats, cabin_class = op
                    booking = await services.bookings.create_booking(
                        CreateBookingRequest(
                            email="prop@test.com", flight_id="F1", cabin_class=cabin_class,
                            seats=seats, first_name="Prop"
                        )
                    )
                    booking_ids.append(booking.id)
                elif op[0] == "cancel" and booking_ids:
                    await services.bookings.cancel_booking(booking_ids[op[1] % len(booking_ids)])
                elif op[0] == "modify" and booking_ids:
                    _, index, seats, cabin_class = op
                    booking_id = booking_ids[index % len(booking_ids)]
                    if not (await services.bookings.get_booking(booking_id)).cancelled:
                        await services.bookings.modify_booking(
                            booking_id, ModifyBookingRequest(cabin_class=cabin_class, seats=seats)
                        )
            except ResourceExhaustedError:
                pass

            flight = await services.inventory.get_flight("F1")
            bookings = await services.bookings.list_bookings()
            held = sum(b.number_of_seats for b in bookings if not b.cancelled)

            assert flight.available_seats >= 0
            assert flight.available_seats + held == capacity
            for b in bookings:
                assert b.total_price == price_for_class(base_price, b.selected_class) * b.number_of_seats

    asyncio.run(scenario())


@settings(max_examples=50, deadline=None)
@given(capacity=capacity_values, requested=st.integers(min_value=1, max_value=80))
def test_over_capacity_booking_changes_nothing(capacity, requested):
    """Test a booking larger than availability fails and leaves seats unchanged."""

    async def scenario():
        services = await _new_services(capacity, Decimal("100.00"))
        request = CreateBookingRequest(
            email="prop@test.com", flight_id="F1", seats=requested, first_name="Prop"
        )

        if requested > capacity:
            try:
                await services.bookings.create_booking(request)
            except ResourceExhaustedError:
                pass
            else:
                raise AssertionError("booking beyond capacity was accepted")
            assert (await services.inventory.get_flight("F1")).available_seats == capacity
            assert await services.bookings.list_bookings() == []
        else:
            await services.bookings.create_booking(request)
            assert (await services.inventory.get_flight("F1")).available_seats == capacity - requested

    asyncio.run(scenario())


@settings(max_examples=50, deadline=None)
@given(capacity=st.integers(min_value=1, max_value=60), data=st.data())
def test_reserve_release_round_trip(capacity, data):
    """Test reserving then releasing N seats restores availability."""
    seats = data.draw(st.integers(min_value=1, max_value=capacity))

    async def scenario():
        services = await _new_services(capacity, Decimal("100.00"))

        assert await services.inventory.reserve_seats("F1", seats) is True
        await services.inventory.release_seats("F1", seats)

        assert (await services.inventory.get_flight("F1")).available_seats == capacity

    asyncio.run(scenario())
