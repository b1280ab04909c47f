"""Unit tests for request schema validation."""

from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from airport_booking.models.flight import CabinClass
from airport_booking.schemas.booking import CreateBookingRequest, ModifyBookingRequest
from airport_booking.schemas.flight import CreateFlightRequest


def test_create_flight_request_valid(sample_flight_data):
    """Test a complete flight passes validation."""
    request = CreateFlightRequest(**sample_flight_data)

    assert request.flight_number == "XY123"
    assert request.available_seats == 10


def test_create_flight_request_negative_seats(sample_flight_data):
    """Test negative available seats are rejected."""
    sample_flight_data["available_seats"] = -5

    with pytest.raises(ValidationError) as exc_info:
        CreateFlightRequest(**sample_flight_data)

    assert "Available seats must be non-negative" in str(exc_info.value)


def test_create_flight_request_missing_required_fields():
    """Test missing text fields report which field is required."""
    with pytest.raises(ValidationError) as exc_info:
        CreateFlightRequest(
            departure_date=datetime(2025, 1, 1),
            base_price=Decimal("120"),
            available_seats=10,
        )

    message = str(exc_info.value)
    assert "Flight number is required" in message
    assert "Departure country is required" in message
    assert "Arrival country is required" in message


def test_create_flight_request_non_positive_price(sample_flight_data):
    """Test base price must be positive."""
    sample_flight_data["base_price"] = Decimal("0")

    with pytest.raises(ValidationError):
        CreateFlightRequest(**sample_flight_data)


def test_create_booking_request_parses_cabin_class():
    """Test cabin class may be given by name."""
    request = CreateBookingRequest(email="a@b.com", flight_id="F1", cabin_class="Business", seats=2)

    assert request.cabin_class is CabinClass.BUSINESS


def test_create_booking_request_rejects_zero_seats():
    """Test a booking needs at least one seat."""
    with pytest.raises(ValidationError):
        CreateBookingRequest(email="a@b.com", flight_id="F1", seats=0)


def test_modify_booking_request_rejects_unknown_class():
    """Test an unknown cabin class is rejected."""
    with pytest.raises(ValidationError):
        ModifyBookingRequest(cabin_class="Premium", seats=1)
