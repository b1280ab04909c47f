"""Booking-related Pydantic schemas."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.booking import Booking
from ..models.flight import CabinClass


class CreateBookingRequest(BaseModel):
    """Request schema for booking seats on a flight."""

    email: str = Field(..., max_length=320, description="Passenger email; registers the passenger when unknown")
    flight_id: str = Field(..., min_length=1, description="Flight to book seats on")
    cabin_class: CabinClass = Field(CabinClass.ECONOMY, description="Cabin class for every seat in the booking")
    seats: int = Field(..., ge=1, description="Number of seats to book")
    first_name: Optional[str] = Field(None, max_length=100, description="Used only when registering a new passenger")
    phone: Optional[str] = Field(None, max_length=32, description="Used only when registering a new passenger")


class ModifyBookingRequest(BaseModel):
    """Request schema for changing the class and seat count of a booking."""

    cabin_class: CabinClass = Field(..., description="New cabin class")
    seats: int = Field(..., ge=1, description="New total number of seats")


class ModifyBookingResult(BaseModel):
    """Outcome of a successful booking modification."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    success: bool = Field(..., description="Whether the modification was applied")
    booking: Booking = Field(..., description="The booking after modification")
    seat_delta: int = Field(..., description="Seats reserved (positive) or released (negative)")
    previous_total_price: Decimal = Field(..., description="Total price before modification")
    message: Optional[str] = Field(None, description="Human-readable summary")
