"""Flight-related Pydantic schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.flight import CabinClass

_REQUIRED_MESSAGES = {
    "flight_number": "Flight number is required",
    "departure_country": "Departure country is required",
    "destination_country": "Arrival country is required",
    "departure_airport": "Departure airport is required",
    "arrival_airport": "Arrival airport is required",
}


class CreateFlightRequest(BaseModel):
    """Request schema for adding a flight to the inventory."""

    model_config = ConfigDict(validate_default=True)

    flight_id: Optional[str] = Field(None, max_length=64, description="Flight ID; generated when omitted")
    flight_number: str = Field("", max_length=16, description="Carrier flight number, e.g. XY123")
    departure_country: str = Field("", max_length=100, description="Country of departure")
    destination_country: str = Field("", max_length=100, description="Country of arrival")
    departure_airport: str = Field("", max_length=100, description="Airport of departure")
    arrival_airport: str = Field("", max_length=100, description="Airport of arrival")
    departure_date: datetime = Field(..., description="Scheduled departure time (ISO 8601)")
    base_price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2, description="Economy fare per seat")
    available_seats: int = Field(..., description="Seats open for sale")

    @field_validator(*_REQUIRED_MESSAGES)
    @classmethod
    def validate_required(cls, v: str, info) -> str:
        """Reject blank required text fields."""
        if not v or not v.strip():
            raise ValueError(_REQUIRED_MESSAGES[info.field_name])
        return v.strip()

    @field_validator("available_seats")
    @classmethod
    def validate_available_seats(cls, v: int) -> int:
        """Validate seat count is non-negative."""
        if v < 0:
            raise ValueError("Available seats must be non-negative")
        return v


class SearchFlightsRequest(BaseModel):
    """Search criteria for flights; unset fields do not filter."""

    departure_country: Optional[str] = Field(None, description="Filter by departure country")
    destination_country: Optional[str] = Field(None, description="Filter by destination country")
    departure_date: Optional[date] = Field(None, description="Filter by calendar day of departure")
    departure_airport: Optional[str] = Field(None, description="Filter by departure airport")
    arrival_airport: Optional[str] = Field(None, description="Filter by arrival airport")
    max_price: Optional[Decimal] = Field(None, gt=0, description="Maximum per-seat price in cabin_class")
    cabin_class: CabinClass = Field(CabinClass.ECONOMY, description="Cabin class max_price applies to")
    available_only: bool = Field(False, description="Only flights with at least one open seat")
