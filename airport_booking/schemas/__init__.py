"""Pydantic schemas for booking core requests and results."""

from .booking import CreateBookingRequest, ModifyBookingRequest, ModifyBookingResult
from .flight import CreateFlightRequest, SearchFlightsRequest

__all__ = [
    "CreateFlightRequest",
    "SearchFlightsRequest",
    "CreateBookingRequest",
    "ModifyBookingRequest",
    "ModifyBookingResult",
]
