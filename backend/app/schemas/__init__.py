"""
Pydantic schemas for the EventHub booking API.
"""

from .booking import BookingIdResponse, BookingRequest, BookingWithRoomResponse, RoomResponse
from .health import HealthResponse

__all__ = [
    "BookingIdResponse",
    "BookingRequest",
    "BookingWithRoomResponse",
    "HealthResponse",
    "RoomResponse",
]
