# backend/app/schemas/booking.py
"""
Pydantic schemas for hotel bookings.

Wire names are camelCase (``roomId``, ``bookingId``, ``hotelId``) and the
embedded room is keyed ``Room``; Python attributes stay snake_case and the
aliases are applied on (de)serialization.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from ..domain.booking_views import BookingView, BookingWithRoomView, RoomView
from ._strict_base import StrictModel, StrictRequestModel


class BookingRequest(StrictRequestModel):
    """Body of POST /booking and PUT /booking/{bookingId}."""

    room_id: int = Field(..., alias="roomId", description="Room to reserve")


class BookingIdResponse(StrictModel):
    """Response after creating or changing a booking."""

    booking_id: int = Field(..., alias="bookingId")

    @classmethod
    def from_booking(cls, booking: BookingView) -> "BookingIdResponse":
        return cls(booking_id=booking.id)


class RoomResponse(StrictModel):
    """Room projection embedded in a booking; other room fields are not exposed."""

    id: int
    name: str
    capacity: int
    hotel_id: int = Field(..., alias="hotelId")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    @classmethod
    def from_room(cls, room: RoomView) -> "RoomResponse":
        return cls(
            id=room.id,
            name=room.name,
            capacity=room.capacity,
            hotel_id=room.hotel_id,
            created_at=room.created_at,
            updated_at=room.updated_at,
        )


class BookingWithRoomResponse(StrictModel):
    """Response of GET /booking."""

    id: int
    room: RoomResponse = Field(..., alias="Room")

    @classmethod
    def from_booking(cls, booking: BookingWithRoomView) -> "BookingWithRoomResponse":
        return cls(id=booking.id, room=RoomResponse.from_room(booking.room))
