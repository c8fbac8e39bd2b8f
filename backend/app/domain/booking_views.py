"""
Plain data shapes returned by the booking-related repositories.

Repositories convert ORM rows into these frozen dataclasses before handing
them to the service layer, so services never touch lazy-loading ORM state.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Tuple


@dataclass(frozen=True)
class EnrollmentView:
    id: int
    user_id: int

    @classmethod
    def from_model(cls, enrollment: Any) -> "EnrollmentView":
        return cls(id=enrollment.id, user_id=enrollment.user_id)


@dataclass(frozen=True)
class TicketView:
    id: int
    enrollment_id: int
    ticket_type_id: int
    status: str

    @classmethod
    def from_model(cls, ticket: Any) -> "TicketView":
        status = ticket.status
        return cls(
            id=ticket.id,
            enrollment_id=ticket.enrollment_id,
            ticket_type_id=ticket.ticket_type_id,
            status=getattr(status, "value", status),
        )


@dataclass(frozen=True)
class TicketTypeView:
    id: int
    name: str
    is_remote: bool
    includes_hotel: bool

    @property
    def allows_hotel_booking(self) -> bool:
        """Hotel rooms are only for in-person tickets that include a hotel."""
        return not self.is_remote and self.includes_hotel

    @classmethod
    def from_model(cls, ticket_type: Any) -> "TicketTypeView":
        return cls(
            id=ticket_type.id,
            name=ticket_type.name,
            is_remote=bool(ticket_type.is_remote),
            includes_hotel=bool(ticket_type.includes_hotel),
        )


@dataclass(frozen=True)
class RoomView:
    """The room fields exposed to clients."""

    id: int
    name: str
    capacity: int
    hotel_id: int
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @classmethod
    def from_model(cls, room: Any) -> "RoomView":
        return cls(
            id=room.id,
            name=room.name,
            capacity=room.capacity,
            hotel_id=room.hotel_id,
            created_at=room.created_at,
            updated_at=room.updated_at,
        )


@dataclass(frozen=True)
class RoomWithBookingsView:
    room: RoomView
    booking_ids: Tuple[int, ...]

    @property
    def booking_count(self) -> int:
        return len(self.booking_ids)

    @property
    def is_full(self) -> bool:
        return self.booking_count >= self.room.capacity


@dataclass(frozen=True)
class BookingView:
    id: int
    user_id: int
    room_id: int
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @classmethod
    def from_model(cls, booking: Any) -> "BookingView":
        return cls(
            id=booking.id,
            user_id=booking.user_id,
            room_id=booking.room_id,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )


@dataclass(frozen=True)
class BookingWithRoomView:
    id: int
    room: RoomView
