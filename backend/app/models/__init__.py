"""
Database models for the EventHub booking API.

The models are organized by functionality:
- Users and their authentication sessions
- Enrollment and tickets (eligibility)
- Hotels, rooms and bookings
"""

from .booking import Booking
from .enrollment import Enrollment
from .hotel import Hotel, Room
from .ticket import Ticket, TicketStatus, TicketType
from .user import User, UserSession

__all__ = [
    "Booking",
    "Enrollment",
    "Hotel",
    "Room",
    "Ticket",
    "TicketStatus",
    "TicketType",
    "User",
    "UserSession",
]
