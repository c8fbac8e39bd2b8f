# backend/app/repositories/__init__.py
"""
Repository Pattern Implementation for the EventHub booking API

This package provides the repository layer for data access,
separating business logic from database queries.

Key Components:
- BaseRepository: Foundation for all repositories with generic operations
- IRepository: Interface defining required methods for all repositories
- RepositoryFactory: Factory for creating repository instances
- BookingRepository: Bookings by user, ownership checks, create/update
- RoomRepository: Room occupancy with optional row lock
- EnrollmentRepository / TicketRepository: Hotel-booking eligibility inputs
- SessionRepository: Bearer-token sessions for authentication

Usage:
    from app.repositories import RepositoryFactory

    booking_repo = RepositoryFactory.create_booking_repository(db)
    booking = booking_repo.get_booking(user_id)
"""

from .base_repository import BaseRepository, IRepository
from .booking_repository import BookingRepository
from .enrollment_repository import EnrollmentRepository
from .factory import RepositoryFactory
from .room_repository import RoomRepository
from .session_repository import SessionRepository
from .ticket_repository import TicketRepository

__all__ = [
    "BaseRepository",
    "IRepository",
    "RepositoryFactory",
    "BookingRepository",
    "EnrollmentRepository",
    "RoomRepository",
    "SessionRepository",
    "TicketRepository",
]
