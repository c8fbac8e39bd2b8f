# backend/app/repositories/factory.py
"""
Repository Factory for the EventHub booking API

Provides centralized creation of repository instances,
ensuring consistent initialization and dependency injection.
"""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

# Avoid circular imports
if TYPE_CHECKING:
    from .booking_repository import BookingRepository
    from .enrollment_repository import EnrollmentRepository
    from .room_repository import RoomRepository
    from .session_repository import SessionRepository
    from .ticket_repository import TicketRepository


class RepositoryFactory:
    """
    Factory class for creating repository instances.

    Centralizes repository creation to ensure consistent initialization
    and makes it easy to swap implementations if needed.
    """

    @staticmethod
    def create_booking_repository(db: Session) -> "BookingRepository":
        """Create repository for booking operations."""
        from .booking_repository import BookingRepository

        return BookingRepository(db)

    @staticmethod
    def create_room_repository(db: Session) -> "RoomRepository":
        """Create repository for room occupancy lookups."""
        from .room_repository import RoomRepository

        return RoomRepository(db)

    @staticmethod
    def create_enrollment_repository(db: Session) -> "EnrollmentRepository":
        """Create repository for enrollment lookups."""
        from .enrollment_repository import EnrollmentRepository

        return EnrollmentRepository(db)

    @staticmethod
    def create_ticket_repository(db: Session) -> "TicketRepository":
        """Create repository for tickets and ticket types."""
        from .ticket_repository import TicketRepository

        return TicketRepository(db)

    @staticmethod
    def create_session_repository(db: Session) -> "SessionRepository":
        """Create repository for auth session lookups."""
        from .session_repository import SessionRepository

        return SessionRepository(db)
