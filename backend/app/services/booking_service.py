# backend/app/services/booking_service.py
"""
Booking Service for the EventHub booking API

Handles the hotel booking business rules:
- Only users with an enrollment and a ticket can see their booking
- Only PAID, in-person, hotel-inclusive tickets can book or change rooms
- A room never holds more bookings than its capacity
- A user can only move a booking they own

Checks run in a fixed order and stop at the first failure; that order decides
which error a client sees and is part of the API contract.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import (
    BookingErrorCode,
    DomainException,
    booking_forbidden,
    booking_not_found,
)
from ..domain.booking_views import (
    BookingView,
    BookingWithRoomView,
    RoomWithBookingsView,
    TicketView,
)
from ..models.ticket import TicketStatus
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.factory import RepositoryFactory
from .base import BaseService

if TYPE_CHECKING:
    from ..repositories.booking_repository import BookingRepository
    from ..repositories.enrollment_repository import EnrollmentRepository
    from ..repositories.room_repository import RoomRepository
    from ..repositories.ticket_repository import TicketRepository

logger = logging.getLogger(__name__)


class BookingService(BaseService):
    """
    Service layer for hotel booking operations.

    Holds no state between calls: every operation re-reads enrollment, ticket,
    room and booking from the database.
    """

    booking_repository: "BookingRepository"
    room_repository: "RoomRepository"
    enrollment_repository: "EnrollmentRepository"
    ticket_repository: "TicketRepository"

    def __init__(
        self,
        db: Session,
        booking_repository: Optional["BookingRepository"] = None,
        room_repository: Optional["RoomRepository"] = None,
        enrollment_repository: Optional["EnrollmentRepository"] = None,
        ticket_repository: Optional["TicketRepository"] = None,
    ):
        """
        Initialize booking service.

        Args:
            db: Database session
            booking_repository: Optional BookingRepository instance
            room_repository: Optional RoomRepository instance
            enrollment_repository: Optional EnrollmentRepository instance
            ticket_repository: Optional TicketRepository instance
        """
        super().__init__(db)
        self.booking_repository = (
            booking_repository or RepositoryFactory.create_booking_repository(db)
        )
        self.room_repository = room_repository or RepositoryFactory.create_room_repository(db)
        self.enrollment_repository = (
            enrollment_repository or RepositoryFactory.create_enrollment_repository(db)
        )
        self.ticket_repository = ticket_repository or RepositoryFactory.create_ticket_repository(db)

    @BaseService.measure_operation("get_booking")
    def get_booking(self, user_id: int) -> BookingWithRoomView:
        """
        Get the user's booking with its room.

        Raises:
            NotFoundException: No enrollment, or no booking
            ForbiddenException: Enrollment without a ticket
        """
        operation = "get_booking"
        self._require_ticket(user_id, operation)

        booking = self.booking_repository.get_booking(user_id)
        if booking is None:
            raise self._reject(
                operation,
                booking_not_found(
                    BookingErrorCode.BOOKING_NOT_FOUND, "Booking not found", user_id=user_id
                ),
            )
        return booking

    @BaseService.measure_operation("post_booking")
    def post_booking(self, user_id: int, room_id: int) -> BookingView:
        """
        Reserve a room for the user.

        The room row is locked where the database supports FOR UPDATE, and the
        insert itself only succeeds while the room has a free slot, so two
        requests racing for the last slot cannot both win.

        Raises:
            NotFoundException: No enrollment, or the room does not exist
            ForbiddenException: Ticket missing, unpaid or not hotel-eligible; room full
        """
        operation = "post_booking"
        with self.transaction():
            self._require_hotel_eligibility(user_id, operation)
            self._lock_room_with_vacancy(room_id, operation)
            booking = self.booking_repository.post_booking(user_id, room_id)
            if booking is None:
                raise self._reject(operation, self._room_full(room_id))

        self.logger.info(
            "Booking created",
            extra={
                "event": "booking_created",
                "booking_id": booking.id,
                "user_id": user_id,
                "room_id": room_id,
            },
        )
        return booking

    @BaseService.measure_operation("update_booking")
    def update_booking(self, user_id: int, room_id: int, booking_id: int) -> BookingView:
        """
        Move the user's booking to another room.

        Runs the same eligibility and capacity chain as post_booking first,
        then requires that ``booking_id`` is one of the user's bookings.

        Raises:
            NotFoundException: No enrollment, or the room does not exist
            ForbiddenException: Any other ineligibility, including a missing
                or foreign booking
        """
        operation = "update_booking"
        with self.transaction():
            self._require_hotel_eligibility(user_id, operation)
            self._lock_room_with_vacancy(room_id, operation)

            if self.booking_repository.get_booking(user_id) is None:
                raise self._reject(
                    operation,
                    booking_forbidden(
                        BookingErrorCode.BOOKING_NOT_FOUND,
                        "User has no booking to change",
                        user_id=user_id,
                    ),
                )

            if self.booking_repository.booking_by_user(user_id, booking_id) is None:
                raise self._reject(
                    operation,
                    booking_forbidden(
                        BookingErrorCode.BOOKING_NOT_OWNED,
                        "Booking does not belong to user",
                        user_id=user_id,
                        booking_id=booking_id,
                    ),
                )

            booking = self.booking_repository.update_booking(booking_id, room_id)
            if booking is None:
                raise self._reject(operation, self._room_full(room_id))

        self.logger.info(
            "Booking room changed",
            extra={
                "event": "booking_room_changed",
                "booking_id": booking.id,
                "user_id": user_id,
                "room_id": room_id,
            },
        )
        return booking

    # Eligibility chain

    def _require_ticket(self, user_id: int, operation: str) -> TicketView:
        enrollment = self.enrollment_repository.get_by_user_id(user_id)
        if enrollment is None:
            raise self._reject(
                operation,
                booking_not_found(
                    BookingErrorCode.ENROLLMENT_NOT_FOUND, "Enrollment not found", user_id=user_id
                ),
            )

        ticket = self.ticket_repository.get_by_enrollment_id(enrollment.id)
        if ticket is None:
            raise self._reject(
                operation,
                booking_forbidden(
                    BookingErrorCode.TICKET_NOT_FOUND,
                    "Enrollment has no ticket",
                    enrollment_id=enrollment.id,
                ),
            )
        return ticket

    def _require_hotel_eligibility(self, user_id: int, operation: str) -> None:
        ticket = self._require_ticket(user_id, operation)
        if ticket.status != TicketStatus.PAID.value:
            raise self._reject(
                operation,
                booking_forbidden(
                    BookingErrorCode.TICKET_NOT_PAID,
                    "Ticket is not paid",
                    ticket_id=ticket.id,
                    status=ticket.status,
                ),
            )

        ticket_type = self.ticket_repository.get_ticket_type_by_id(ticket.ticket_type_id)
        if ticket_type is None or not ticket_type.allows_hotel_booking:
            raise self._reject(
                operation,
                booking_forbidden(
                    BookingErrorCode.TICKET_TYPE_INELIGIBLE,
                    "Ticket type does not include a hotel stay",
                    ticket_type_id=ticket.ticket_type_id,
                ),
            )

    def _lock_room_with_vacancy(self, room_id: int, operation: str) -> RoomWithBookingsView:
        room = self.room_repository.get_room_by_id(room_id, for_update=True)
        if room is None:
            raise self._reject(
                operation,
                booking_not_found(
                    BookingErrorCode.ROOM_NOT_FOUND, "Room not found", room_id=room_id
                ),
            )
        if room.is_full:
            raise self._reject(operation, self._room_full(room_id, capacity=room.room.capacity))
        return room

    def _room_full(self, room_id: int, **details: Any) -> DomainException:
        return booking_forbidden(
            BookingErrorCode.ROOM_FULL, "Room has no vacancy", room_id=room_id, **details
        )

    def _reject(self, operation: str, exc: DomainException) -> DomainException:
        """Record a business-rule rejection and hand the exception back for raising."""
        prometheus_metrics.record_booking_rejection(operation, exc.code)
        self.logger.info(
            "Booking request rejected",
            extra={"event": "booking_rejected", "operation": operation, "code": exc.code},
        )
        return exc
