"""
Booking Repository for the EventHub booking API

Implements all data access operations for hotel bookings:
- Looking up a user's booking together with its room
- Ownership checks by (user, booking id)
- Creating a booking and reassigning its room

Writes that place a booking in a room are guarded by the room's capacity in
the same statement, so they can never oversubscribe a room even when two
transactions passed the service-level vacancy check at the same time.

Every method returns plain views (see app.domain.booking_views) or None.
"""

import logging
from typing import Optional

from sqlalchemy import DateTime, Integer, func, insert, literal, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session, joinedload
from sqlalchemy.sql.elements import ColumnElement

from ..core.exceptions import RepositoryException
from ..domain.booking_views import BookingView, BookingWithRoomView, RoomView
from ..models._timestamps import utcnow
from ..models.booking import Booking
from ..models.hotel import Room
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)

bookings_table = Booking.__table__
rooms_table = Room.__table__


def _has_vacancy(room_id: int) -> ColumnElement[bool]:
    """SQL condition: the room exists and holds fewer bookings than its capacity."""
    occupant = bookings_table.alias("occupant")
    occupancy = (
        select(func.count(occupant.c.id)).where(occupant.c.room_id == room_id).scalar_subquery()
    )
    capacity = select(rooms_table.c.capacity).where(rooms_table.c.id == room_id).scalar_subquery()
    return occupancy < capacity


class BookingRepository(BaseRepository[Booking]):
    """Repository for booking data access."""

    def __init__(self, db: Session):
        """Initialize with Booking model."""
        super().__init__(db, Booking)
        self.logger = logging.getLogger(__name__)

    def get_booking(self, user_id: int) -> Optional[BookingWithRoomView]:
        """
        Get the user's first booking with its room.

        Args:
            user_id: Owner of the booking

        Returns:
            Booking id plus room projection, or None when the user has no booking
        """
        query = self.db.query(Booking).filter(Booking.user_id == user_id)
        booking = self._apply_eager_loading(query).order_by(Booking.id.asc()).first()
        if booking is None:
            return None
        return BookingWithRoomView(id=booking.id, room=RoomView.from_model(booking.room))

    def booking_by_user(self, user_id: int, booking_id: int) -> Optional[BookingView]:
        """Return the booking only if ``booking_id`` belongs to ``user_id``."""
        booking = self.find_one_by(id=booking_id, user_id=user_id)
        return BookingView.from_model(booking) if booking else None

    def post_booking(self, user_id: int, room_id: int) -> Optional[BookingView]:
        """
        Insert a booking binding the user to the room (not committed).

        The row is only inserted while the room still has a free slot.

        Returns:
            The new booking, or None when the room was full at insert time
        """
        now = utcnow()
        vacancy_row = select(
            literal(user_id, Integer),
            literal(room_id, Integer),
            literal(now, DateTime(timezone=True)),
            literal(now, DateTime(timezone=True)),
        ).where(_has_vacancy(room_id))
        stmt = (
            insert(bookings_table)
            .from_select(["user_id", "room_id", "created_at", "updated_at"], vacancy_row)
            .returning(bookings_table.c.id)
        )
        try:
            booking_id = self.db.execute(stmt).scalar_one_or_none()
            if booking_id is None:
                self.logger.info("Room %s full at insert time", room_id)
                return None
            booking = self.db.get(Booking, booking_id)
        except IntegrityError as exc:
            self.logger.error("Integrity error creating booking: %s", exc, exc_info=True)
            raise RepositoryException(f"Integrity constraint violated: {exc}") from exc
        except SQLAlchemyError as e:
            self.logger.error(f"Error creating booking: {str(e)}")
            raise RepositoryException(f"Failed to create Booking: {str(e)}")

        self.logger.debug("Inserted %s", self._describe(id=booking_id, room_id=room_id))
        return BookingView.from_model(booking)

    def update_booking(self, booking_id: int, room_id: int) -> Optional[BookingView]:
        """
        Point an existing booking at another room (not committed).

        The room is only reassigned while the target room still has a free slot.

        Returns:
            The updated booking, or None when the booking does not exist or
            the target room was full at update time
        """
        stmt = (
            update(bookings_table)
            .where(bookings_table.c.id == booking_id)
            .where(_has_vacancy(room_id))
            .values(room_id=room_id, updated_at=utcnow())
        )
        try:
            result = self.db.execute(stmt)
            if result.rowcount != 1:
                return None
            booking = self.db.get(Booking, booking_id, populate_existing=True)
        except SQLAlchemyError as e:
            self.logger.error(f"Error updating booking {booking_id}: {str(e)}")
            raise RepositoryException(f"Failed to update Booking: {str(e)}")

        # The loaded Booking.room still points at the previous room
        self.db.expire(booking, ["room"])
        return BookingView.from_model(booking)

    def _apply_eager_loading(self, query: Query) -> Query:
        """Bookings are always read together with their room."""
        return query.options(joinedload(Booking.room))
