from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest
from sqlalchemy.exc import OperationalError

from app.core.exceptions import (
    BookingErrorCode,
    ForbiddenException,
    NotFoundException,
    ServiceException,
)
from app.domain.booking_views import (
    BookingView,
    BookingWithRoomView,
    EnrollmentView,
    RoomView,
    RoomWithBookingsView,
    TicketTypeView,
    TicketView,
)
from app.monitoring.prometheus_metrics import REGISTRY
from app.services.booking_service import BookingService

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def _room(room_id: int = 7, capacity: int = 2, bookings: tuple = ()) -> RoomWithBookingsView:
    return RoomWithBookingsView(
        room=RoomView(
            id=room_id, name="101", capacity=capacity, hotel_id=1, created_at=NOW, updated_at=NOW
        ),
        booking_ids=bookings,
    )


def _booking(booking_id: int = 30, user_id: int = 1, room_id: int = 7) -> BookingView:
    return BookingView(
        id=booking_id, user_id=user_id, room_id=room_id, created_at=NOW, updated_at=NOW
    )


@pytest.fixture
def service() -> BookingService:
    db = Mock()
    svc = BookingService(
        db,
        booking_repository=Mock(),
        room_repository=Mock(),
        enrollment_repository=Mock(),
        ticket_repository=Mock(),
    )
    svc.enrollment_repository.get_by_user_id.return_value = EnrollmentView(id=10, user_id=1)
    svc.ticket_repository.get_by_enrollment_id.return_value = TicketView(
        id=20, enrollment_id=10, ticket_type_id=5, status="PAID"
    )
    svc.ticket_repository.get_ticket_type_by_id.return_value = TicketTypeView(
        id=5, name="Presencial + Hotel", is_remote=False, includes_hotel=True
    )
    svc.room_repository.get_room_by_id.return_value = _room()
    svc.booking_repository.post_booking.return_value = _booking()
    return svc


class TestGetBooking:
    def test_returns_booking_with_room(self, service: BookingService) -> None:
        expected = BookingWithRoomView(id=30, room=_room().room)
        service.booking_repository.get_booking.return_value = expected

        assert service.get_booking(1) == expected
        service.booking_repository.get_booking.assert_called_once_with(1)

    def test_missing_enrollment_is_not_found(self, service: BookingService) -> None:
        service.enrollment_repository.get_by_user_id.return_value = None

        with pytest.raises(NotFoundException) as exc_info:
            service.get_booking(1)

        assert exc_info.value.code == BookingErrorCode.ENROLLMENT_NOT_FOUND.value
        service.ticket_repository.get_by_enrollment_id.assert_not_called()

    def test_missing_ticket_is_forbidden(self, service: BookingService) -> None:
        service.ticket_repository.get_by_enrollment_id.return_value = None

        with pytest.raises(ForbiddenException) as exc_info:
            service.get_booking(1)

        assert exc_info.value.code == BookingErrorCode.TICKET_NOT_FOUND.value
        service.booking_repository.get_booking.assert_not_called()

    def test_unpaid_ticket_can_still_read_booking(self, service: BookingService) -> None:
        service.ticket_repository.get_by_enrollment_id.return_value = TicketView(
            id=20, enrollment_id=10, ticket_type_id=5, status="RESERVED"
        )
        service.booking_repository.get_booking.return_value = BookingWithRoomView(
            id=30, room=_room().room
        )

        assert service.get_booking(1).id == 30

    def test_no_booking_is_not_found(self, service: BookingService) -> None:
        service.booking_repository.get_booking.return_value = None

        with pytest.raises(NotFoundException) as exc_info:
            service.get_booking(1)

        assert exc_info.value.code == BookingErrorCode.BOOKING_NOT_FOUND.value


class TestPostBooking:
    def test_creates_booking_and_commits(self, service: BookingService) -> None:
        result = service.post_booking(1, 7)

        assert result.id == 30
        service.room_repository.get_room_by_id.assert_called_once_with(7, for_update=True)
        service.booking_repository.post_booking.assert_called_once_with(1, 7)
        service.db.commit.assert_called_once()

    @pytest.mark.parametrize(
        ("status", "is_remote", "includes_hotel", "code"),
        [
            ("RESERVED", False, True, BookingErrorCode.TICKET_NOT_PAID),
            ("PAID", True, True, BookingErrorCode.TICKET_TYPE_INELIGIBLE),
            ("PAID", False, False, BookingErrorCode.TICKET_TYPE_INELIGIBLE),
        ],
    )
    def test_ineligible_ticket_is_forbidden(
        self,
        service: BookingService,
        status: str,
        is_remote: bool,
        includes_hotel: bool,
        code: BookingErrorCode,
    ) -> None:
        service.ticket_repository.get_by_enrollment_id.return_value = TicketView(
            id=20, enrollment_id=10, ticket_type_id=5, status=status
        )
        service.ticket_repository.get_ticket_type_by_id.return_value = TicketTypeView(
            id=5, name="Type", is_remote=is_remote, includes_hotel=includes_hotel
        )

        with pytest.raises(ForbiddenException) as exc_info:
            service.post_booking(1, 7)

        assert exc_info.value.code == code.value
        service.booking_repository.post_booking.assert_not_called()
        service.db.commit.assert_not_called()
        service.db.rollback.assert_called_once()

    def test_missing_ticket_type_is_forbidden(self, service: BookingService) -> None:
        service.ticket_repository.get_ticket_type_by_id.return_value = None

        with pytest.raises(ForbiddenException) as exc_info:
            service.post_booking(1, 7)

        assert exc_info.value.code == BookingErrorCode.TICKET_TYPE_INELIGIBLE.value

    def test_missing_room_is_not_found(self, service: BookingService) -> None:
        service.room_repository.get_room_by_id.return_value = None

        with pytest.raises(NotFoundException) as exc_info:
            service.post_booking(1, 999)

        assert exc_info.value.code == BookingErrorCode.ROOM_NOT_FOUND.value
        service.booking_repository.post_booking.assert_not_called()

    def test_full_room_is_forbidden(self, service: BookingService) -> None:
        service.room_repository.get_room_by_id.return_value = _room(capacity=2, bookings=(1, 2))

        with pytest.raises(ForbiddenException) as exc_info:
            service.post_booking(1, 7)

        assert exc_info.value.code == BookingErrorCode.ROOM_FULL.value
        service.booking_repository.post_booking.assert_not_called()

    def test_room_filled_after_vacancy_check_is_forbidden(self, service: BookingService) -> None:
        service.booking_repository.post_booking.return_value = None

        with pytest.raises(ForbiddenException) as exc_info:
            service.post_booking(1, 7)

        assert exc_info.value.code == BookingErrorCode.ROOM_FULL.value
        service.db.commit.assert_not_called()
        service.db.rollback.assert_called_once()

    def test_zero_capacity_room_is_always_full(self, service: BookingService) -> None:
        service.room_repository.get_room_by_id.return_value = _room(capacity=0)

        with pytest.raises(ForbiddenException):
            service.post_booking(1, 7)

    def test_ticket_checked_before_room(self, service: BookingService) -> None:
        service.ticket_repository.get_by_enrollment_id.return_value = TicketView(
            id=20, enrollment_id=10, ticket_type_id=5, status="RESERVED"
        )
        service.room_repository.get_room_by_id.return_value = None

        with pytest.raises(ForbiddenException):
            service.post_booking(1, 999)

        service.room_repository.get_room_by_id.assert_not_called()

    def test_missing_enrollment_wins_over_everything(self, service: BookingService) -> None:
        service.enrollment_repository.get_by_user_id.return_value = None
        service.room_repository.get_room_by_id.return_value = None

        with pytest.raises(NotFoundException) as exc_info:
            service.post_booking(1, 999)

        assert exc_info.value.code == BookingErrorCode.ENROLLMENT_NOT_FOUND.value

    def test_database_error_is_wrapped(self, service: BookingService) -> None:
        service.booking_repository.post_booking.side_effect = OperationalError(
            "INSERT", {}, Exception("disk I/O error")
        )

        with pytest.raises(ServiceException):
            service.post_booking(1, 7)

        service.db.rollback.assert_called_once()


class TestUpdateBooking:
    @pytest.fixture(autouse=True)
    def _owned_booking(self, service: BookingService) -> None:
        service.booking_repository.get_booking.return_value = BookingWithRoomView(
            id=30, room=_room(room_id=3).room
        )
        service.booking_repository.booking_by_user.return_value = _booking(room_id=3)
        service.booking_repository.update_booking.return_value = _booking(room_id=7)

    def test_moves_booking_to_new_room(self, service: BookingService) -> None:
        result = service.update_booking(1, 7, 30)

        assert result.id == 30
        assert result.room_id == 7
        service.booking_repository.booking_by_user.assert_called_once_with(1, 30)
        service.booking_repository.update_booking.assert_called_once_with(30, 7)
        service.db.commit.assert_called_once()

    def test_user_without_booking_is_forbidden(self, service: BookingService) -> None:
        service.booking_repository.get_booking.return_value = None

        with pytest.raises(ForbiddenException) as exc_info:
            service.update_booking(1, 7, 30)

        assert exc_info.value.code == BookingErrorCode.BOOKING_NOT_FOUND.value
        service.booking_repository.update_booking.assert_not_called()

    def test_foreign_booking_is_forbidden(self, service: BookingService) -> None:
        service.booking_repository.booking_by_user.return_value = None

        with pytest.raises(ForbiddenException) as exc_info:
            service.update_booking(1, 7, 31)

        assert exc_info.value.code == BookingErrorCode.BOOKING_NOT_OWNED.value
        service.booking_repository.update_booking.assert_not_called()
        service.db.commit.assert_not_called()

    def test_missing_room_checked_before_ownership(self, service: BookingService) -> None:
        service.room_repository.get_room_by_id.return_value = None
        service.booking_repository.booking_by_user.return_value = None

        with pytest.raises(NotFoundException):
            service.update_booking(1, 999, 31)

        service.booking_repository.booking_by_user.assert_not_called()

    def test_full_target_room_is_forbidden(self, service: BookingService) -> None:
        service.room_repository.get_room_by_id.return_value = _room(capacity=1, bookings=(99,))

        with pytest.raises(ForbiddenException) as exc_info:
            service.update_booking(1, 7, 30)

        assert exc_info.value.code == BookingErrorCode.ROOM_FULL.value

    def test_room_filled_after_vacancy_check_is_forbidden(self, service: BookingService) -> None:
        service.booking_repository.update_booking.return_value = None

        with pytest.raises(ForbiddenException) as exc_info:
            service.update_booking(1, 7, 30)

        assert exc_info.value.code == BookingErrorCode.ROOM_FULL.value
        service.db.commit.assert_not_called()

    def test_unpaid_ticket_is_forbidden(self, service: BookingService) -> None:
        service.ticket_repository.get_by_enrollment_id.return_value = TicketView(
            id=20, enrollment_id=10, ticket_type_id=5, status="RESERVED"
        )

        with pytest.raises(ForbiddenException) as exc_info:
            service.update_booking(1, 7, 30)

        assert exc_info.value.code == BookingErrorCode.TICKET_NOT_PAID.value


class TestBookingServiceMetrics:
    def test_operations_are_counted_in_prometheus(self, service: BookingService) -> None:
        labels = {"service": "BookingService", "operation": "post_booking", "status": "success"}
        before = REGISTRY.get_sample_value("eventhub_service_operations_total", labels) or 0.0

        service.post_booking(1, 7)

        after = REGISTRY.get_sample_value("eventhub_service_operations_total", labels)
        assert after == before + 1
