from datetime import date, datetime, timedelta

import pytest
import pytz

from conftest import TODAY
from core.access_control import Identity
from core.clock import Clock, FixedClock
from core.exceptions import BookingNotFoundError, ForbiddenError, ValidationError
from utils.booking_manager import BookingManager


@pytest.fixture
def owner(make_user):
    user, _ = make_user("user")
    return Identity(id=user.user_id, role=user.role)


@pytest.fixture
def booking(db, clock, owner, hotel):
    return BookingManager(db, clock=clock).create_booking(
        owner_id=owner.id,
        hotel_id=hotel.id,
        check_in=TODAY + timedelta(days=1),
        check_out=TODAY + timedelta(days=3),
        number_of_guests=2,
        total_price=300,
    )


def later(db, days):
    """A manager whose clock has moved ``days`` past TODAY."""
    return BookingManager(db, clock=FixedClock(TODAY + timedelta(days=days)))


class TestClock:
    def test_aware_datetime_uses_clock_timezone(self):
        clock = Clock("Europe/Paris")
        value = datetime(2025, 1, 1, 23, 30, tzinfo=pytz.utc)
        assert clock.to_local_date(value) == date(2025, 1, 2)

    def test_naive_datetime_keeps_its_day(self):
        assert Clock("Asia/Tokyo").to_local_date(datetime(2025, 1, 1, 23, 30)) == date(2025, 1, 1)

    def test_date_passes_through(self):
        assert Clock().to_local_date(date(2025, 1, 1)) == date(2025, 1, 1)

    def test_rejects_strings(self):
        with pytest.raises(TypeError):
            Clock().to_local_date("2025-01-01")


class TestUpdateRevalidation:
    def test_untouched_dates_are_not_checked_again(self, db, owner, booking):
        # check_in is now in the past, but only the guest count changes
        updated = later(db, 10).update_booking(booking.id, owner, {"number_of_guests": 4})
        assert updated.number_of_guests == 4
        assert updated.check_in == TODAY + timedelta(days=1)

    def test_touching_one_date_checks_the_stored_other(self, db, owner, booking):
        with pytest.raises(ValidationError) as exc_info:
            later(db, 10).update_booking(
                booking.id, owner, {"check_out": TODAY + timedelta(days=20)}
            )
        assert [e["field"] for e in exc_info.value.errors] == ["checkIn"]

    def test_explicit_null_on_required_field(self, db, clock, owner, booking):
        manager = BookingManager(db, clock=clock)
        with pytest.raises(ValidationError) as exc_info:
            manager.update_booking(booking.id, owner, {"total_price": None})
        assert exc_info.value.errors[0]["field"] == "totalPrice"

    def test_null_and_invalid_fields_are_reported_together(self, db, clock, owner, booking):
        manager = BookingManager(db, clock=clock)
        with pytest.raises(ValidationError) as exc_info:
            manager.update_booking(
                booking.id,
                owner,
                {"number_of_guests": None, "total_price": -1, "check_out": TODAY},
            )
        fields = [e["field"] for e in exc_info.value.errors]
        assert fields == ["numberOfGuests", "checkOut", "totalPrice"]

    def test_special_requests_can_be_cleared(self, db, clock, owner, booking):
        manager = BookingManager(db, clock=clock)
        manager.update_booking(booking.id, owner, {"special_requests": "Quiet room"})
        updated = manager.update_booking(booking.id, owner, {"special_requests": None})
        assert updated.special_requests is None

    def test_owner_keys_are_dropped(self, db, clock, owner, booking):
        updated = BookingManager(db, clock=clock).update_booking(
            booking.id, owner, {"user_id": "someone", "hotel_id": "elsewhere"}
        )
        assert updated.user_id == owner.id
        assert updated.hotel_id == booking.hotel_id


class TestPermissions:
    def test_not_found_before_forbidden(self, db, clock):
        stranger = Identity(id="x", role="user")
        with pytest.raises(BookingNotFoundError):
            BookingManager(db, clock=clock).get_booking("missing", stranger)

    def test_delete_checks_role_first(self, db, clock, owner, booking):
        with pytest.raises(ForbiddenError):
            BookingManager(db, clock=clock).delete_booking("missing", owner)

    def test_list_requires_staff(self, db, clock, owner):
        with pytest.raises(ForbiddenError):
            BookingManager(db, clock=clock).list_bookings(owner)


def test_cancel_keeps_other_fields(db, clock, owner, booking):
    cancelled = BookingManager(db, clock=clock).cancel_booking(booking.id, owner)
    assert cancelled.status == "cancelled"
    assert cancelled.total_price == booking.total_price
    assert cancelled.check_in == booking.check_in
