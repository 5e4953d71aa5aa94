"""Booking ledger.

Reservations link a user and a hotel over a date range. Every write is
validated here before it reaches the database, and every operation checks
the caller's rights through the access control helpers.

Overlapping bookings for the same hotel are accepted: the ledger does no
availability checking.
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import pytz
from sqlalchemy.orm import Session, joinedload

from config import (
    BOOKING_SORT_FIELDS,
    DEFAULT_BOOKING_STATUS,
    MAX_PAGE_SIZE,
    ROLE_ADMIN,
    ROLE_EMPLOYEE,
    SORT_ORDERS,
)
from core.access_control import Identity, require_owner_or_role, require_role
from core.clock import Clock
from core.exceptions import BookingNotFoundError
from models.booking import BookingModel
from models.hotel import HotelModel
from schemas.booking import Booking
from utils.converters import model_to_booking
from utils.user_manager import UserManager
from utils.validators import (
    booking_date_errors,
    booking_errors,
    pagination_errors,
    raise_if_errors,
    sort_errors,
)

logger = logging.getLogger(__name__)

# Roles that may read, update and cancel any booking
PRIVILEGED_ROLES = {ROLE_EMPLOYEE, ROLE_ADMIN}

_SORT_COLUMNS = {
    "createdAt": BookingModel.created_at,
    "checkIn": BookingModel.check_in,
    "checkOut": BookingModel.check_out,
    "totalPrice": BookingModel.total_price,
    "numberOfGuests": BookingModel.number_of_guests,
    "status": BookingModel.status,
}

# Patch keys that can never change after creation
_IMMUTABLE_FIELDS = ("user", "user_id", "hotel", "hotel_id")
_REQUIRED_FIELDS = ("check_in", "check_out", "number_of_guests", "total_price", "status")
_UPDATABLE_FIELDS = _REQUIRED_FIELDS + ("special_requests",)


class BookingManager:
    """Manages booking operations using SQLAlchemy."""

    def __init__(
        self,
        db: Session,
        clock: Optional[Clock] = None,
        user_manager: Optional[UserManager] = None,
    ):
        """Initialize BookingManager.

        Args:
            db: SQLAlchemy Session.
            clock: Source of "today" for date checks.
            user_manager: Used to resolve search terms into owner ids.
        """
        self.db = db
        self.clock = clock or Clock()
        self.user_manager = user_manager or UserManager(db)

    def _query(self):
        return self.db.query(BookingModel).options(
            joinedload(BookingModel.user), joinedload(BookingModel.hotel)
        )

    def _get_model(self, booking_id: str) -> BookingModel:
        model = self._query().filter(BookingModel.booking_id == booking_id).first()
        if model is None:
            raise BookingNotFoundError(booking_id)
        return model

    def create_booking(
        self,
        owner_id: str,
        hotel_id: str,
        check_in,
        check_out,
        number_of_guests: int,
        total_price: float,
        special_requests: Optional[str] = None,
    ) -> Booking:
        """Create a pending booking owned by ``owner_id``.

        Args:
            owner_id: Id of the authenticated caller; never taken from the body.
            hotel_id: Hotel being booked; must exist.
            check_in: Arrival, date or datetime.
            check_out: Departure, date or datetime.
            number_of_guests: At least 1.
            total_price: Non-negative.
            special_requests: Optional, at most 500 characters.

        Returns:
            The created Booking.

        Raises:
            ValidationError: Listing every violated field.
        """
        check_in = self.clock.to_local_date(check_in)
        check_out = self.clock.to_local_date(check_out)

        errors = booking_date_errors(check_in, check_out, self.clock.today())
        errors += booking_errors(
            number_of_guests=number_of_guests,
            total_price=total_price,
            special_requests=special_requests,
        )
        if not hotel_id or self.db.get(HotelModel, hotel_id) is None:
            errors.append({"field": "hotel", "message": "Hôtel non trouvé"})
        raise_if_errors(errors)

        now = datetime.now(pytz.utc).isoformat()
        model = BookingModel(
            booking_id=str(uuid.uuid4()),
            user_id=owner_id,
            hotel_id=hotel_id,
            check_in=check_in,
            check_out=check_out,
            number_of_guests=number_of_guests,
            total_price=total_price,
            status=DEFAULT_BOOKING_STATUS,
            special_requests=special_requests,
            created_at=now,
            updated_at=now,
        )
        self.db.add(model)
        self.db.commit()
        logger.info(
            "Created booking %s for user %s at hotel %s (%s -> %s)",
            model.booking_id,
            owner_id,
            hotel_id,
            check_in,
            check_out,
        )
        return model_to_booking(self._get_model(model.booking_id))

    def get_booking(self, booking_id: str, requester: Identity) -> Booking:
        """Read a booking as its owner, an employee or an admin.

        Raises:
            BookingNotFoundError: If the booking does not exist.
            ForbiddenError: If the requester may not see it.
        """
        model = self._get_model(booking_id)
        require_owner_or_role(requester, model.user_id, PRIVILEGED_ROLES)
        return model_to_booking(model)

    def update_booking(
        self, booking_id: str, requester: Identity, patch: Dict[str, Any]
    ) -> Booking:
        """Apply a partial update.

        Owner and hotel keys are dropped without error. When the patch
        touches either date, the resulting pair is checked again, using the
        stored value for the side that was not supplied. ``status`` may be
        set to any valid status here; only ``cancel_booking`` is dedicated
        to a single transition.

        Args:
            booking_id: Booking to update.
            requester: Authenticated caller.
            patch: Field name to new value, snake_case, only supplied keys.

        Raises:
            BookingNotFoundError: If the booking does not exist.
            ForbiddenError: If the requester may not modify it.
            ValidationError: Listing every violated field.
        """
        model = self._get_model(booking_id)
        require_owner_or_role(requester, model.user_id, PRIVILEGED_ROLES)

        patch = {k: v for k, v in patch.items() if k not in _IMMUTABLE_FIELDS}
        missing = [
            field for field in _REQUIRED_FIELDS if field in patch and patch[field] is None
        ]
        errors = [{"field": _camel(field), "message": "Champ requis"} for field in missing]

        dates_touched = "check_in" in patch or "check_out" in patch
        if dates_touched and not {"check_in", "check_out"} & set(missing):
            check_in = (
                self.clock.to_local_date(patch["check_in"])
                if "check_in" in patch
                else model.check_in
            )
            check_out = (
                self.clock.to_local_date(patch["check_out"])
                if "check_out" in patch
                else model.check_out
            )
            errors += booking_date_errors(check_in, check_out, self.clock.today())
            patch["check_in"], patch["check_out"] = check_in, check_out

        errors += booking_errors(
            number_of_guests=patch.get("number_of_guests"),
            total_price=patch.get("total_price"),
            special_requests=patch.get("special_requests"),
            status=patch.get("status"),
        )
        raise_if_errors(errors)

        for field in _UPDATABLE_FIELDS:
            if field in patch:
                setattr(model, field, patch[field])
        model.updated_at = datetime.now(pytz.utc).isoformat()
        self.db.commit()
        logger.info("Updated booking %s by %s: %s", booking_id, requester.id, sorted(patch))
        return model_to_booking(self._get_model(booking_id))

    def cancel_booking(self, booking_id: str, requester: Identity) -> Booking:
        """Set the status to cancelled; cancelling twice is not an error.

        Raises:
            BookingNotFoundError: If the booking does not exist.
            ForbiddenError: If the requester may not modify it.
        """
        model = self._get_model(booking_id)
        require_owner_or_role(requester, model.user_id, PRIVILEGED_ROLES)
        model.status = "cancelled"
        model.updated_at = datetime.now(pytz.utc).isoformat()
        self.db.commit()
        logger.info("Cancelled booking %s by %s", booking_id, requester.id)
        return model_to_booking(self._get_model(booking_id))

    def delete_booking(self, booking_id: str, requester: Identity) -> None:
        """Delete a booking; admins only.

        Raises:
            ForbiddenError: If the requester is not an admin.
            BookingNotFoundError: If the booking does not exist.
        """
        require_role(requester, {ROLE_ADMIN})
        model = self._get_model(booking_id)
        self.db.delete(model)
        self.db.commit()
        logger.info("Deleted booking %s by %s", booking_id, requester.id)

    def list_bookings(
        self,
        requester: Identity,
        status: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
        sort: str = "createdAt",
        order: str = "desc",
    ) -> Tuple[List[Booking], int]:
        """List all bookings for staff.

        Args:
            requester: Must be an employee or an admin.
            status: Optional status filter.
            search: Optional term matched against the owner's email or
                pseudo, ignoring case.
            page: 1-based page number.
            limit: Page size.
            sort: Sort field, e.g. ``createdAt`` or ``checkIn``.
            order: ``asc`` or ``desc``.

        Returns:
            Tuple of the bookings on the page and the total match count.
            A search matching no user gives an empty page.

        Raises:
            ForbiddenError: If the requester is not staff.
            ValidationError: If a parameter is invalid.
        """
        require_role(requester, PRIVILEGED_ROLES)
        raise_if_errors(
            booking_errors(status=status)
            + sort_errors(sort, order, BOOKING_SORT_FIELDS, SORT_ORDERS)
            + pagination_errors(page, limit, MAX_PAGE_SIZE)
        )

        query = self._query()
        if status:
            query = query.filter(BookingModel.status == status)
        if search:
            user_ids = self.user_manager.find_user_ids(search)
            if not user_ids:
                return [], 0
            query = query.filter(BookingModel.user_id.in_(user_ids))

        total = query.count()
        column = _SORT_COLUMNS[sort]
        order_by = (
            [column.desc(), BookingModel.booking_id.desc()]
            if order == "desc"
            else [column.asc(), BookingModel.booking_id.asc()]
        )
        models = (
            query.order_by(*order_by)
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return [model_to_booking(m) for m in models], total

    def list_bookings_for_user(self, owner_id: str) -> List[Booking]:
        """The given user's bookings, newest first."""
        models = (
            self._query()
            .filter(BookingModel.user_id == owner_id)
            .order_by(BookingModel.created_at.desc())
            .all()
        )
        return [model_to_booking(m) for m in models]


def _camel(field: str) -> str:
    head, *rest = field.split("_")
    return head + "".join(part.title() for part in rest)
