"""Booking routes.

Every endpoint requires authentication; ownership and role checks happen
in BookingManager.
"""

from typing import Optional

from fastapi import APIRouter, Query, status

from api.responses import ok
from config import DEFAULT_PAGE_SIZE
from core.dependencies import BookingManagerDep, CurrentIdentity
from schemas.booking import CreateBookingRequest, UpdateBookingRequest
from schemas.common import Pagination

router = APIRouter(prefix="/api/bookings", tags=["Bookings"])


@router.post("", status_code=status.HTTP_201_CREATED, summary="Créer une réservation")
def create_booking(
    req: CreateBookingRequest,
    identity: CurrentIdentity,
    booking_manager: BookingManagerDep,
) -> dict:
    """Create a booking owned by the caller.

    Raises:
        ValidationError: On date, guest, price or hotel violations (400).
    """
    booking = booking_manager.create_booking(
        owner_id=identity.id,
        hotel_id=req.hotel,
        check_in=req.check_in,
        check_out=req.check_out,
        number_of_guests=req.number_of_guests,
        total_price=req.total_price,
        special_requests=req.special_requests,
    )
    return ok(booking)


@router.get("/me", summary="Mes réservations")
def list_my_bookings(identity: CurrentIdentity, booking_manager: BookingManagerDep) -> dict:
    return ok(booking_manager.list_bookings_for_user(identity.id))


@router.get("", summary="Toutes les réservations")
def list_bookings(
    identity: CurrentIdentity,
    booking_manager: BookingManagerDep,
    status_filter: Optional[str] = Query(default=None, alias="status"),
    search: Optional[str] = Query(default=None, description="Email ou pseudo du client"),
    sort: str = Query(default="createdAt"),
    order: str = Query(default="desc"),
    limit: int = Query(default=DEFAULT_PAGE_SIZE),
    page: int = Query(default=1),
) -> dict:
    """List all bookings with filters and pagination (employee, admin)."""
    bookings, total = booking_manager.list_bookings(
        identity,
        status=status_filter,
        search=search,
        page=page,
        limit=limit,
        sort=sort,
        order=order,
    )
    return ok(bookings, pagination=Pagination.build(page, limit, total))


@router.get("/{booking_id}", summary="Obtenir une réservation")
def get_booking(
    booking_id: str,
    identity: CurrentIdentity,
    booking_manager: BookingManagerDep,
) -> dict:
    return ok(booking_manager.get_booking(booking_id, identity))


@router.put("/{booking_id}", summary="Modifier une réservation")
def update_booking(
    booking_id: str,
    req: UpdateBookingRequest,
    identity: CurrentIdentity,
    booking_manager: BookingManagerDep,
) -> dict:
    """Update a booking (owner, employee, admin).

    Only the fields present in the body are applied; ``user`` and
    ``hotel`` are ignored.
    """
    patch = req.model_dump(exclude_unset=True)
    return ok(booking_manager.update_booking(booking_id, identity, patch))


@router.put("/{booking_id}/cancel", summary="Annuler une réservation")
def cancel_booking(
    booking_id: str,
    identity: CurrentIdentity,
    booking_manager: BookingManagerDep,
) -> dict:
    return ok(booking_manager.cancel_booking(booking_id, identity))


@router.delete("/{booking_id}", summary="Supprimer une réservation")
def delete_booking(
    booking_id: str,
    identity: CurrentIdentity,
    booking_manager: BookingManagerDep,
) -> dict:
    booking_manager.delete_booking(booking_id, identity)
    return ok(message="Réservation supprimée avec succès")
