"""Hotel catalog routes.

Listing and reading are public; writes are reserved to admins.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query, status

from api.responses import ok
from config import DEFAULT_PAGE_SIZE, ROLE_ADMIN, ROLE_EMPLOYEE
from core.access_control import Identity
from core.dependencies import HotelManagerDep, require_roles
from schemas.common import Pagination
from schemas.hotel import CreateHotelRequest, UpdateHotelRequest

router = APIRouter(prefix="/api/hotels", tags=["Hotels"])


@router.get("", summary="Liste des hôtels")
def list_hotels(
    hotel_manager: HotelManagerDep,
    sort: str = Query(default="createdAt", description="name, location ou createdAt"),
    order: str = Query(default="desc", description="asc ou desc"),
    limit: int = Query(default=DEFAULT_PAGE_SIZE),
    page: int = Query(default=1),
) -> dict:
    """List hotels with sorting and pagination.

    Returns:
        Envelope with the hotels of the page and pagination metadata.

    Raises:
        ValidationError: If sort, order, limit or page is invalid (400).
    """
    hotels, total = hotel_manager.list_hotels(sort=sort, order=order, limit=limit, page=page)
    return ok(hotels, pagination=Pagination.build(page, limit, total))


@router.get("/{hotel_id}", summary="Obtenir un hôtel")
def get_hotel(hotel_id: str, hotel_manager: HotelManagerDep) -> dict:
    return ok(hotel_manager.get_hotel(hotel_id))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Créer un hôtel")
def create_hotel(
    req: CreateHotelRequest,
    hotel_manager: HotelManagerDep,
    _admin: Identity = Depends(require_roles(ROLE_ADMIN)),
) -> dict:
    hotel = hotel_manager.create_hotel(
        name=req.name,
        location=req.location,
        description=req.description,
        picture_list=req.picture_list,
    )
    return ok(hotel, message="Hôtel créé avec succès")


@router.put("/{hotel_id}", summary="Modifier un hôtel")
def update_hotel(
    hotel_id: str,
    req: UpdateHotelRequest,
    hotel_manager: HotelManagerDep,
    _admin: Identity = Depends(require_roles(ROLE_ADMIN)),
) -> dict:
    hotel = hotel_manager.update_hotel(
        hotel_id,
        name=req.name,
        location=req.location,
        description=req.description,
        picture_list=req.picture_list,
        keep_existing_images=req.keep_existing_images,
    )
    return ok(hotel, message="Hôtel mis à jour avec succès")


@router.delete("/{hotel_id}", summary="Supprimer un hôtel")
def delete_hotel(
    hotel_id: str,
    hotel_manager: HotelManagerDep,
    _admin: Identity = Depends(require_roles(ROLE_ADMIN)),
) -> dict:
    hotel_manager.delete_hotel(hotel_id)
    return ok(message="Hôtel supprimé avec succès")


@router.get("/{hotel_id}/occupancy", summary="Statistiques d'occupation")
def get_occupancy(
    hotel_id: str,
    hotel_manager: HotelManagerDep,
    start_date: date = Query(alias="startDate"),
    end_date: date = Query(alias="endDate"),
    _staff: Identity = Depends(require_roles(ROLE_EMPLOYEE, ROLE_ADMIN)),
) -> dict:
    """Occupancy rate of a hotel between two dates (employee, admin)."""
    return ok(hotel_manager.occupancy(hotel_id, start_date, end_date))
