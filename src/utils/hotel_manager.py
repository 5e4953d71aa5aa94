"""Hotel catalog management."""

import logging
import uuid
from datetime import date, datetime
from typing import List, Optional, Tuple

import pytz
from sqlalchemy.orm import Session

from config import HOTEL_SORT_FIELDS, MAX_PAGE_SIZE, SORT_ORDERS
from core.exceptions import HotelNotFoundError, ValidationError
from models.booking import BookingModel
from models.hotel import HotelModel
from schemas.hotel import Hotel, OccupancyStats
from utils.converters import model_to_hotel
from utils.validators import hotel_errors, pagination_errors, raise_if_errors, sort_errors

logger = logging.getLogger(__name__)

_SORT_COLUMNS = {
    "name": HotelModel.name,
    "location": HotelModel.location,
    "createdAt": HotelModel.created_at,
}


class HotelManager:
    """Manages hotel persistence using SQLAlchemy."""

    def __init__(self, db: Session):
        self.db = db

    def _get_model(self, hotel_id: str) -> HotelModel:
        model = self.db.query(HotelModel).filter(HotelModel.hotel_id == hotel_id).first()
        if model is None:
            raise HotelNotFoundError(hotel_id)
        return model

    def list_hotels(
        self,
        sort: str = "createdAt",
        order: str = "desc",
        limit: int = 10,
        page: int = 1,
    ) -> Tuple[List[Hotel], int]:
        """List hotels, sorted and paginated.

        Args:
            sort: One of ``name``, ``location``, ``createdAt``.
            order: ``asc`` or ``desc``.
            limit: Page size.
            page: 1-based page number.

        Returns:
            Tuple of the hotels on the page and the total hotel count.

        Raises:
            ValidationError: If a parameter is out of range.
        """
        raise_if_errors(
            sort_errors(sort, order, HOTEL_SORT_FIELDS, SORT_ORDERS)
            + pagination_errors(page, limit, MAX_PAGE_SIZE)
        )
        column = _SORT_COLUMNS[sort]
        # Secondary key keeps pages stable when the sort column has ties
        order_by = (
            [column.desc(), HotelModel.hotel_id.desc()]
            if order == "desc"
            else [column.asc(), HotelModel.hotel_id.asc()]
        )
        query = self.db.query(HotelModel)
        total = query.count()
        models = (
            query.order_by(*order_by)
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return [model_to_hotel(m) for m in models], total

    def get_hotel(self, hotel_id: str) -> Hotel:
        """Get a hotel by id.

        Raises:
            HotelNotFoundError: If the hotel does not exist.
        """
        return model_to_hotel(self._get_model(hotel_id))

    def create_hotel(
        self,
        name: str,
        location: str,
        description: str,
        picture_list: Optional[List[str]] = None,
    ) -> Hotel:
        """Create a hotel; text fields are trimmed."""
        picture_list = list(picture_list or [])
        raise_if_errors(
            hotel_errors(
                name=name,
                location=location,
                description=description,
                picture_list=picture_list,
            )
        )
        now = datetime.now(pytz.utc).isoformat()
        model = HotelModel(
            hotel_id=str(uuid.uuid4()),
            name=name.strip(),
            location=location.strip(),
            description=description.strip(),
            picture_list=picture_list,
            created_at=now,
            updated_at=now,
        )
        self.db.add(model)
        self.db.commit()
        self.db.refresh(model)
        logger.info("Created hotel: %s (%s)", model.name, model.hotel_id)
        return model_to_hotel(model)

    def update_hotel(
        self,
        hotel_id: str,
        name: Optional[str] = None,
        location: Optional[str] = None,
        description: Optional[str] = None,
        picture_list: Optional[List[str]] = None,
        keep_existing_images: bool = False,
    ) -> Hotel:
        """Update the supplied fields of a hotel.

        Args:
            hotel_id: Hotel to update.
            name: New name, or None to keep it.
            location: New location, or None to keep it.
            description: New description, or None to keep it.
            picture_list: New images, or None to keep the current ones.
            keep_existing_images: Append ``picture_list`` to the stored images
                instead of replacing them.

        Raises:
            HotelNotFoundError: If the hotel does not exist.
            ValidationError: If a supplied field is empty.
        """
        raise_if_errors(
            hotel_errors(
                name=name,
                location=location,
                description=description,
                picture_list=picture_list,
                partial=True,
            )
        )
        model = self._get_model(hotel_id)
        if name is not None:
            model.name = name.strip()
        if location is not None:
            model.location = location.strip()
        if description is not None:
            model.description = description.strip()
        if picture_list is not None:
            if keep_existing_images:
                model.picture_list = list(model.picture_list or []) + list(picture_list)
            else:
                model.picture_list = list(picture_list)
        model.updated_at = datetime.now(pytz.utc).isoformat()
        self.db.commit()
        self.db.refresh(model)
        logger.info("Updated hotel: %s", hotel_id)
        return model_to_hotel(model)

    def delete_hotel(self, hotel_id: str) -> None:
        """Delete a hotel. Existing bookings keep their hotel id.

        Raises:
            HotelNotFoundError: If the hotel does not exist.
        """
        model = self._get_model(hotel_id)
        self.db.delete(model)
        self.db.commit()
        logger.info("Deleted hotel: %s", hotel_id)

    def occupancy(self, hotel_id: str, start_date: date, end_date: date) -> OccupancyStats:
        """Occupancy of a hotel over ``[start_date, end_date]``.

        Only bookings lying entirely inside the window are counted,
        cancelled ones included.

        Raises:
            HotelNotFoundError: If the hotel does not exist.
            ValidationError: If ``start_date`` is not before ``end_date``.
        """
        if start_date >= end_date:
            raise ValidationError.single(
                "endDate", "La date de fin doit être après la date de début"
            )
        self._get_model(hotel_id)

        bookings = (
            self.db.query(BookingModel)
            .filter(
                BookingModel.hotel_id == hotel_id,
                BookingModel.check_in >= start_date,
                BookingModel.check_out <= end_date,
            )
            .all()
        )
        total_days = (end_date - start_date).days
        occupied_days = sum((b.check_out - b.check_in).days for b in bookings)
        rate = occupied_days / total_days * 100
        return OccupancyStats(
            total_days=total_days,
            occupied_days=occupied_days,
            occupancy_rate=round(rate, 2),
            total_bookings=len(bookings),
        )
