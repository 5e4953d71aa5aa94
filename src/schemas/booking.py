"""Booking schema definitions."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from config import DEFAULT_BOOKING_STATUS


class BookingUserSummary(BaseModel):
    id: str
    email: str
    pseudo: str


class BookingHotelSummary(BaseModel):
    id: str
    name: str
    location: str


class Booking(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    user_id: str
    hotel_id: str
    # Null when the referenced record has been deleted
    user: Optional[BookingUserSummary] = None
    hotel: Optional[BookingHotelSummary] = None
    check_in: date
    check_out: date
    number_of_guests: int
    total_price: float
    status: str = DEFAULT_BOOKING_STATUS
    special_requests: Optional[str] = None
    created_at: str
    updated_at: str


class CreateBookingRequest(BaseModel):
    """Booking creation payload.

    Dates accept ISO dates or datetimes. Any ``user`` key sent by the
    client is ignored: the owner is always the caller.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    hotel: str
    check_in: datetime
    check_out: datetime
    number_of_guests: int
    total_price: float
    special_requests: Optional[str] = None


class UpdateBookingRequest(BaseModel):
    """Booking patch; owner and hotel cannot be changed."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    number_of_guests: Optional[int] = None
    total_price: Optional[float] = None
    status: Optional[str] = None
    special_requests: Optional[str] = None
