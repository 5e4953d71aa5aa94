"""Conversions between ORM models and API schemas."""

from models.booking import BookingModel
from models.hotel import HotelModel
from models.user import UserModel
from schemas.booking import Booking, BookingHotelSummary, BookingUserSummary
from schemas.hotel import Hotel
from schemas.user import User


def user_to_model(user: User) -> UserModel:
    return UserModel(
        user_id=user.user_id,
        email=user.email,
        pseudo=user.pseudo,
        password_hash=user.password_hash,
        role=user.role,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def model_to_user(model: UserModel) -> User:
    return User(
        user_id=model.user_id,
        email=model.email,
        pseudo=model.pseudo,
        password_hash=model.password_hash,
        role=model.role,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def model_to_hotel(model: HotelModel) -> Hotel:
    return Hotel(
        id=model.hotel_id,
        name=model.name,
        location=model.location,
        description=model.description,
        picture_list=list(model.picture_list or []),
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def model_to_booking(model: BookingModel) -> Booking:
    user = None
    if model.user is not None:
        user = BookingUserSummary(
            id=model.user.user_id, email=model.user.email, pseudo=model.user.pseudo
        )
    hotel = None
    if model.hotel is not None:
        hotel = BookingHotelSummary(
            id=model.hotel.hotel_id, name=model.hotel.name, location=model.hotel.location
        )
    return Booking(
        id=model.booking_id,
        user_id=model.user_id,
        hotel_id=model.hotel_id,
        user=user,
        hotel=hotel,
        check_in=model.check_in,
        check_out=model.check_out,
        number_of_guests=model.number_of_guests,
        total_price=model.total_price,
        status=model.status,
        special_requests=model.special_requests,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )
