from .base import Base
from .user import UserModel
from .hotel import HotelModel
from .booking import BookingModel

__all__ = ["Base", "UserModel", "HotelModel", "BookingModel"]
