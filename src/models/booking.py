"""Booking database model."""

from sqlalchemy import Column, Date, Float, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from .base import Base


class BookingModel(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        Index("ix_bookings_user_hotel", "user_id", "hotel_id"),
        Index("ix_bookings_dates", "check_in", "check_out"),
    )

    booking_id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.user_id"), nullable=False)
    hotel_id = Column(String, ForeignKey("hotels.hotel_id"), nullable=False)
    # Calendar days, already normalized to the configured timezone
    check_in = Column(Date, nullable=False)
    check_out = Column(Date, nullable=False)
    number_of_guests = Column(Integer, nullable=False)
    total_price = Column(Float, nullable=False)
    status = Column(String, index=True, nullable=False, default="pending")
    special_requests = Column(String, nullable=True)
    created_at = Column(String, index=True, nullable=False)
    updated_at = Column(String, nullable=False)

    # No cascade: deleting a user or hotel leaves its bookings in the ledger
    user = relationship("UserModel")
    hotel = relationship("HotelModel")
