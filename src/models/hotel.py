from sqlalchemy import Column, JSON, String, Text
from .base import Base


class HotelModel(Base):
    __tablename__ = "hotels"

    hotel_id = Column(String, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)
    location = Column(String, index=True, nullable=False)
    description = Column(Text, nullable=False)
    picture_list = Column(JSON, nullable=False, default=list)
    created_at = Column(String, index=True, nullable=False)
    updated_at = Column(String, nullable=False)
