from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Hotel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    location: str
    description: str
    picture_list: List[str] = Field(default_factory=list, alias="picture_list")
    created_at: str
    updated_at: str


class CreateHotelRequest(BaseModel):
    name: str
    location: str
    description: str
    picture_list: List[str] = Field(default_factory=list)


class UpdateHotelRequest(BaseModel):
    """Hotel patch.

    ``picture_list`` replaces the stored images unless
    ``keepExistingImages`` is set, in which case it is appended to them.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    picture_list: Optional[List[str]] = None
    keep_existing_images: bool = Field(default=False, alias="keepExistingImages")


class OccupancyStats(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_days: int
    occupied_days: int
    occupancy_rate: float
    total_bookings: int
