from typing import List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes as camelCase, accepts camelCase or snake_case input."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class PlacePhotoResponse(CamelModel):
    id: int
    place_id: int
    photo_upload_url: str = ""


class PlaceBase(CamelModel):
    latitude: float = 0.0
    longitude: float = 0.0
    name: str = ""


class PlaceCreate(PlaceBase):
    """Incoming place payload. Client supplied ids and photos are ignored."""


class PlaceResponse(PlaceBase):
    id: int
    photos: List[PlacePhotoResponse] = []
