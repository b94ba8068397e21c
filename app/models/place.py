from sqlalchemy import Column, Float, Integer, String
from sqlalchemy.orm import relationship

from app.db.database import Base


class Place(Base):
    __tablename__ = "places"
    # ids are never reused, even after the highest row is removed
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    name = Column(String, nullable=False, default="")

    # place_id is a logical reference only, there is no FK constraint
    photos = relationship(
        "PlacePhoto",
        primaryjoin="Place.id == foreign(PlacePhoto.place_id)",
        order_by="PlacePhoto.id",
    )

    def __init__(self, latitude, longitude, name=""):
        self.latitude = latitude
        self.longitude = longitude
        self.name = name


class PlacePhoto(Base):
    __tablename__ = "place_photos"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    place_id = Column(Integer, nullable=False, index=True)
    photo_upload_url = Column(String, nullable=False, default="")

    def __init__(self, place_id, photo_upload_url=""):
        self.place_id = place_id
        self.photo_upload_url = photo_upload_url
