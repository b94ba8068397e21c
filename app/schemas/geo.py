"""
Coordinate Type Definitions

Pydantic models for geographic coordinates and the bounding boxes built
from them for location search.
"""

from typing import Optional

from pydantic import BaseModel


class CoordinateParseError(ValueError):
    """Raised when a "lat,lon" string cannot be parsed."""


class Coordinate(BaseModel):
    """
    Geographic coordinate (latitude and longitude).

    No range validation is applied; any pair of floats is accepted.
    """

    latitude: float
    longitude: float

    @classmethod
    def parse(cls, value: str) -> "Coordinate":
        """
        Parse a "lat,lon" string.

        Only the first comma separates the two parts, so "1,2,3" yields the
        parts "1" and "2,3" and fails on the second one.

        Raises:
            CoordinateParseError: If there are not exactly two parts or either
                part is not a float.
        """
        parts = value.split(",", 1)
        if len(parts) != 2:
            raise CoordinateParseError(f"Expected '<lat>,<lon>', got '{value}'")

        try:
            latitude = float(parts[0])
            longitude = float(parts[1])
        except ValueError as e:
            raise CoordinateParseError(f"Invalid coordinate '{value}'") from e

        return cls(latitude=latitude, longitude=longitude)

    def __str__(self) -> str:
        return f"({self.latitude}, {self.longitude})"


class BoundingBox(BaseModel):
    """Inclusive latitude/longitude bounds."""

    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float

    @classmethod
    def from_corners(cls, corner: Coordinate, opposite: Optional[Coordinate] = None) -> "BoundingBox":
        """
        Build a box from two opposite corners given in any order.

        Without an opposite corner the box collapses to the single point.
        """
        if opposite is None:
            opposite = corner

        return cls(
            min_latitude=min(corner.latitude, opposite.latitude),
            max_latitude=max(corner.latitude, opposite.latitude),
            min_longitude=min(corner.longitude, opposite.longitude),
            max_longitude=max(corner.longitude, opposite.longitude),
        )
