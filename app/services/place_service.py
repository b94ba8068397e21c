"""
Place service for handling place and photo persistence.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.core.errors import PersistenceError
from app.models.place import Place, PlacePhoto
from app.schemas.geo import BoundingBox
from app.schemas.place import PlaceCreate

logger = logging.getLogger(__name__)

# Generated ids fit a signed 64-bit integer column
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1


@contextmanager
def _persistence_errors(db: Session, action: str) -> Iterator[None]:
    """Roll back and re-raise database failures as PersistenceError."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error("Database error while trying to %s: %s", action, str(e))
        db.rollback()
        raise PersistenceError(f"Failed to {action}") from e


class PlaceService:
    """Service for handling place operations."""

    @staticmethod
    def list_places(db: Session) -> List[Place]:
        """
        Get all places.

        Args:
            db: Database session

        Returns:
            List of Place objects, in store order
        """
        with _persistence_errors(db, "list places"):
            return db.query(Place).options(selectinload(Place.photos)).all()

    @staticmethod
    def create_place(db: Session, place_in: PlaceCreate) -> Place:
        """
        Create a new place.

        Coordinates and name are stored as given, without range checks.

        Args:
            db: Database session
            place_in: Place creation data

        Returns:
            Created Place object with its generated id
        """
        with _persistence_errors(db, "create place"):
            place = Place(
                latitude=place_in.latitude,
                longitude=place_in.longitude,
                name=place_in.name,
            )
            db.add(place)
            db.commit()
            db.refresh(place)

        logger.info("Created place id=%s name=%r", place.id, place.name)
        return place

    @staticmethod
    def get_place(db: Session, place_id: int) -> Optional[Place]:
        """
        Get a place by ID, with its photos.

        Args:
            db: Database session
            place_id: Place ID to search for

        Returns:
            Place object if found, None otherwise
        """
        if not MIN_ID <= place_id <= MAX_ID:
            return None

        with _persistence_errors(db, "get place"):
            return (
                db.query(Place)
                .options(selectinload(Place.photos))
                .filter(Place.id == place_id)
                .first()
            )

    @staticmethod
    def search_places_by_name(db: Session, query: str) -> List[Place]:
        """
        Get all places whose name contains the query as a substring.

        LIKE wildcards in the query are matched literally. Case sensitivity
        follows the database: SQLite ignores ASCII case, PostgreSQL does not.

        Args:
            db: Database session
            query: Substring to look for

        Returns:
            List of matching Place objects, empty if nothing matches
        """
        with _persistence_errors(db, "search places by name"):
            return (
                db.query(Place)
                .options(selectinload(Place.photos))
                .filter(Place.name.contains(query, autoescape=True))
                .all()
            )

    @staticmethod
    def search_places_by_bounds(db: Session, box: BoundingBox) -> List[Place]:
        """
        Get all places inside a bounding box, edges included.

        Args:
            db: Database session
            box: Latitude/longitude bounds

        Returns:
            List of matching Place objects, empty if nothing matches
        """
        with _persistence_errors(db, "search places by bounds"):
            return (
                db.query(Place)
                .options(selectinload(Place.photos))
                .filter(
                    Place.latitude >= box.min_latitude,
                    Place.latitude <= box.max_latitude,
                    Place.longitude >= box.min_longitude,
                    Place.longitude <= box.max_longitude,
                )
                .all()
            )

    @staticmethod
    def add_photo(db: Session, place_id: int, photo_upload_url: str) -> PlacePhoto:
        """
        Record an uploaded photo for a place.

        The place is not required to exist.

        Args:
            db: Database session
            place_id: Place the photo belongs to
            photo_upload_url: Absolute URL of the stored object

        Returns:
            Created PlacePhoto object with its generated id
        """
        with _persistence_errors(db, "add photo"):
            photo = PlacePhoto(place_id=place_id, photo_upload_url=photo_upload_url)
            db.add(photo)
            db.commit()
            db.refresh(photo)

        logger.info("Added photo id=%s to place id=%s", photo.id, place_id)
        return photo


# Create a singleton instance
place_service = PlaceService()
