"""
Places API Endpoint

CRUD and search over places, plus photo uploads to object storage.
"""

import logging
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request, Response, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from app.db.database import get_db
from app.schemas.geo import BoundingBox, Coordinate, CoordinateParseError
from app.schemas.place import PlaceCreate, PlaceResponse
from app.services.object_storage_service import ObjectStorageService, get_object_storage
from app.services.place_service import MAX_ID, MIN_ID, place_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[PlaceResponse], operation_id="GetAllPlaces")
@router.get("/", response_model=List[PlaceResponse], include_in_schema=False)
async def list_places(db: Session = Depends(get_db)):
    """
    Get all places.
    """
    return place_service.list_places(db)


@router.post(
    "/",
    response_model=PlaceResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="CreatePlace",
)
@router.post(
    "", response_model=PlaceResponse, status_code=status.HTTP_201_CREATED, include_in_schema=False
)
async def create_place(
    place_in: PlaceCreate,
    response: Response,
    db: Session = Depends(get_db),
):
    """
    Create a new place. Any id or photos in the payload are ignored.
    """
    place = place_service.create_place(db, place_in)
    response.headers["Location"] = f"/places/{place.id}"
    return place


@router.get(
    "/search/location/{coordinate}",
    response_model=List[PlaceResponse],
    operation_id="SearchPlacesByLocation",
)
async def search_places_by_location(
    coordinate: str,
    to: Optional[str] = Query(
        None, description="Opposite corner of the bounding box as '<lat>,<lon>'"
    ),
    db: Session = Depends(get_db),
):
    """
    Search for places inside a bounding box.

    The path coordinate is one corner, `to` the opposite one. Without `to`
    only places at exactly that coordinate match.
    """
    try:
        corner = Coordinate.parse(coordinate)
        opposite = Coordinate.parse(to) if to is not None else None
    except CoordinateParseError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    box = BoundingBox.from_corners(corner, opposite)
    logger.info("Location search: %s", box)
    return place_service.search_places_by_bounds(db, box)


@router.get("/search/{query}", response_model=List[PlaceResponse], operation_id="SearchPlaces")
async def search_places(query: str, db: Session = Depends(get_db)):
    """
    Search for places whose name contains the query.

    Returns an empty list (not 404) when nothing matches.
    """
    return place_service.search_places_by_name(db, query)


@router.get("/{place_id}", response_model=PlaceResponse, operation_id="GetPlace")
async def get_place(place_id: int, db: Session = Depends(get_db)):
    """
    Get a place with its photos.
    """
    place = place_service.get_place(db, place_id)
    if not place:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Place not found",
        )
    return place


@router.post(
    "/{place_id}/photos",
    response_model=Optional[PlaceResponse],
    status_code=status.HTTP_201_CREATED,
    operation_id="UploadPlacePhoto",
)
async def upload_place_photo(
    place_id: Annotated[int, Path(ge=MIN_ID, le=MAX_ID)],
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    storage: ObjectStorageService = Depends(get_object_storage),
):
    """
    Upload a photo for a place from the multipart form field `file`.

    The file goes to object storage first, then the photo is recorded. The
    place itself is not checked: uploading for an unknown place stores and
    records the photo and returns a null body.
    """
    # Media types are case-insensitive
    content_type = request.headers.get("content-type", "").lower()
    if not content_type.startswith("multipart/form-data"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Expected a multipart/form-data request",
        )

    form = await request.form()
    # The first part wins when "file" is sent more than once
    files = form.getlist("file")
    file = files[0] if files else None
    if not isinstance(file, UploadFile) or not file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing file field 'file'",
        )

    try:
        url = await run_in_threadpool(
            storage.upload, storage.default_container, file.filename, file.file
        )
    finally:
        await file.close()

    # The uploaded object is not removed if this write fails
    place_service.add_photo(db, place_id, url)

    response.headers["Location"] = f"/places/{place_id}"
    return place_service.get_place(db, place_id)
