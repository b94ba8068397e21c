from unittest.mock import patch
from urllib.parse import urlparse

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.core.errors import ObjectStorageError, PersistenceError
from app.models.place import Place, PlacePhoto


def create_test_place(db: Session, name: str = "Test place") -> Place:
    """Helper function to create a test place"""
    place = Place(latitude=47.6, longitude=-122.3, name=name)
    db.add(place)
    db.commit()
    db.refresh(place)
    return place


def test_upload_photo(db: Session, client: TestClient, storage):
    """Test uploading a photo for an existing place"""
    place = create_test_place(db)

    response = client.post(
        f"/places/{place.id}/photos",
        files={"file": ("front.jpg", b"jpeg-bytes", "image/jpeg")},
    )

    assert response.status_code == 201
    assert response.headers["location"] == f"/places/{place.id}"
    data = response.json()
    assert data["id"] == place.id
    assert len(data["photos"]) == 1

    photo = data["photos"][0]
    assert photo["placeId"] == place.id
    url = urlparse(photo["photoUploadUrl"])
    assert url.scheme == "https"
    assert url.netloc
    assert url.path == "/front.jpg"

    assert storage.uploaded == {"front.jpg": b"jpeg-bytes"}
    storage.upload.assert_called_once()
    assert storage.upload.call_args.args[0] == "uploads"


def test_upload_photo_adds_one_photo(db: Session, client: TestClient):
    """Test that each upload adds exactly one photo"""
    place = create_test_place(db)

    client.post(f"/places/{place.id}/photos", files={"file": ("a.jpg", b"a", "image/jpeg")})
    response = client.post(
        f"/places/{place.id}/photos", files={"file": ("b.jpg", b"b", "image/jpeg")}
    )

    assert response.status_code == 201
    photos = response.json()["photos"]
    assert len(photos) == 2
    assert photos[0]["id"] < photos[1]["id"]


def test_upload_photo_unknown_place(db: Session, client: TestClient, storage):
    """Test that uploading for a missing place stores the photo and returns null"""
    response = client.post(
        "/places/4242/photos",
        files={"file": ("ghost.jpg", b"boo", "image/jpeg")},
    )

    assert response.status_code == 201
    assert response.json() is None
    assert response.headers["location"] == "/places/4242"
    storage.upload.assert_called_once()
    assert db.query(PlacePhoto).filter(PlacePhoto.place_id == 4242).count() == 1


def test_upload_photo_not_multipart(db: Session, client: TestClient, storage):
    """Test that a non-multipart request is rejected"""
    place = create_test_place(db)

    response = client.post(f"/places/{place.id}/photos", json={"file": "front.jpg"})

    assert response.status_code == 400
    storage.upload.assert_not_called()


def test_upload_photo_missing_file_field(db: Session, client: TestClient, storage):
    """Test that a multipart request without a 'file' field is rejected"""
    place = create_test_place(db)

    response = client.post(
        f"/places/{place.id}/photos",
        files={"image": ("front.jpg", b"jpeg-bytes", "image/jpeg")},
    )

    assert response.status_code == 400
    storage.upload.assert_not_called()


def test_upload_photo_file_field_not_a_file(db: Session, client: TestClient, storage):
    """Test that a plain text 'file' field is rejected"""
    place = create_test_place(db)

    response = client.post(
        f"/places/{place.id}/photos",
        data={"file": "front.jpg"},
        files={"other": ("other.txt", b"x", "text/plain")},
    )

    assert response.status_code == 400
    storage.upload.assert_not_called()


def test_upload_photo_storage_failure(db: Session, client: TestClient, storage):
    """Test that an object storage failure returns 500 and records nothing"""
    place = create_test_place(db)
    storage.upload.side_effect = ObjectStorageError("bucket missing")

    response = client.post(
        f"/places/{place.id}/photos",
        files={"file": ("front.jpg", b"jpeg-bytes", "image/jpeg")},
    )

    assert response.status_code == 500
    assert db.query(PlacePhoto).count() == 0


def test_upload_photo_database_failure_after_upload(db: Session, client: TestClient, storage):
    """Test that a failed photo write still leaves the uploaded object behind"""
    place = create_test_place(db)

    with patch(
        "app.services.place_service.place_service.add_photo",
        side_effect=PersistenceError("Failed to add photo"),
    ):
        response = client.post(
            f"/places/{place.id}/photos",
            files={"file": ("front.jpg", b"jpeg-bytes", "image/jpeg")},
        )

    assert response.status_code == 500
    assert response.json()["detail"] == "A storage error occurred"
    assert "front.jpg" in storage.uploaded


def test_upload_photo_mixed_case_content_type(db: Session, client: TestClient, storage):
    """Test that the multipart media type is matched case-insensitively"""
    place = create_test_place(db)
    body = (
        b"--BOUND\r\n"
        b'Content-Disposition: form-data; name="file"; filename="mixed.jpg"\r\n'
        b"Content-Type: image/jpeg\r\n"
        b"\r\n"
        b"jpeg-bytes\r\n"
        b"--BOUND--\r\n"
    )

    response = client.post(
        f"/places/{place.id}/photos",
        content=body,
        headers={"Content-Type": "Multipart/Form-Data; boundary=BOUND"},
    )

    assert response.status_code == 201
    assert len(response.json()["photos"]) == 1
    assert storage.uploaded == {"mixed.jpg": b"jpeg-bytes"}


def test_upload_photo_uses_first_file_part(db: Session, client: TestClient, storage):
    """Test that only the first 'file' part is uploaded when several are sent"""
    place = create_test_place(db)

    response = client.post(
        f"/places/{place.id}/photos",
        files=[
            ("file", ("first.jpg", b"first", "image/jpeg")),
            ("file", ("second.jpg", b"second", "image/jpeg")),
        ],
    )

    assert response.status_code == 201
    assert len(response.json()["photos"]) == 1
    assert storage.uploaded == {"first.jpg": b"first"}


def test_upload_photo_place_id_out_of_range(db: Session, client: TestClient, storage):
    """Test that an id too large for the database is rejected before uploading"""
    response = client.post(
        "/places/99999999999999999999/photos",
        files={"file": ("front.jpg", b"jpeg-bytes", "image/jpeg")},
    )

    assert response.status_code == 422
    storage.upload.assert_not_called()
    assert db.query(PlacePhoto).count() == 0
