import os
import sys
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Keep the app from creating tables in the configured database
os.environ["ENVIRONMENT"] = "test"

from app.db.database import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.services.object_storage_service import (  # noqa: E402
    ObjectStorageService,
    get_object_storage,
)

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Test database URL - using SQLite for tests is simpler
SQLALCHEMY_DATABASE_TEST_URL = "sqlite:///:memory:"

test_engine = create_engine(
    SQLALCHEMY_DATABASE_TEST_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=test_engine
)


@pytest.fixture(scope="function")
def db():
    # Create all tables
    Base.metadata.create_all(bind=test_engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(scope="function")
def storage():
    """Object storage stand-in that records uploads and returns bucket URLs."""
    mock_storage = MagicMock(spec=ObjectStorageService)
    mock_storage.default_container = "uploads"
    mock_storage.uploaded = {}

    def upload(container, object_name, data):
        mock_storage.uploaded[object_name] = data.read()
        return f"https://{container}.s3.us-east-1.amazonaws.com/{object_name}"

    mock_storage.upload.side_effect = upload
    return mock_storage


@pytest.fixture(scope="function")
def client(db, storage):
    """Provides a FastAPI test client with test database and object storage."""

    def override_get_db():
        try:
            yield db
        finally:
            pass  # Cleanup handled by db fixture

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_object_storage] = lambda: storage

    with TestClient(app) as c:
        yield c

    # Clean up overrides after test
    app.dependency_overrides.clear()
