from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.core.config import settings
from app.db import database
from app.db.database import get_db
from app.schemas.health import HealthCheckResponse
from app.services.object_storage_service import ObjectStorageService, get_object_storage

router = APIRouter()


@router.get("/health")
async def health_check(
    db: Session = Depends(get_db),
    storage: ObjectStorageService = Depends(get_object_storage),
) -> HealthCheckResponse:
    """
    Health check endpoint that verifies:
    - Database connectivity
    - Object storage container availability

    Returns 200 if all services are healthy, 503 if any service is down.
    """
    database_health = database.health_check(db)
    object_storage_health = await run_in_threadpool(storage.health_check)

    overall_healthy = all([database_health.healthy, object_storage_health.healthy])

    response = HealthCheckResponse(
        service="places-api",
        version=settings.VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        healthy=overall_healthy,
        database=database_health,
        object_storage=object_storage_health,
    )

    if overall_healthy:
        return response
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=response.model_dump()
    )
