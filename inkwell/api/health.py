"""GET /health: database connectivity and cover storage availability."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from inkwell.api.deps import get_cover_storage
from inkwell.core.config import settings
from inkwell.core.database import check_db_connected, get_db
from inkwell.schemas.health import HealthResponse
from inkwell.services.storage import CoverStorage

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    storage: Annotated[CoverStorage, Depends(get_cover_storage)],
) -> HealthResponse:
    database = "connected" if check_db_connected(db) else "disconnected"
    uploads = "writable" if storage.is_writable() else "unavailable"
    healthy = database == "connected" and uploads == "writable"
    return HealthResponse(
        status="ok" if healthy else "degraded",
        environment=settings.APP_ENV,
        database=database,
        uploads=uploads,
    )
