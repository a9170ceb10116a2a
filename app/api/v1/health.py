"""Health check endpoint with optional database connectivity check."""

import time
from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse

router = APIRouter()

# Process start, measured on the monotonic clock.
STARTED_AT = time.monotonic()


def uptime_seconds() -> float:
    return round(time.monotonic() - STARTED_AT, 3)


@router.get("/", response_model=HealthResponse)
def get_health(db: Session = Depends(get_db)) -> HealthResponse:
    """
    Return service health status, uptime and database connectivity.
    Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"

    return HealthResponse(
        environment=settings.APP_ENV,
        timestamp=datetime.now(UTC),
        uptime=uptime_seconds(),
        database=db_status,
    )
