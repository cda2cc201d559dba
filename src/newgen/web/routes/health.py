"""Liveness and health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from newgen import __version__
from newgen.db.database import ping
from newgen.web.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/test", response_class=PlainTextResponse)
async def liveness() -> str:
    """Plain-text liveness string."""
    return "Server is working!"


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Check API and database health."""
    return HealthResponse(
        status="ok",
        version=__version__,
        timestamp=datetime.now(timezone.utc).isoformat(),
        database="ok" if ping() else "error",
    )
