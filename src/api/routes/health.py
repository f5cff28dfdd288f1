"""Health check endpoint."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from adapter.mongodb.connection import ping

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health(request: Request):
    """Health check endpoint with MongoDB status."""
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "services": {}
    }

    client = getattr(request.app.state, "mongo_client", None)
    if ping(client):
        health_status["services"]["mongodb"] = {
            "status": "healthy",
            "message": "Connection successful"
        }
        status_code = status.HTTP_200_OK
    else:
        health_status["services"]["mongodb"] = {
            "status": "unhealthy",
            "message": "Connection failed or not configured"
        }
        health_status["status"] = "degraded"
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(content=health_status, status_code=status_code)
