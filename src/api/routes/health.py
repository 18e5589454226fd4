"""Liveness and dependency health."""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from adapter.mongodb.connection import get_mongodb_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


def _check_mongodb() -> dict:
    client = get_mongodb_client()
    if client is None:
        return {"status": "unhealthy", "message": "Connection failed or not configured"}
    try:
        client.admin.command('ping')
    except PyMongoError as e:
        return {"status": "unhealthy", "message": f"Connection error: {str(e)[:200]}"}
    return {"status": "healthy", "message": "Connection successful"}


@router.get("")
async def health():
    """Report 200 when every backing service answers, 503 otherwise."""
    services = {"mongodb": _check_mongodb()}
    healthy = all(s["status"] == "healthy" for s in services.values())
    if not healthy:
        logger.warning("Health check degraded", extra={"services": services})

    return JSONResponse(
        content={
            "status": "healthy" if healthy else "degraded",
            "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            "services": services,
        },
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
    )
