"""Health check endpoint for process supervision."""
from typing import Any, Dict

from fastapi import APIRouter, Request

router = APIRouter()


@router.api_route("/health", methods=["GET", "HEAD"])
async def health_check(request: Request) -> Dict[str, Any]:
    """Basic health check endpoint (supports GET & HEAD)."""
    settings = request.app.state.settings
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "version": settings.VERSION,
    }
