"""
Service information routes.

``/health`` reports liveness and uptime; ``/info`` describes the API
and lists its entry points.  Both are mounted at the application root,
outside the ``/api`` prefix, and are not rate limited.
"""

import time
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Request


router = APIRouter()


@router.get("/health")
async def health(request: Request) -> Dict[str, Any]:
    """Liveness probe with the process uptime in seconds."""
    settings = request.app.state.settings
    return {
        "success": True,
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
        "environment": settings.environment,
    }


@router.get("/info")
async def info(request: Request) -> Dict[str, Any]:
    settings = request.app.state.settings
    return {
        "success": True,
        "data": {
            "name": settings.project_name,
            "version": settings.api_version,
            "description": settings.description,
            "endpoints": {
                "users": "/api/users",
                "posts": "/api/posts",
                "health": "/health",
                "info": "/info",
            },
        },
    }
