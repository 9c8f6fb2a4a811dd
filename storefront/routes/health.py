"""Service info and health routes"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter(tags=["Service"])

ENDPOINTS = {
    "health": "/health",
    "products": "/api/products",
    "cart": "/api/cart",
}


@router.get("/")
async def home(request: Request):
    """Service description and endpoint map"""
    settings = request.app.state.settings
    return {
        "message": f"Welcome to the {settings.app_name}!",
        "version": settings.app_version,
        "database": settings.database_label,
        "docs": "/docs",
        "endpoints": ENDPOINTS,
    }


@router.get("/health")
async def health_check(request: Request):
    """Health check endpoint"""
    settings = request.app.state.settings
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
        "environment": settings.environment,
        "database": settings.database_label,
    }
