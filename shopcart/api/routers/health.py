# shopcart/api/routers/health.py
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request

from shopcart.utils.settings import APP_NAME, APP_VERSION

router = APIRouter(tags=["Service"])


@router.get("/")
def root():
    return {
        "message": APP_NAME,
        "version": APP_VERSION,
        "description": "REST API for managing a shopping cart",
        "documentation": "/api-docs",
        "endpoints": {"cart": "/api/cart"},
    }


@router.get("/health")
def health(request: Request):
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
    }
