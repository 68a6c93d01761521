"""
Health check endpoints for the store service
"""
from fastapi import APIRouter, status
from datetime import datetime, timezone
from typing import Any, Dict

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_check() -> Dict[str, Any]:
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
