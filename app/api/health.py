"""
app/api/health.py

Purpose: Health and configuration checks

- GET /config: shows which settings are configured (secrets as booleans)
- GET /live: liveness probe
"""

from fastapi import APIRouter, Depends

from app.api.deps import get_settings
from app.core.config import Settings

router = APIRouter()


@router.get("/config")
async def config_check(config: Settings = Depends(get_settings)):
    """
    Basic health check - shows whether the environment was configured correctly.
    """
    return config.public_view()


@router.get("/live")
async def liveness_check():
    """
    Liveness probe - indicates if app is alive.
    """
    return {"status": "alive"}
