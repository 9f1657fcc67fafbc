from typing import Any, Dict

from fastapi import APIRouter

from ..config import resolve_ankr_api_key, settings
from ..providers.ankr import AnkrProvider

router = APIRouter()


@router.get("/healthz")
async def health_check() -> Dict[str, Any]:
    """Health check endpoint that verifies provider status"""

    ankr = AnkrProvider(resolve_ankr_api_key())

    provider_status = {
        "ankr": await ankr.health_check(),
    }

    healthy = all(status["status"] == "healthy" for status in provider_status.values())

    return {
        "status": "healthy" if healthy else "degraded",
        "providers": provider_status,
        "llm_configured": settings.has_llm_key,
    }
