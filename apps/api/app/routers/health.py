from fastapi import APIRouter

from app.settings import settings

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/health/ready")
async def readiness_check() -> dict[str, str]:
    """Readiness check - the generative service credential must be configured."""
    if not settings.openai_api_key:
        return {"status": "not_ready", "reason": "Missing OPENAI_API_KEY"}
    return {"status": "ready"}
