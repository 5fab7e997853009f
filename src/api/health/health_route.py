from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("", summary="API Health Check")
async def get_health(request: Request):
    """Basic health check endpoint."""
    chat_service = getattr(request.app.state, "chat_service", None)

    return {
        "message": "Weather Chat API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": "1.0.0",
        "transcript_busy": chat_service.is_busy if chat_service else None,
    }
