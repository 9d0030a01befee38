from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.api.dependencies import get_toast_center
from app.core.config import get_settings
from app.services.notifications import ToastCenter

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    websocket: str
    active_toasts: int


@router.get("", response_model=HealthResponse)
async def health_check(center: ToastCenter = Depends(get_toast_center)):
    """Report service status."""
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        websocket="enabled" if settings.websocket_enabled else "disabled",
        active_toasts=len(center),
    )


@router.get("/live", response_model=dict)
def liveness_check():
    """Kubernetes liveness probe."""
    return {"status": "alive"}
