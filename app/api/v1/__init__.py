from fastapi import APIRouter

from app.core.config import get_settings

from .endpoints import failures, health, toasts, websocket

api_router = APIRouter()

api_router.include_router(toasts.router, prefix="/toasts", tags=["toasts"])
api_router.include_router(failures.router, prefix="/failures", tags=["failures"])
api_router.include_router(health.router, prefix="/health", tags=["health"])
if get_settings().websocket_enabled:
    api_router.include_router(websocket.router, prefix="/ws", tags=["websocket"])
