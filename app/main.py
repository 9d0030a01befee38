import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.dependencies import get_toast_center
from app.core.config import get_settings
from app.services.notifications.websocket_manager import websocket_manager

settings = get_settings()

app = FastAPI(
    title=settings.project_name,
    openapi_url=f"{settings.api_v1_prefix}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
from app.api.v1 import api_router
app.include_router(api_router, prefix=settings.api_v1_prefix)

_unsubscribe = None


def _toast_center():
    """The center the endpoints resolve through `get_toast_center`, overrides included."""
    return app.dependency_overrides.get(get_toast_center, get_toast_center)()


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "name": settings.project_name,
        "docs": "/docs",
    }


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.on_event("startup")
async def startup_event():
    """Initialize services on startup."""
    global _unsubscribe
    logging.basicConfig(level=getattr(logging, settings.log_level))
    logging.info(f"Starting {settings.project_name}")

    if settings.websocket_enabled:
        _unsubscribe = _toast_center().subscribe(websocket_manager.on_toasts_changed)


@app.on_event("shutdown")
async def shutdown_event():
    """Cancel pending toast timers and stop pushing updates."""
    global _unsubscribe
    if _unsubscribe is not None:
        _unsubscribe()
        _unsubscribe = None
    cleared = _toast_center().clear()
    logging.info(f"Shutdown: cleared {cleared} toasts")
