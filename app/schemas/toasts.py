"""Toast-related schemas."""

from typing import List, Optional
from pydantic import BaseModel, Field

from app.services.notifications import Severity

# Longest lifetime accepted over HTTP: one day.
MAX_TOAST_DURATION_MS = 24 * 60 * 60 * 1000


class ToastResponse(BaseModel):
    """Toast response schema."""
    id: int
    message: str
    severity: Severity
    duration_ms: int
    created_at: str


class ToastListResponse(BaseModel):
    """Active toasts in display order."""
    items: List[ToastResponse]
    total: int


class ToastCreateRequest(BaseModel):
    """Request to show a toast."""
    message: str = Field(..., min_length=1)
    severity: Severity = Severity.INFO
    duration_ms: Optional[int] = Field(None, ge=0, le=MAX_TOAST_DURATION_MS)  # None: severity default, 0: sticky


class ToastCreateResponse(BaseModel):
    id: int


class ToastDismissResponse(BaseModel):
    id: int
    removed: bool
