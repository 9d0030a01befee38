"""Failure classification schemas."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel

from app.services.classification import FailureKind


class FailureReportRequest(BaseModel):
    """A failed request as observed by the client transport."""
    payload: Optional[Any] = None
    status: Optional[int] = None
    status_text: Optional[str] = None
    message: Optional[str] = None


class FieldViolationResponse(BaseModel):
    field: Optional[str]
    message: str
    rejected_value: Optional[Any] = None


class ErrorReportResponse(BaseModel):
    """Normalized failure."""
    summary: str
    field_errors: Dict[str, str]
    kind: FailureKind
    status: Optional[int] = None
    violations: List[FieldViolationResponse] = []


class FailureShownResponse(BaseModel):
    """Normalized failure and the toast it was shown in."""
    toast_id: int
    report: ErrorReportResponse
