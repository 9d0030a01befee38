"""Pydantic schemas for API requests and responses."""

from .toasts import (
    ToastResponse,
    ToastListResponse,
    ToastCreateRequest,
    ToastCreateResponse,
    ToastDismissResponse,
)
from .failures import (
    FailureReportRequest,
    FieldViolationResponse,
    ErrorReportResponse,
    FailureShownResponse,
)

__all__ = [
    "ToastResponse",
    "ToastListResponse",
    "ToastCreateRequest",
    "ToastCreateResponse",
    "ToastDismissResponse",
    "FailureReportRequest",
    "FieldViolationResponse",
    "ErrorReportResponse",
    "FailureShownResponse",
]
