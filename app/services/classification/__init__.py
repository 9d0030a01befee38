from .error_classifier import (
    ErrorReport,
    FailureKind,
    FieldViolation,
    classify,
    classify_failure,
)
from .transport import TransportFailure

__all__ = [
    "ErrorReport",
    "FailureKind",
    "FieldViolation",
    "classify",
    "classify_failure",
    "TransportFailure",
]
