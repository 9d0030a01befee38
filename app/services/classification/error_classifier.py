"""Classification of failed API calls into a displayable error report."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import structlog

from .transport import TransportFailure

logger = structlog.get_logger()

DEFAULT_VALIDATION_TITLE = "Validation Error"
DEFAULT_ERROR_TITLE = "Error"
DEFAULT_FALLBACK_TEXT = "An error occurred"
UNKNOWN_STATUS = "unknown"
BULLET = "•"


class FailureKind(str, Enum):
    VALIDATION = "validation"  # problem detail with field errors
    MESSAGE = "message"  # problem detail or wrapped message without field errors
    OPAQUE = "opaque"  # nothing recognizable, transport metadata only


@dataclass
class FieldViolation:
    """One entry of a problem-detail ``errors`` list."""
    field: Optional[str]
    message: str
    rejected_value: Any = None


@dataclass
class ErrorReport:
    """Result of error classification."""
    summary: str
    field_errors: Dict[str, str] = field(default_factory=dict)
    kind: FailureKind = FailureKind.OPAQUE
    status: Optional[int] = None
    violations: List[FieldViolation] = field(default_factory=list)


@dataclass
class _FailureInput:
    payload: Any
    status: Optional[int]
    status_text: Optional[str]
    transport_message: Optional[str]


def _get(obj: Any, key: str) -> Any:
    """Read ``key`` from a mapping or an attribute object; anything unreadable is absent."""
    if obj is None or isinstance(obj, (str, bytes, int, float, bool)):
        return None
    try:
        if isinstance(obj, Mapping):
            return obj.get(key)
        return getattr(obj, key, None)
    except Exception as e:
        logger.debug("failure_field_unreadable", field=key, error=str(e))
        return None


def _text(value: Any) -> Optional[str]:
    """Return a non-blank string or None."""
    if isinstance(value, str) and value.strip():
        return value
    return None


def _sequence(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _status(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _violations(entries: List[Any]) -> List[FieldViolation]:
    violations = []
    for entry in entries:
        message = _text(_get(entry, "message"))
        field_name = _text(_get(entry, "field"))
        if message is None and field_name is None:
            continue
        violations.append(FieldViolation(
            field=field_name,
            message=message or "",
            rejected_value=_get(entry, "rejectedValue"),
        ))
    return violations


def _problem_detail(failure: _FailureInput) -> Optional[ErrorReport]:
    payload = failure.payload
    if _text(_get(payload, "type")) is None:
        return None

    title = _text(_get(payload, "title"))
    violations = _violations(_sequence(_get(payload, "errors")))

    if violations:
        lines = [title or DEFAULT_VALIDATION_TITLE]
        field_errors: Dict[str, str] = {}
        for violation in violations:
            if violation.field is None:
                lines.append(f"{BULLET} {violation.message}")
                continue
            lines.append(f"{BULLET} {violation.field}: {violation.message}")
            # Repeated fields: last message wins
            field_errors[violation.field] = violation.message
        return ErrorReport(
            summary="\n".join(lines),
            field_errors=field_errors,
            kind=FailureKind.VALIDATION,
            status=failure.status,
            violations=violations,
        )

    detail = _text(_get(payload, "detail")) or ""
    return ErrorReport(
        summary=f"{title or DEFAULT_ERROR_TITLE}: {detail}",
        kind=FailureKind.MESSAGE,
        status=failure.status,
    )


def _wrapped_message(failure: _FailureInput) -> Optional[ErrorReport]:
    message = _text(_get(failure.payload, "message"))
    if message is None:
        return None
    return ErrorReport(summary=message, kind=FailureKind.MESSAGE, status=failure.status)


def _opaque(failure: _FailureInput) -> ErrorReport:
    status = UNKNOWN_STATUS if failure.status is None else failure.status
    text = failure.status_text or failure.transport_message or DEFAULT_FALLBACK_TEXT
    return ErrorReport(summary=f"HTTP {status}: {text}", kind=FailureKind.OPAQUE, status=failure.status)


# Tried in order; the first recognizer returning a report wins.
RECOGNIZERS: List[Callable[[_FailureInput], Optional[ErrorReport]]] = [
    _problem_detail,
    _wrapped_message,
]


def classify(
    failure: Any,
    http_status: Optional[int] = None,
    http_status_text: Optional[str] = None,
    transport_message: Optional[str] = None,
) -> ErrorReport:
    """
    Turn a failure payload into a summary and a field -> message mapping.

    Recognized payloads, in order of precedence:
    - problem detail: ``{type, title?, detail?, errors?: [{field, message, rejectedValue?}]}``
    - wrapped message: ``{message}``
    Anything else is reported from the HTTP status and status text.

    Never raises; wrong-typed fields are treated as missing.

    Args:
        failure: Decoded response body (mapping or attribute object), or None
        http_status: HTTP status code, None when the request never got a response
        http_status_text: HTTP reason phrase
        transport_message: Description of the failure from the transport layer

    Returns:
        ErrorReport
    """
    failure_input = _FailureInput(
        payload=failure,
        status=_status(http_status),
        status_text=_text(http_status_text),
        transport_message=_text(transport_message),
    )

    for recognizer in RECOGNIZERS:
        report = recognizer(failure_input)
        if report is not None:
            break
    else:
        report = _opaque(failure_input)

    logger.info(
        "failure_classified",
        kind=report.kind.value,
        status=report.status,
        fields=sorted(report.field_errors),
    )
    return report


def classify_failure(result: TransportFailure) -> ErrorReport:
    """Classify a failed transport result."""
    return classify(
        result.payload,
        http_status=result.status,
        http_status_text=result.status_text,
        transport_message=result.message,
    )
