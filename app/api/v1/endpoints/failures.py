from fastapi import APIRouter, Depends

from app.api.dependencies import get_toast_center
from app.schemas.failures import (
    ErrorReportResponse,
    FailureReportRequest,
    FailureShownResponse,
    FieldViolationResponse,
)
from app.services.classification import ErrorReport, TransportFailure, classify_failure
from app.services.notifications import ToastCenter

router = APIRouter()


def _to_transport_failure(request: FailureReportRequest) -> TransportFailure:
    return TransportFailure(
        payload=request.payload,
        status=request.status,
        status_text=request.status_text,
        message=request.message,
    )


def _to_response(report: ErrorReport) -> ErrorReportResponse:
    return ErrorReportResponse(
        summary=report.summary,
        field_errors=report.field_errors,
        kind=report.kind,
        status=report.status,
        violations=[
            FieldViolationResponse(
                field=v.field,
                message=v.message,
                rejected_value=v.rejected_value,
            )
            for v in report.violations
        ],
    )


@router.post("", response_model=FailureShownResponse)
async def report_failure(request: FailureReportRequest, center: ToastCenter = Depends(get_toast_center)):
    """Classify a failed request and show it as an error toast."""
    report = classify_failure(_to_transport_failure(request))
    toast_id = center.error(report.summary)
    return FailureShownResponse(toast_id=toast_id, report=_to_response(report))


@router.post("/classify", response_model=ErrorReportResponse)
async def classify_only(request: FailureReportRequest):
    """Classify a failed request without showing anything."""
    return _to_response(classify_failure(_to_transport_failure(request)))
