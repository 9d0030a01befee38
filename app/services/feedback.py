import logging
from typing import Any, Mapping, Optional

from app.services.classification import ErrorReport, TransportFailure, classify, classify_failure
from app.services.forms import FieldErrorState, require_fields
from app.services.notifications import ToastCenter

logger = logging.getLogger(__name__)


class FeedbackReporter:
    """
    Turns request outcomes into user-visible feedback.

    Every reported failure shows exactly one error toast and, when a form is
    attached, replaces that form's field errors.
    """

    def __init__(self, center: ToastCenter, form: Optional[FieldErrorState] = None):
        self.center = center
        self.form = form

    def report_failure(
        self,
        failure: Any,
        status: Optional[int] = None,
        status_text: Optional[str] = None,
    ) -> ErrorReport:
        """
        Classify a failure, show it and update the form.

        Args:
            failure: A TransportFailure, or a bare response payload
            status: HTTP status when passing a bare payload
            status_text: HTTP reason phrase when passing a bare payload

        Returns:
            The ErrorReport that was shown
        """
        if isinstance(failure, TransportFailure):
            report = classify_failure(failure)
        else:
            report = classify(failure, http_status=status, http_status_text=status_text)

        self.center.error(report.summary)
        if self.form is not None:
            self.form.replace(report.field_errors)

        logger.info(f"Failure reported: kind={report.kind.value} status={report.status}")
        return report

    def report_success(self, message: str) -> int:
        if self.form is not None:
            self.form.clear()
        return self.center.success(message)

    def report_missing_fields(self, values: Mapping[str, Any], required: Mapping[str, str]) -> bool:
        """
        Validate required fields before submitting.

        Shows one warning toast listing the missing fields.

        Returns:
            True if the form is complete
        """
        result = require_fields(values, required)
        if self.form is not None:
            self.form.replace(result.field_errors)
        if not result.is_valid:
            self.center.warning(result.summary)
        return result.is_valid
