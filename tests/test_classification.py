"""Tests for failure classification."""

from types import SimpleNamespace

import pytest
from pydantic import BaseModel

from app.services.classification import (
    FailureKind,
    TransportFailure,
    classify,
    classify_failure,
)


class TestProblemDetail:
    """Tests for problem-detail payloads."""

    def test_validation_errors(self):
        payload = {
            "type": "about:blank",
            "title": "Validation Error",
            "errors": [
                {"field": "name", "message": "Name is required"},
                {"field": "date", "message": "Date is required"},
            ],
        }

        report = classify(payload, 400, "Bad Request")

        assert report.summary == "Validation Error\n• name: Name is required\n• date: Date is required"
        assert report.field_errors == {"name": "Name is required", "date": "Date is required"}
        assert report.kind == FailureKind.VALIDATION
        assert report.status == 400

    def test_title_and_detail_without_errors(self):
        payload = {"type": "about:blank", "title": "Conflict", "detail": "Venue full"}

        report = classify(payload)

        assert report.summary == "Conflict: Venue full"
        assert report.field_errors == {}
        assert report.kind == FailureKind.MESSAGE

    def test_wins_over_generic_message(self):
        payload = {
            "type": "about:blank",
            "title": "Conflict",
            "detail": "Venue full",
            "message": "Something else",
        }

        assert classify(payload, 409, "Conflict").summary == "Conflict: Venue full"

    def test_default_titles(self):
        with_errors = {"type": "x", "errors": [{"field": "name", "message": "bad"}]}
        without_errors = {"type": "x", "detail": "boom"}
        bare = {"type": "x"}

        assert classify(with_errors).summary == "Validation Error\n• name: bad"
        assert classify(without_errors).summary == "Error: boom"
        assert classify(bare).summary == "Error: "

    def test_empty_errors_list_uses_detail(self):
        payload = {"type": "x", "title": "Bad Request", "detail": "Nope", "errors": []}

        report = classify(payload)

        assert report.summary == "Bad Request: Nope"
        assert report.field_errors == {}

    def test_errors_not_a_list(self):
        payload = {"type": "x", "title": "Bad Request", "detail": "Nope", "errors": "name"}

        assert classify(payload).summary == "Bad Request: Nope"

    def test_repeated_field_last_wins(self):
        payload = {
            "type": "x",
            "errors": [
                {"field": "name", "message": "too short"},
                {"field": "name", "message": "must be unique"},
            ],
        }

        report = classify(payload)

        assert report.field_errors == {"name": "must be unique"}
        assert report.summary == "Validation Error\n• name: too short\n• name: must be unique"

    def test_rejected_value_is_kept(self):
        payload = {
            "type": "x",
            "errors": [{"field": "capacity", "message": "must be positive", "rejectedValue": -3}],
        }

        violation = classify(payload).violations[0]

        assert violation.field == "capacity"
        assert violation.rejected_value == -3

    def test_entry_without_field(self):
        payload = {
            "type": "x",
            "errors": [
                {"message": "Date must be in the future"},
                {"field": "name", "message": "Name is required"},
            ],
        }

        report = classify(payload)

        assert report.summary == "Validation Error\n• Date must be in the future\n• name: Name is required"
        assert report.field_errors == {"name": "Name is required"}

    def test_malformed_entries_are_skipped(self):
        payload = {
            "type": "x",
            "title": "Bad Request",
            "detail": "Nope",
            "errors": [None, 42, "oops", {"field": 7, "message": None}],
        }

        report = classify(payload)

        assert report.summary == "Bad Request: Nope"
        assert report.kind == FailureKind.MESSAGE

    def test_non_string_type_is_not_problem_detail(self):
        payload = {"type": 1, "message": "Event not found"}

        assert classify(payload).summary == "Event not found"

    def test_non_string_title(self):
        payload = {"type": "x", "title": ["Conflict"], "detail": "Venue full"}

        assert classify(payload).summary == "Error: Venue full"


class TestWrappedMessage:
    """Tests for flat message payloads."""

    def test_message(self):
        report = classify({"message": "Event not found"}, 404, "Not Found")

        assert report.summary == "Event not found"
        assert report.field_errors == {}
        assert report.kind == FailureKind.MESSAGE

    def test_api_response_wrapper(self):
        payload = {"success": False, "message": "Venue is closed", "data": None}

        assert classify(payload).summary == "Venue is closed"

    @pytest.mark.parametrize("message", ["", "   ", None, 12, ["a"]])
    def test_unusable_message_falls_back(self, message):
        report = classify({"message": message}, 500, "Internal Server Error")

        assert report.summary == "HTTP 500: Internal Server Error"
        assert report.kind == FailureKind.OPAQUE


class TestFallback:
    """Tests for payloads with no recognizable shape."""

    def test_status_and_text(self):
        report = classify({}, 500, "Internal Server Error")

        assert report.summary == "HTTP 500: Internal Server Error"
        assert report.field_errors == {}
        assert report.kind == FailureKind.OPAQUE
        assert report.status == 500

    def test_nothing_known(self):
        assert classify(None).summary == "HTTP unknown: An error occurred"

    def test_transport_message(self):
        report = classify(None, transport_message="Http failure response: 0 Unknown Error")

        assert report.summary == "HTTP unknown: Http failure response: 0 Unknown Error"

    def test_status_text_preferred_over_transport_message(self):
        report = classify(None, 502, "Bad Gateway", "upstream closed")

        assert report.summary == "HTTP 502: Bad Gateway"

    def test_status_zero_is_shown(self):
        assert classify(None, 0, "Unknown Error").summary == "HTTP 0: Unknown Error"

    def test_blank_status_text_ignored(self):
        assert classify({}, 503, "").summary == "HTTP 503: An error occurred"

    def test_non_numeric_status(self):
        report = classify({}, "500", None)

        assert report.summary == "HTTP unknown: An error occurred"
        assert report.status is None

    @pytest.mark.parametrize("payload", [
        "<html>Bad Gateway</html>",
        b"raw bytes",
        ["type", "message"],
        42,
        3.5,
        True,
        object(),
    ])
    def test_non_mapping_payloads(self, payload):
        report = classify(payload, 502, "Bad Gateway")

        assert report.summary == "HTTP 502: Bad Gateway"
        assert report.field_errors == {}


class TestPayloadObjects:
    """Tests for payloads given as objects rather than dicts."""

    def test_attribute_object(self):
        payload = SimpleNamespace(type="about:blank", title="Conflict", detail="Venue full")

        assert classify(payload).summary == "Conflict: Venue full"

    def test_pydantic_model(self):
        class ApiResponse(BaseModel):
            success: bool = False
            message: str

        assert classify(ApiResponse(message="Event not found")).summary == "Event not found"

    def test_nested_attribute_entries(self):
        payload = SimpleNamespace(
            type="x",
            title=None,
            errors=[SimpleNamespace(field="name", message="Name is required")],
        )

        assert classify(payload).field_errors == {"name": "Name is required"}

    def test_raising_accessor_counts_as_missing(self):
        class Exploding:
            @property
            def type(self):
                raise ValueError("boom")

            @property
            def message(self):
                raise KeyError("message")

        report = classify(Exploding(), 500, "Internal Server Error")

        assert report.summary == "HTTP 500: Internal Server Error"


class TestClassifyFailure:
    """Tests for classifying transport results."""

    def test_network_error(self):
        failure = TransportFailure(message="Connection refused")

        report = classify_failure(failure)

        assert report.summary == "HTTP unknown: Connection refused"
        assert report.status is None

    def test_response_body(self):
        failure = TransportFailure(
            payload={"type": "about:blank", "title": "Conflict", "detail": "Venue full"},
            status=409,
            status_text="Conflict",
            message="Http failure response",
        )

        report = classify_failure(failure)

        assert report.summary == "Conflict: Venue full"
        assert report.status == 409

    def test_deterministic(self):
        failure = TransportFailure(
            payload={"type": "x", "errors": [{"field": "name", "message": "bad"}]},
            status=400,
        )

        assert classify_failure(failure) == classify_failure(failure)
