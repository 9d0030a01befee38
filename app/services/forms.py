"""Per-form validation state and client-side required-field checks."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional

logger = logging.getLogger(__name__)

MISSING_FIELDS_HEADER = "Please fill in the following required fields:"


class FieldErrorState:
    """
    Field -> message mapping displayed next to form inputs.

    Every update replaces the whole mapping so a field that no longer fails
    never keeps a message from an earlier submission.
    """

    def __init__(self):
        self._errors: Dict[str, str] = {}

    def replace(self, field_errors: Mapping[str, str]) -> None:
        self._errors = dict(field_errors)

    def clear(self) -> None:
        self._errors = {}

    def get(self, field_name: str) -> Optional[str]:
        return self._errors.get(field_name)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._errors)

    def __contains__(self, field_name: object) -> bool:
        return field_name in self._errors

    def __iter__(self) -> Iterator[str]:
        return iter(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __bool__(self) -> bool:
        return bool(self._errors)


@dataclass
class RequiredFieldsResult:
    """Result of a required-field check."""
    is_valid: bool
    field_errors: Dict[str, str] = field(default_factory=dict)
    missing_labels: List[str] = field(default_factory=list)

    @property
    def summary(self) -> str:
        if self.is_valid:
            return ""
        return "\n".join([MISSING_FIELDS_HEADER] + [f"• {label}" for label in self.missing_labels])


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def require_fields(values: Mapping[str, Any], required: Mapping[str, str]) -> RequiredFieldsResult:
    """
    Check that every required field has a non-blank value.

    Args:
        values: Submitted form values by field name
        required: Label for each required field name, in display order

    Returns:
        RequiredFieldsResult with a "<Label> is required" message per missing field
    """
    field_errors: Dict[str, str] = {}
    missing: List[str] = []

    for field_name, label in required.items():
        if _is_blank(values.get(field_name)):
            field_errors[field_name] = f"{label} is required"
            missing.append(label)

    if missing:
        logger.info(f"Form incomplete: {missing}")

    return RequiredFieldsResult(
        is_valid=not missing,
        field_errors=field_errors,
        missing_labels=missing,
    )
