from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class TransportFailure:
    """
    A failed request as reported by the HTTP transport.

    Any subset of the fields may be missing: a network error has no status,
    an empty response has no payload.
    """
    payload: Any = None  # decoded response body
    status: Optional[int] = None
    status_text: Optional[str] = None
    message: Optional[str] = None  # transport-level description
