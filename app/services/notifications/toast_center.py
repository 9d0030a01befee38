import asyncio
import itertools
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Dict, List, Optional, Protocol

from app.core.config import get_settings

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    """Presentational category of a toast."""
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Toast:
    """A transient message shown to the user."""
    id: int
    message: str
    severity: Severity
    duration_ms: int
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def sticky(self) -> bool:
        return self.duration_ms <= 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "message": self.message,
            "severity": self.severity.value,
            "duration_ms": self.duration_ms,
            "created_at": self.created_at.isoformat(),
        }


class IdAllocator:
    """Monotonic id source owned by a single center. Ids start at 1 and are never reused."""

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)

    def next(self) -> int:
        return next(self._counter)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class TimerScheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], object]) -> TimerHandle: ...


class LoopScheduler:
    """
    Schedules callbacks on an asyncio event loop.

    Without an explicit loop the currently running loop is used, so
    ``call_later`` raises RuntimeError when called outside of one.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], object]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


Listener = Callable[[List[Toast]], None]


def _coerce_severity(value) -> Severity:
    try:
        return Severity(value)
    except ValueError:
        logger.warning(f"Unknown toast severity {value!r}, using info")
        return Severity.INFO


class ToastCenter:
    """
    Queue of active toasts with one expiry timer per toast.

    Handles:
    - Creating toasts and scheduling their automatic removal
    - Explicit dismissal (idempotent, shares the timer's removal path)
    - Exposing the active toasts in creation order
    - Notifying listeners after every change

    None of the public operations raise.
    """

    def __init__(
        self,
        scheduler: Optional[TimerScheduler] = None,
        default_duration_ms: Optional[int] = None,
        error_duration_ms: Optional[int] = None,
    ):
        settings = get_settings()
        self._scheduler = scheduler or LoopScheduler()
        self._ids = IdAllocator()
        # dicts keep insertion order, which is the display order
        self._toasts: Dict[int, Toast] = {}
        self._timers: Dict[int, TimerHandle] = {}
        self._listeners: List[Listener] = []
        self._durations = {s: settings.default_duration_for(s.value) for s in Severity}
        if default_duration_ms is not None:
            for severity in (Severity.SUCCESS, Severity.WARNING, Severity.INFO):
                self._durations[severity] = default_duration_ms
        if error_duration_ms is not None:
            self._durations[Severity.ERROR] = error_duration_ms

    def default_duration(self, severity: Severity) -> int:
        return self._durations[_coerce_severity(severity)]

    def show(
        self,
        message: str,
        severity: Severity = Severity.INFO,
        duration_ms: Optional[int] = None,
    ) -> int:
        """
        Enqueue a toast and return its id.

        Args:
            message: Display text, may span several lines
            severity: Presentational category
            duration_ms: Lifetime in milliseconds; None uses the severity
                default, 0 (or less) keeps the toast until it is removed

        Returns:
            The new toast id
        """
        severity = _coerce_severity(severity)
        if duration_ms is None:
            duration_ms = self._durations[severity]

        toast = Toast(
            id=self._ids.next(),
            message=message,
            severity=severity,
            duration_ms=duration_ms,
        )

        if duration_ms > 0:
            # The toast only becomes active once its timer exists.
            try:
                self._timers[toast.id] = self._scheduler.call_later(
                    duration_ms / 1000,
                    lambda toast_id=toast.id: self.remove(toast_id),
                )
            except (RuntimeError, OverflowError, ValueError) as e:
                # No loop to fire the timer (e.g. during teardown) or an unusable delay.
                logger.warning(f"Could not schedule expiry for toast {toast.id}: {e}")
                return toast.id

        self._toasts[toast.id] = toast

        logger.debug(f"Toast shown: id={toast.id} severity={severity.value} duration={duration_ms}ms")
        self._publish()
        return toast.id

    def remove(self, toast_id: int) -> bool:
        """
        Remove a toast and cancel its pending timer.

        Safe to call for ids that already expired or were dismissed.

        Returns:
            True if a toast was removed
        """
        timer = self._timers.pop(toast_id, None)
        if timer is not None:
            timer.cancel()

        if self._toasts.pop(toast_id, None) is None:
            return False

        logger.debug(f"Toast removed: id={toast_id}")
        self._publish()
        return True

    def clear(self) -> int:
        """Remove every toast and cancel every timer."""
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()

        count = len(self._toasts)
        self._toasts.clear()
        if count:
            self._publish()
        return count

    def success(self, message: str, duration_ms: Optional[int] = None) -> int:
        return self.show(message, Severity.SUCCESS, duration_ms)

    def error(self, message: str, duration_ms: Optional[int] = None) -> int:
        return self.show(message, Severity.ERROR, duration_ms)

    def warning(self, message: str, duration_ms: Optional[int] = None) -> int:
        return self.show(message, Severity.WARNING, duration_ms)

    def info(self, message: str, duration_ms: Optional[int] = None) -> int:
        return self.show(message, Severity.INFO, duration_ms)

    def active(self) -> List[Toast]:
        """Snapshot of active toasts in creation order."""
        return list(self._toasts.values())

    def get(self, toast_id: int) -> Optional[Toast]:
        return self._toasts.get(toast_id)

    def has_timer(self, toast_id: int) -> bool:
        return toast_id in self._timers

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with the active toasts after every change.

        Returns:
            A callable that unregisters the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def __len__(self) -> int:
        return len(self._toasts)

    def __contains__(self, toast_id: object) -> bool:
        return toast_id in self._toasts

    def _publish(self) -> None:
        snapshot = self.active()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.warning(f"Toast listener failed: {e}")


# Global instance
toast_center = ToastCenter()
