from .toast_center import IdAllocator, LoopScheduler, Severity, Toast, ToastCenter
from .websocket_manager import WebSocketManager

__all__ = [
    "IdAllocator",
    "LoopScheduler",
    "Severity",
    "Toast",
    "ToastCenter",
    "WebSocketManager",
]
