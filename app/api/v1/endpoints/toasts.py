from fastapi import APIRouter, Depends

from app.api.dependencies import get_toast_center
from app.schemas.toasts import (
    ToastCreateRequest,
    ToastCreateResponse,
    ToastDismissResponse,
    ToastListResponse,
    ToastResponse,
)
from app.services.notifications import Toast, ToastCenter

router = APIRouter()


def _to_response(toast: Toast) -> ToastResponse:
    return ToastResponse(
        id=toast.id,
        message=toast.message,
        severity=toast.severity,
        duration_ms=toast.duration_ms,
        created_at=toast.created_at.isoformat(),
    )


# Handlers are async so expiry timers are scheduled on the server's event loop.
@router.get("", response_model=ToastListResponse)
async def list_toasts(center: ToastCenter = Depends(get_toast_center)):
    """List active toasts in the order they were shown."""
    items = [_to_response(t) for t in center.active()]
    return ToastListResponse(items=items, total=len(items))


@router.post("", response_model=ToastCreateResponse)
async def show_toast(request: ToastCreateRequest, center: ToastCenter = Depends(get_toast_center)):
    """Show a toast."""
    toast_id = center.show(request.message, request.severity, request.duration_ms)
    return ToastCreateResponse(id=toast_id)


@router.delete("/{toast_id}", response_model=ToastDismissResponse)
async def dismiss_toast(toast_id: int, center: ToastCenter = Depends(get_toast_center)):
    """
    Dismiss a toast.

    Dismissing a toast that already expired or was dismissed is not an error.
    """
    removed = center.remove(toast_id)
    return ToastDismissResponse(id=toast_id, removed=removed)
