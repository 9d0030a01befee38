from app.services.notifications import ToastCenter
from app.services.notifications.toast_center import toast_center


def get_toast_center() -> ToastCenter:
    """
    Dependency that provides the application's toast center.

    Usage:
        @app.get("/")
        async def endpoint(center: ToastCenter = Depends(get_toast_center)):
            ...
    """
    return toast_center
