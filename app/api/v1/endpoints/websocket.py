from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from app.api.dependencies import get_toast_center
from app.services.notifications import ToastCenter
from app.services.notifications.websocket_manager import websocket_manager

router = APIRouter()


@router.websocket("/toasts")
async def websocket_toasts(websocket: WebSocket, center: ToastCenter = Depends(get_toast_center)):
    """
    WebSocket endpoint rendering the toast queue.

    Connect with: ws://host/api/v1/ws/toasts

    Messages sent to client (on connect and after every change):
    {
        "type": "toasts",
        "items": [{"id": 1, "message": "...", "severity": "info", ...}]
    }

    Messages accepted from client:
    - "ping": answered with "pong"
    - "dismiss:<id>": removes the toast
    """
    await websocket_manager.connect(websocket, center.active())

    try:
        while True:
            data = await websocket.receive_text()

            if data == "ping":
                await websocket.send_text("pong")
            elif data.startswith("dismiss:"):
                toast_id = data.split(":", 1)[1]
                if toast_id.isdigit():
                    center.remove(int(toast_id))

    except WebSocketDisconnect:
        await websocket_manager.disconnect(websocket)
    except Exception:
        await websocket_manager.disconnect(websocket)


@router.get("/stats", response_model=dict)
async def websocket_stats(center: ToastCenter = Depends(get_toast_center)):
    """Get WebSocket connection statistics."""
    return {
        "active_connections": websocket_manager.connection_count,
        "active_toasts": len(center),
    }
