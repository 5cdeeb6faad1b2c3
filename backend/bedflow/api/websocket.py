"""
WebSocket endpoints.
"""
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState
import logging

router = APIRouter()
logger = logging.getLogger("bedflow.websocket")


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """
    WebSocket endpoint for real-time updates.

    The server pushes {"type": <topic>, "data": <payload>} after every
    committed mutation. The client may send:
    - {"action": "ping"} to keep the connection alive
    """
    manager = websocket.app.state.connection_manager
    await manager.connect(websocket)

    try:
        while True:
            if websocket.client_state != WebSocketState.CONNECTED:
                break

            try:
                data = await websocket.receive_json()

                if isinstance(data, dict) and data.get("action") == "ping":
                    await websocket.send_json({"type": "pong"})

            except WebSocketDisconnect:
                break
            except RuntimeError as e:
                # e.g. "Cannot call receive once a disconnect message has been received"
                if "disconnect" not in str(e).lower():
                    logger.warning(f"WebSocket runtime error: {e}")
                break
            except ValueError as e:
                logger.warning(f"Invalid WebSocket message: {e}")
                if websocket.client_state != WebSocketState.CONNECTED:
                    break

    finally:
        manager.disconnect(websocket)
