from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from routers.pages import pages_router
from routers.rooms import rooms_router
from connection import ConnectionHandler, Outbox
from hub import ConnectionHub
from registry import RoomRegistry
from relay import EventRelay
from constants import LOG_FILE, LOG_LEVEL, STATIC_DIR
from logging_config import get_logger, setup_logging
import asyncio
from typing import Optional

# Setup logging
setup_logging(log_level=LOG_LEVEL, log_file=LOG_FILE)
logger = get_logger(__name__)


def create_app(static_dir: Optional[str] = None) -> FastAPI:
    """Build the application and the single registry/hub/relay it owns.

    All room state lives in memory on ``app.state`` for the process lifetime.
    """
    app = FastAPI()

    # Configure CORS to allow all origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.registry = RoomRegistry()
    app.state.hub = ConnectionHub()
    app.state.relay = EventRelay(app.state.registry, app.state.hub)
    app.state.static_dir = static_dir or STATIC_DIR

    app.include_router(rooms_router)

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket):
        """One participant per connection. Frames are `{"event": ..., "data": ...}` JSON objects."""
        await websocket.accept()
        outbox = Outbox(websocket)
        connection = ConnectionHandler(app.state.relay, app.state.hub, outbox)
        connection_id = connection.participant_id
        sender = asyncio.create_task(outbox.run(connection_id))
        logger.info(f"WebSocket connection accepted: {connection_id}")

        try:
            while True:
                data = await websocket.receive_text()
                connection.dispatch(data)
        except WebSocketDisconnect:
            logger.info(f"WebSocket disconnected normally for connection {connection_id}")
        except Exception as e:
            logger.error(f"Error receiving message from connection {connection_id}: {e}", exc_info=True)
        finally:
            connection.on_disconnect()
            sender.cancel()
            try:
                await sender
            except asyncio.CancelledError:
                pass

    # Catch-all room page route goes last
    app.include_router(pages_router)

    logger.info("FastAPI application initialized")
    return app


app = create_app()
