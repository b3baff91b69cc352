import os

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse, RedirectResponse

from constants import ROOM_ID_LENGTH
from identity import allocate
from logging_config import get_logger
from schemas.rooms import HealthResponse

logger = get_logger(__name__)

pages_router = APIRouter(tags=["pages"])


@pages_router.get("/health", response_model=HealthResponse)
async def health(request: Request):
    return HealthResponse(status="ok", rooms=len(request.app.state.registry))


@pages_router.get("/")
async def new_room():
    room_id = allocate(ROOM_ID_LENGTH)
    logger.info(f"Redirecting to new room {room_id}")
    return RedirectResponse(url=f"/{room_id}")


@pages_router.get("/{room_id}")
async def room_page(room_id: str, request: Request):
    """Serve the client for any room id. Static assets in the same directory win."""
    static_dir = request.app.state.static_dir
    asset = os.path.join(static_dir, room_id)
    if os.path.isfile(asset):
        return FileResponse(asset)

    index = os.path.join(static_dir, "index.html")
    if not os.path.isfile(index):
        logger.error(f"Client document missing: {index}")
        raise HTTPException(status_code=404, detail="Client not found")
    return FileResponse(index)
