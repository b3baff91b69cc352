from fastapi import APIRouter, HTTPException, Request
from schemas.rooms import RoomDetailsResponse, RoomSummary
from logging_config import get_logger

logger = get_logger(__name__)

rooms_router = APIRouter(prefix="/rooms", tags=["rooms"])


@rooms_router.get("/", response_model=list[RoomSummary])
async def list_rooms(request: Request):
    registry = request.app.state.registry
    rooms = [
        RoomSummary(room_id=room_id, online_users_count=len(registry.list_members(room_id)))
        for room_id in registry.room_ids()
    ]
    logger.debug(f"Listing {len(rooms)} live rooms")
    return rooms


@rooms_router.get("/{room_id}", response_model=RoomDetailsResponse)
async def get_room_details(room_id: str, request: Request):
    """
    Get the live members of a room.

    Returns:
    - room_id: Room identifier
    - online_users_count: Current number of members
    - online_users: Members in join order
    """
    client_host = request.client.host if request.client else 'unknown'
    logger.info(f"Room details request for {room_id} from {client_host}")

    registry = request.app.state.registry
    if not registry.has_room(room_id):
        logger.warning(f"Room details failed: Room {room_id} not found")
        raise HTTPException(status_code=404, detail="Room not found")

    members = registry.list_members(room_id)
    return RoomDetailsResponse(
        room_id=room_id,
        online_users_count=len(members),
        online_users=members,
    )
