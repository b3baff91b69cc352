from typing import Optional, Union

import events
from constants import DEFAULT_NAME, INVALID_ROOM_IDS
from hub import ConnectionHub
from logging_config import get_logger
from registry import RoomRegistry
from schemas.rooms import NoteOffEvent, NoteOnEvent, UserLeftEvent

logger = get_logger(__name__)


def display_name(name: Optional[str]) -> str:
    return name or DEFAULT_NAME


class EventRelay:
    """Applies participant actions to the registry and fans out the results.

    The relay holds no state of its own. Each method takes the acting
    connection (``participant_id``, ``room_id``, ``send``) and runs to
    completion without awaiting, so a registry change and the broadcasts it
    causes are never interleaved with another action.

    Presence (``yourId``/``userList``) goes to everyone in the room, actor
    included. Notes go to everyone except the actor, who already hears its
    own playing locally.
    """

    def __init__(self, registry: RoomRegistry, hub: ConnectionHub):
        self.registry = registry
        self.hub = hub

    def broadcast_user_list(self, room_id: str):
        users = [participant.model_dump() for participant in self.registry.list_members(room_id)]
        self.hub.emit(room_id, events.USER_LIST, users)

    def join(self, connection, room_id: Optional[str], name: Optional[str]) -> Optional[str]:
        """Put ``connection`` in ``room_id``; returns its participant id, or None if rejected."""
        user_id = connection.participant_id
        if not room_id or room_id in INVALID_ROOM_IDS:
            logger.warning(f"User {user_id} tried to join invalid room: \"{room_id}\"")
            return None

        if connection.room_id and connection.room_id != room_id:
            logger.info(f"User {user_id} switching from room {connection.room_id} to {room_id}")
            self.disconnect(connection)

        user_name = display_name(name)
        self.registry.upsert_member(room_id, user_id, user_name)
        self.hub.add(room_id, connection)

        connection.send(events.YOUR_ID, user_id)
        self.broadcast_user_list(room_id)

        logger.info(f"User {user_id} ({user_name}) joined room \"{room_id}\" ({len(self.registry.list_members(room_id))} users)")
        return user_id

    def rename(self, connection, name: Optional[str]) -> bool:
        user_id = connection.participant_id
        room_id = connection.room_id
        if not room_id:
            logger.warning(f"Ignoring rename from {user_id}: not in a room")
            return False

        user_name = display_name(name)
        self.registry.upsert_member(room_id, user_id, user_name)
        self.broadcast_user_list(room_id)
        logger.info(f"User {user_id} changed name to \"{user_name}\"")
        return True

    def note_on(self, connection, note: str, velocity: Union[int, float]) -> bool:
        if not connection.room_id:
            logger.warning(f"Ignoring noteOn from {connection.participant_id}: not in a room")
            return False
        payload = NoteOnEvent(note=note, velocity=velocity, userId=connection.participant_id)
        self.hub.emit(connection.room_id, events.NOTE_ON, payload.model_dump(), exclude=connection.participant_id)
        return True

    def note_off(self, connection, note: str) -> bool:
        if not connection.room_id:
            logger.warning(f"Ignoring noteOff from {connection.participant_id}: not in a room")
            return False
        payload = NoteOffEvent(note=note, userId=connection.participant_id)
        self.hub.emit(connection.room_id, events.NOTE_OFF, payload.model_dump(), exclude=connection.participant_id)
        return True

    def disconnect(self, connection):
        user_id = connection.participant_id
        room_id = connection.room_id
        if not room_id:
            logger.debug(f"User {user_id} left without joining a room")
            return

        self.registry.remove_member(room_id, user_id)
        self.hub.discard(room_id, user_id)

        # Lets the others release any notes this user was still holding
        self.hub.emit(room_id, events.USER_LEFT, UserLeftEvent(userId=user_id).model_dump())
        if self.registry.has_room(room_id):
            self.broadcast_user_list(room_id)

        logger.info(f"User {user_id} left room {room_id}")
