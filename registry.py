from typing import Dict, List

from logging_config import get_logger
from schemas.rooms import Participant

logger = get_logger(__name__)


class RoomRegistry:
    """In-memory map of room id -> {participant id -> Participant}.

    A room entry exists only while it has members: removing the last member
    removes the room. Lookups of unknown rooms return empty results.
    """

    def __init__(self):
        self._rooms: Dict[str, Dict[str, Participant]] = {}
        logger.info("Initializing in-memory RoomRegistry")

    def ensure(self, room_id: str) -> Dict[str, Participant]:
        members = self._rooms.get(room_id)
        if members is None:
            members = self._rooms[room_id] = {}
            logger.info(f"Created room {room_id}")
        return members

    def upsert_member(self, room_id: str, participant_id: str, name: str):
        members = self.ensure(room_id)
        participant = members.get(participant_id)
        if participant is None:
            members[participant_id] = Participant(id=participant_id, name=name)
            logger.debug(f"Added {participant_id} ({name}) to room {room_id} ({len(members)} members)")
        else:
            participant.name = name
            logger.debug(f"Updated {participant_id} in room {room_id}: name={name}")

    def remove_member(self, room_id: str, participant_id: str):
        members = self._rooms.get(room_id)
        if members is None:
            logger.debug(f"Remove {participant_id}: room {room_id} not found")
            return
        members.pop(participant_id, None)
        if not members:
            del self._rooms[room_id]
            logger.info(f"Room {room_id} is empty, removed it")
        else:
            logger.debug(f"Removed {participant_id} from room {room_id} ({len(members)} members left)")

    def list_members(self, room_id: str) -> List[Participant]:
        members = self._rooms.get(room_id)
        if not members:
            return []
        return [participant.model_copy() for participant in members.values()]

    def has_room(self, room_id: str) -> bool:
        return room_id in self._rooms

    def room_ids(self) -> List[str]:
        return list(self._rooms)

    def __len__(self) -> int:
        return len(self._rooms)
