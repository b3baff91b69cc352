from typing import Any, Dict, List, Optional, Set

from logging_config import get_logger

logger = get_logger(__name__)


class ConnectionHub:
    """Room-scoped multicast over live connections.

    FastAPI WebSockets have no notion of rooms, so the hub keeps its own index
    of room id -> {participant id -> connection}. A connection is any object
    with a ``participant_id`` attribute and a non-blocking ``send(event, data)``.

    The hub also tracks every live participant id, rooms or not, so new ids
    can be allocated without colliding.
    """

    def __init__(self):
        # Format: {room_id: {participant_id: connection}}
        self._rooms: Dict[str, Dict[str, Any]] = {}
        self._live: Set[str] = set()

    def register(self, participant_id: str):
        self._live.add(participant_id)

    def unregister(self, participant_id: str):
        self._live.discard(participant_id)

    def __contains__(self, participant_id: str) -> bool:
        return participant_id in self._live

    def add(self, room_id: str, connection):
        if room_id not in self._rooms:
            self._rooms[room_id] = {}
        self._rooms[room_id][connection.participant_id] = connection
        logger.debug(f"Added connection {connection.participant_id} to room {room_id} (local connections: {len(self._rooms[room_id])})")

    def discard(self, room_id: str, participant_id: str):
        connections = self._rooms.get(room_id)
        if not connections:
            return
        connections.pop(participant_id, None)
        if not connections:
            del self._rooms[room_id]
            logger.debug(f"No more connections in room {room_id}")

    def connections(self, room_id: str) -> List[Any]:
        return list(self._rooms.get(room_id, {}).values())

    def emit(self, room_id: str, event: str, data: Any, exclude: Optional[str] = None) -> int:
        """Send ``event`` to every connection in ``room_id`` except ``exclude``.

        Returns the number of connections the event was queued for.
        """
        targets = [conn for conn in self.connections(room_id) if conn.participant_id != exclude]
        for conn in targets:
            conn.send(event, data)
        logger.debug(f"Emitted {event} to {len(targets)} connections in room {room_id}")
        return len(targets)
