import asyncio
import json
from typing import Any, Optional

from fastapi import WebSocket
from pydantic import ValidationError

import events
from constants import DEFAULT_NAME, OUTBOX_MAX_FRAMES, USER_ID_LENGTH
from hub import ConnectionHub
from identity import allocate_unique
from logging_config import get_logger
from relay import EventRelay
from schemas.rooms import JoinRequest, NoteOffRequest, NoteOnRequest

logger = get_logger(__name__)


class Outbox:
    """Per-connection send queue drained by a single sender task.

    ``put`` never blocks, so relay actions can queue frames without yielding
    to the event loop. Frames leave in the order they were queued. Delivery
    is best-effort: frames are dropped once the queue is full or a send has
    failed.
    """

    def __init__(self, websocket: WebSocket, maxsize: int = OUTBOX_MAX_FRAMES):
        self.websocket = websocket
        self.queue: asyncio.Queue = asyncio.Queue(maxsize=maxsize)
        self.closed = False

    def put(self, event: str, data: Any):
        if self.closed:
            return
        try:
            self.queue.put_nowait({"event": event, "data": data})
        except asyncio.QueueFull:
            logger.warning(f"Outbox full, dropping {event}")

    async def run(self, connection_id: str):
        while True:
            frame = await self.queue.get()
            try:
                await self.websocket.send_text(json.dumps(frame))
            except Exception as e:
                # The receive loop notices the dead socket and runs disconnect handling
                logger.warning(f"Error sending {frame['event']} to connection {connection_id}: {e}")
                self.closed = True
                return


class ConnectionHandler:
    """Binds one transport connection to a participant for its lifetime.

    The participant id is allocated on construction, before any join. Inbound
    frames are dispatched synchronously into the relay.
    """

    def __init__(self, relay: EventRelay, hub: ConnectionHub, outbox):
        self.relay = relay
        self.hub = hub
        self.outbox = outbox
        self.participant_id = allocate_unique(USER_ID_LENGTH, hub)
        self.room_id: Optional[str] = None
        self.name = DEFAULT_NAME
        self._disconnected = False
        hub.register(self.participant_id)
        logger.debug(f"Connection {self.participant_id} opened")

    def send(self, event: str, data: Any):
        self.outbox.put(event, data)

    def dispatch(self, text: str):
        """Route one raw text frame to its handler. Malformed frames are dropped."""
        try:
            message = json.loads(text)
        except json.JSONDecodeError:
            logger.warning(f"Dropping non-JSON frame from {self.participant_id}")
            return
        if not isinstance(message, dict) or not isinstance(message.get("event"), str):
            logger.warning(f"Dropping frame without event name from {self.participant_id}")
            return

        event = message["event"]
        data = message.get("data")
        handler = {
            events.JOIN: self.on_join,
            events.SET_NAME: self.on_set_name,
            events.NOTE_ON: self.on_note_on,
            events.NOTE_OFF: self.on_note_off,
        }.get(event)
        if handler is None:
            logger.warning(f"Dropping unknown event \"{event}\" from {self.participant_id}")
            return

        try:
            handler(data)
        except ValidationError as e:
            logger.warning(f"Dropping invalid {event} payload from {self.participant_id}: {e.error_count()} errors")

    def on_join(self, data):
        # Legacy clients send the bare room id
        if isinstance(data, str):
            request = JoinRequest(roomId=data, name=DEFAULT_NAME)
        else:
            request = JoinRequest.model_validate(data or {})

        if self.relay.join(self, request.roomId, request.name):
            self.room_id = request.roomId
            self.name = request.name or DEFAULT_NAME

    def on_set_name(self, data):
        name = data if isinstance(data, str) else None
        self.name = name or DEFAULT_NAME
        self.relay.rename(self, name)

    def on_note_on(self, data):
        request = NoteOnRequest.model_validate(data)
        self.relay.note_on(self, request.note, request.velocity)

    def on_note_off(self, data):
        request = NoteOffRequest.model_validate(data)
        self.relay.note_off(self, request.note)

    def on_disconnect(self):
        if self._disconnected:
            return
        self._disconnected = True
        self.relay.disconnect(self)
        self.hub.unregister(self.participant_id)
        logger.debug(f"Connection {self.participant_id} closed")
