from __future__ import annotations

from typing import Any, Optional

import pytest

from hub import ConnectionHub
from registry import RoomRegistry
from relay import EventRelay


class FakeConnection:
    """Records everything sent to it instead of writing to a socket."""

    def __init__(self, participant_id: str, room_id: Optional[str] = None) -> None:
        self.participant_id = participant_id
        self.room_id = room_id
        self.sent: list[tuple[str, Any]] = []

    def send(self, event: str, data: Any) -> None:
        self.sent.append((event, data))

    def events(self, name: str) -> list[Any]:
        return [data for event, data in self.sent if event == name]


class FakeOutbox:
    def __init__(self) -> None:
        self.frames: list[tuple[str, Any]] = []

    def put(self, event: str, data: Any) -> None:
        self.frames.append((event, data))

    def events(self, name: str) -> list[Any]:
        return [data for event, data in self.frames if event == name]


@pytest.fixture()
def registry() -> RoomRegistry:
    return RoomRegistry()


@pytest.fixture()
def hub() -> ConnectionHub:
    return ConnectionHub()


@pytest.fixture()
def relay(registry: RoomRegistry, hub: ConnectionHub) -> EventRelay:
    return EventRelay(registry, hub)


def join(relay: EventRelay, conn: FakeConnection, room_id: str, name: str) -> Optional[str]:
    user_id = relay.join(conn, room_id, name)
    if user_id:
        conn.room_id = room_id
    return user_id
