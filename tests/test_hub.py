from hub import ConnectionHub

from conftest import FakeConnection


def test_emit_reaches_room_only(hub: ConnectionHub):
    a, b, c = FakeConnection("a"), FakeConnection("b"), FakeConnection("c")
    hub.add("r1", a)
    hub.add("r1", b)
    hub.add("r2", c)

    assert hub.emit("r1", "ping", 1) == 2
    assert a.sent == [("ping", 1)]
    assert b.sent == [("ping", 1)]
    assert c.sent == []


def test_emit_excludes_sender(hub: ConnectionHub):
    a, b = FakeConnection("a"), FakeConnection("b")
    hub.add("r", a)
    hub.add("r", b)
    assert hub.emit("r", "noteOn", {}, exclude="a") == 1
    assert a.sent == []
    assert b.sent == [("noteOn", {})]


def test_discard_drops_empty_room(hub: ConnectionHub):
    a = FakeConnection("a")
    hub.add("r", a)
    hub.discard("r", "a")
    assert hub.connections("r") == []
    assert hub.emit("r", "ping", None) == 0
    hub.discard("r", "a")


def test_live_ids(hub: ConnectionHub):
    hub.register("a")
    assert "a" in hub
    hub.unregister("a")
    assert "a" not in hub
