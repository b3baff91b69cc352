# Inbound events (client -> server)
JOIN = "join"
SET_NAME = "setName"
NOTE_ON = "noteOn"
NOTE_OFF = "noteOff"

# Outbound events (server -> client)
YOUR_ID = "yourId"
USER_LIST = "userList"
USER_LEFT = "userLeft"
# NOTE_ON / NOTE_OFF are relayed under the same names

# **Frame format**
# Every WebSocket text frame is a JSON object in both directions:
# - `{"event": "join", "data": {"roomId": "abc123", "name": "Alice"}}`
# - `{"event": "join", "data": "abc123"}` (legacy, name defaults)
# - `{"event": "noteOn", "data": {"note": "C4", "velocity": 0.8, "userId": "x1Y2z3"}}`
