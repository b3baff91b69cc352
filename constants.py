import os

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 3000))
RELOAD = os.getenv("RELOAD", "false").lower() in ("1", "true", "yes")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", None)

STATIC_DIR = os.getenv("STATIC_DIR", os.path.join(os.path.dirname(os.path.abspath(__file__)), "public"))

ROOM_ID_LENGTH = int(os.getenv("ROOM_ID_LENGTH", 8))
USER_ID_LENGTH = int(os.getenv("USER_ID_LENGTH", 6))
DEFAULT_NAME = os.getenv("DEFAULT_NAME", "Anonymous")

# Room ids a confused client sends when its own state is missing
INVALID_ROOM_IDS = ("null", "undefined")

# Frames queued for one slow client before further frames to it are dropped
OUTBOX_MAX_FRAMES = int(os.getenv("OUTBOX_MAX_FRAMES", 256))
