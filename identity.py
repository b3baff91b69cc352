import secrets
import string
from typing import Container

# URL-safe alphabet, same symbols nanoid uses
ALPHABET = string.ascii_letters + string.digits + "_-"


def allocate(length: int) -> str:
    """Return a random URL-safe token of ``length`` symbols."""
    return ''.join(secrets.choice(ALPHABET) for _ in range(length))


def allocate_unique(length: int, taken: Container[str]) -> str:
    """Like :func:`allocate`, but never returns a token already in ``taken``."""
    token = allocate(length)
    while token in taken:
        token = allocate(length)
    return token
