"""
Record identifier helpers.

Identifiers are 24-character hexadecimal strings: a 4-byte big-endian creation
timestamp followed by 8 random bytes. Every id received from a caller is
format-checked here before it reaches a repository.
"""

import re
import secrets
import time

from issue_tracker.core.exceptions import BadRequestError

OBJECT_ID_LENGTH = 24

_OBJECT_ID_RE = re.compile(rf"^[0-9a-fA-F]{{{OBJECT_ID_LENGTH}}}$")


def new_object_id() -> str:
    """Generate a new 24-character lowercase hex identifier."""
    timestamp = int(time.time()) & 0xFFFFFFFF
    return f"{timestamp:08x}{secrets.token_hex(8)}"


def is_valid_object_id(value: object) -> bool:
    """Return True if value has the identifier shape."""
    return isinstance(value, str) and bool(_OBJECT_ID_RE.match(value))


def ensure_object_id(value: object, label: str = "issue") -> str:
    """
    Validate an identifier and return its normalized (lowercase) form.

    Raises:
        BadRequestError: If the value is not 24 hexadecimal characters
    """
    if not is_valid_object_id(value):
        raise BadRequestError(f"Invalid {label} ID format")
    return value.lower()
