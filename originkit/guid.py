"""Version 4 UUIDs and parsing of their textual forms."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

__all__ = ["UUID", "rand_uuid", "from_str", "must_from_str"]

_UUID_PATTERN = re.compile(
    r"\{?([a-fA-F0-9]{8})-?([a-fA-F0-9]{4})-?([a-fA-F0-9]{4})-?"
    r"([a-fA-F0-9]{4})-?([a-fA-F0-9]{12})\}?"
)


@dataclass(frozen=True)
class UUID:
    """A 16-byte universally unique identifier."""

    data: bytes

    def __post_init__(self) -> None:
        if len(self.data) != 16:
            raise ValueError(f"UUID needs 16 bytes, got {len(self.data)}")

    def hex(self) -> str:
        """Return the ``xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx`` form."""
        h = self.data.hex()
        return f"{h[0:8]}-{h[8:12]}-{h[12:16]}-{h[16:20]}-{h[20:32]}"

    def hex_ex(self) -> str:
        """Return the 32 hex digits without separators."""
        return self.data.hex()

    def __str__(self) -> str:
        return self.hex()


def rand_uuid() -> UUID:
    """Generate a new random (version 4) UUID."""
    raw = bytearray(os.urandom(16))
    raw[6] = (raw[6] & 0x0F) | 0x40
    raw[8] = (raw[8] & 0x3F) | 0x80
    return UUID(bytes(raw))


def from_str(s: str) -> UUID:
    """Parse a UUID written with or without dashes, optionally in braces.

    Raises ValueError if the string is empty or not in one of those forms.
    """
    if s == "":
        raise ValueError("Empty string")
    match = _UUID_PATTERN.fullmatch(s)
    if match is None:
        raise ValueError("Invalid string format")
    return UUID(bytes.fromhex("".join(match.groups())))


def must_from_str(s: str) -> UUID:
    """Parse a UUID like :func:`from_str`, for strings known to be valid."""
    return from_str(s)