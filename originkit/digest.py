"""Checksums and MD5 digests of strings."""

from __future__ import annotations

import hashlib
import zlib

__all__ = ["hash_number", "md5_v", "md5_v2", "md5_v3"]


def hash_number(s: str) -> int:
    """Return the IEEE CRC-32 checksum of the UTF-8 bytes of ``s``."""
    return zlib.crc32(s.encode("utf-8")) & 0xFFFFFFFF


def md5_v(s: str) -> str:
    """Return the MD5 digest of ``s`` as lower-case hex, fed through an incremental hasher."""
    digest = hashlib.md5()
    digest.update(s.encode("utf-8"))
    return digest.hexdigest()


def md5_v2(s: str) -> str:
    """Return the MD5 digest of ``s`` as lower-case hex, computed in one call."""
    return hashlib.md5(s.encode("utf-8")).digest().hex()


def md5_v3(s: str) -> str:
    """Return the MD5 digest of ``s`` as lower-case hex, formatted from the raw digest."""
    digest = hashlib.md5()
    digest.update(s.encode("utf-8"))
    return "".join(f"{byte:02x}" for byte in digest.digest())