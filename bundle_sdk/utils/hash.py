from __future__ import annotations

import hashlib

from .bytes import BytesLike, ensure_bytes


def sha384(data: BytesLike) -> bytes:
    """Return the 48-byte SHA-384 digest of *data* (the deep-hash primitive)."""
    return hashlib.sha384(ensure_bytes(data)).digest()


def sha256(data: BytesLike) -> bytes:
    """SHA-256 of *data*; used for data item ids."""
    return hashlib.sha256(ensure_bytes(data)).digest()


__all__ = [
    "sha384",
    "sha256",
]
