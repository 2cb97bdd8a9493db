"""
Utility helpers for the SDK.

Re-exports:
- bytes: hex helpers, fixed-width little-endian ints, zigzag varints
- hash: SHA-384 (deep hash) and SHA-256 (item ids)
"""

from .bytes import (ensure_bytes, from_hex, to_hex, u16_le, u64_le,
                    varint_decode, varint_encode, zigzag_decode,
                    zigzag_encode)
from .hash import sha256, sha384

__all__ = [
    # bytes
    "to_hex",
    "from_hex",
    "ensure_bytes",
    "u16_le",
    "u64_le",
    "zigzag_encode",
    "zigzag_decode",
    "varint_encode",
    "varint_decode",
    # hash
    "sha384",
    "sha256",
]
