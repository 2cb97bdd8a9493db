from __future__ import annotations

from typing import Tuple, Union

BytesLike = Union[bytes, bytearray, memoryview]

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1

# A zigzag-mapped int64 never needs more than ceil(64 / 7) groups.
MAX_VARINT_LEN = 10


def ensure_bytes(data: Union[BytesLike, str]) -> bytes:
    """
    Ensure input is bytes.

    Accepts:
      - bytes / bytearray / memoryview  -> bytes(data)
      - str: treated as hex; optional '0x' prefix; even-length enforced
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    if isinstance(data, str):
        return from_hex(data)
    raise TypeError(f"Unsupported type for ensure_bytes: {type(data)!r}")


def to_hex(b: BytesLike, prefix: bool = True) -> str:
    """Bytes -> lowercase hex string, '0x'-prefixed by default."""
    s = bytes(b).hex()
    return f"0x{s}" if prefix else s


def from_hex(s: str) -> bytes:
    """Hex string (optionally '0x' prefixed) -> bytes. Odd lengths are rejected."""
    if not isinstance(s, str):
        raise TypeError("from_hex expects a string")
    if s.startswith(("0x", "0X")):
        s = s[2:]
    if len(s) % 2 != 0:
        raise ValueError("hex string must have even length")
    try:
        return bytes.fromhex(s)
    except ValueError as e:
        raise ValueError(f"invalid hex string: {e}") from e


# --- Fixed-width little-endian integers ---------------------------------------


def u8(n: int) -> bytes:
    if not 0 <= n <= 0xFF:
        raise ValueError(f"value out of range for u8: {n}")
    return bytes((n,))


def u16_le(n: int) -> bytes:
    if not 0 <= n <= 0xFFFF:
        raise ValueError(f"value out of range for u16: {n}")
    return n.to_bytes(2, "little")


def u64_le(n: int) -> bytes:
    if not 0 <= n <= UINT64_MAX:
        raise ValueError(f"value out of range for u64: {n}")
    return n.to_bytes(8, "little")


# --- ZigZag + base-128 varint (Avro "long") ------------------------------------


def zigzag_encode(value: int) -> int:
    """
    Map a signed int64 onto an unsigned int so small magnitudes stay small:
    0 -> 0, -1 -> 1, 1 -> 2, -2 -> 3, ...
    """
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"value out of int64 range: {value}")
    return (value << 1) ^ (value >> 63)


def zigzag_decode(n: int) -> int:
    if not 0 <= n <= UINT64_MAX:
        raise ValueError(f"value out of uint64 range: {n}")
    return (n >> 1) ^ -(n & 1)


def uvarint_encode(n: int) -> bytes:
    """
    Encode an unsigned integer as base-128 groups, least significant first,
    with 0x80 set on every byte except the last.

    Example:
        0x00 -> b'\\x00'
        0x7f -> b'\\x7f'
        0x80 -> b'\\x80\\x01'
    """
    if n < 0:
        raise ValueError("uvarint_encode expects a non-negative integer")
    out = bytearray()
    while n > 0x7F:
        out.append((n & 0x7F) | 0x80)
        n >>= 7
    out.append(n)
    return bytes(out)


def uvarint_decode(b: BytesLike, *, offset: int = 0) -> Tuple[int, int]:
    """
    Decode an unsigned varint from `b` starting at `offset`.

    Returns (value, length_consumed). Raises ValueError on truncated input or
    on encodings longer than MAX_VARINT_LEN bytes.
    """
    result = 0
    shift = 0
    view = memoryview(b)[offset:]
    for consumed, byte in enumerate(view[:MAX_VARINT_LEN], start=1):
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            if result > UINT64_MAX:
                raise ValueError("varint exceeds 64 bits")
            return result, consumed
        shift += 7
    if len(view) >= MAX_VARINT_LEN:
        raise ValueError(f"varint longer than {MAX_VARINT_LEN} bytes")
    raise ValueError("truncated varint (input ended before termination byte)")


def varint_encode(value: int) -> bytes:
    """
    Signed varint used for every count and length in the tag block:
    zigzag-map the int64, then emit it as an unsigned base-128 varint.

        varint_encode(0)   == b'\\x00'
        varint_encode(-1)  == b'\\x01'
        varint_encode(127) == b'\\xfe\\x01'
        varint_encode(128) == b'\\x80\\x02'
    """
    return uvarint_encode(zigzag_encode(value))


def varint_decode(b: BytesLike, *, offset: int = 0) -> Tuple[int, int]:
    """Inverse of `varint_encode`. Returns (value, length_consumed)."""
    raw, consumed = uvarint_decode(b, offset=offset)
    return zigzag_decode(raw), consumed


__all__ = [
    "BytesLike",
    "INT64_MIN",
    "INT64_MAX",
    "UINT64_MAX",
    "MAX_VARINT_LEN",
    "ensure_bytes",
    "to_hex",
    "from_hex",
    "u8",
    "u16_le",
    "u64_le",
    "zigzag_encode",
    "zigzag_decode",
    "uvarint_encode",
    "uvarint_decode",
    "varint_encode",
    "varint_decode",
]
