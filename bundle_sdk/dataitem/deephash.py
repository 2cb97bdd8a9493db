"""
bundle_sdk.dataitem.deephash
============================

Deep hash: a type- and length-tagged hash tree over byte blobs and lists,
compatible with arweave-js `deepHash` (SHA-384).

    blob B        -> H( H(b"blob" + ascii(len(B))) || H(B) )
    list [x1..xn] -> acc = H(b"list" + ascii(n))
                     acc = H(acc || deep_hash(x_i))   for each i
                     result = acc

Every node is tagged with its kind and length before it is hashed, so a blob
cannot be re-read as a list and adjacent fields cannot shift into each other.
Lists nest to any depth.

`signing_digest` applies this to the fixed 8-element data item layout; its
result is what the signer signs.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Union

from ..errors import UnsupportedHashNodeType
from ..utils.hash import sha384
from ..version import FORMAT_VERSION

Blob = Union[bytes, bytearray, memoryview]
Chunk = Union[Blob, Sequence["Chunk"]]

_DATAITEM_TAG = b"dataitem"


def _tag(kind: bytes, length: int) -> bytes:
    return kind + str(length).encode("ascii")


def deep_hash(node: Chunk) -> bytes:
    """Return the 48-byte deep hash of a blob or (nested) list of chunks."""
    if isinstance(node, (bytes, bytearray, memoryview)):
        blob = bytes(node)
        return sha384(sha384(_tag(b"blob", len(blob))) + sha384(blob))
    if isinstance(node, (list, tuple)):
        acc = sha384(_tag(b"list", len(node)))
        for child in node:
            acc = sha384(acc + deep_hash(child))
        return acc
    raise UnsupportedHashNodeType(type(node).__name__)


def data_item_hash_input(
    signature_type: int,
    owner: bytes,
    target: Optional[bytes],
    anchor: Optional[bytes],
    tag_block: bytes,
    data: bytes,
) -> List[bytes]:
    """
    The 8-element list committed to by a data item signature. Absent target
    and anchor enter as empty blobs.
    """
    return [
        _DATAITEM_TAG,
        FORMAT_VERSION.encode("ascii"),
        str(int(signature_type)).encode("ascii"),
        bytes(owner),
        bytes(target) if target is not None else b"",
        bytes(anchor) if anchor is not None else b"",
        bytes(tag_block),
        bytes(data),
    ]


def signing_digest(
    signature_type: int,
    owner: bytes,
    target: Optional[bytes],
    anchor: Optional[bytes],
    tag_block: bytes,
    data: bytes,
) -> bytes:
    """48-byte digest the signer must sign for these data item fields."""
    return deep_hash(
        data_item_hash_input(signature_type, owner, target, anchor, tag_block, data)
    )


__all__ = [
    "Blob",
    "Chunk",
    "deep_hash",
    "data_item_hash_input",
    "signing_digest",
]
