"""
bundle_sdk.dataitem.tags
========================

Tag model and the tag-block encoder for data items.

Wire format of the block (Avro array of {name: bytes, value: bytes}, written
as a single block):

    varint(count)
    repeat count times:
        varint(len(name))  name   (UTF-8)
        varint(len(value)) value  (UTF-8)
    0x00                          (end of array)

An empty tag list encodes to the empty byte string, *not* to a lone 0x00
terminator. Deployed bundlers hash and parse the empty block that way, so
the encoder must keep it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple, Union

from ..config import BundleConfig
from ..errors import TagError
from ..utils.bytes import varint_encode


@dataclass(frozen=True)
class Tag:
    """A single (name, value) metadata pair. Order within a list is significant."""

    name: str
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not isinstance(self.value, str):
            raise TypeError("tag name and value must be str")


TagLike = Union[Tag, Tuple[str, str], Mapping[str, Any]]


def _as_tag(obj: TagLike) -> Tag:
    if isinstance(obj, Tag):
        return obj
    if isinstance(obj, Mapping):
        try:
            return Tag(obj["name"], obj["value"])
        except KeyError as e:
            raise TypeError(f"tag mapping is missing key {e}") from None
    if isinstance(obj, (tuple, list)) and len(obj) == 2:
        return Tag(obj[0], obj[1])
    raise TypeError(f"cannot interpret {type(obj).__name__} as a tag")


def normalize_tags(tags: Optional[Iterable[TagLike]]) -> Tuple[Tag, ...]:
    """Coerce Tag objects, (name, value) pairs or {"name", "value"} mappings."""
    if tags is None:
        return ()
    return tuple(_as_tag(t) for t in tags)


def encode_tags(tags: Optional[Iterable[TagLike]]) -> bytes:
    """Encode an ordered tag list into the data item tag block."""
    items = normalize_tags(tags)
    if not items:
        return b""

    out = bytearray(varint_encode(len(items)))
    for tag in items:
        name = tag.name.encode("utf-8")
        value = tag.value.encode("utf-8")
        out += varint_encode(len(name))
        out += name
        out += varint_encode(len(value))
        out += value
    out.append(0)
    return bytes(out)


def validate_tags(tags: Sequence[Tag], config: Optional[BundleConfig] = None) -> None:
    """
    Enforce the ANS-104 tag limits: count, non-empty names and values, and
    per-field UTF-8 byte sizes. Raises TagError on the first violation.
    """
    cfg = config or BundleConfig()
    if len(tags) > cfg.max_tags:
        raise TagError(f"too many tags: {len(tags)} > {cfg.max_tags}")
    for i, tag in enumerate(tags):
        name_len = len(tag.name.encode("utf-8"))
        value_len = len(tag.value.encode("utf-8"))
        if name_len == 0:
            raise TagError("tag name must not be empty", index=i)
        if value_len == 0:
            raise TagError("tag value must not be empty", index=i)
        if name_len > cfg.max_tag_name_bytes:
            raise TagError(
                f"tag name is {name_len} bytes, limit {cfg.max_tag_name_bytes}", index=i
            )
        if value_len > cfg.max_tag_value_bytes:
            raise TagError(
                f"tag value is {value_len} bytes, limit {cfg.max_tag_value_bytes}", index=i
            )


def with_signer_tags(
    tags: Optional[Iterable[TagLike]],
    *,
    main_wallet: Optional[bytes] = None,
    signed_by: Optional[str] = None,
) -> Tuple[Tag, ...]:
    """
    Return `tags` followed by the provenance tags written when an item is signed
    by a delegated key: ``Main-Wallet`` (hex of the wallet public key) and
    ``Signed-By``. The input is not modified.
    """
    out = list(normalize_tags(tags))
    if main_wallet is not None:
        out.append(Tag("Main-Wallet", bytes(main_wallet).hex()))
    if signed_by is not None:
        out.append(Tag("Signed-By", signed_by))
    return tuple(out)


__all__ = [
    "Tag",
    "TagLike",
    "normalize_tags",
    "encode_tags",
    "validate_tags",
    "with_signer_tags",
]
