"""
bundle_sdk.dataitem.build
=========================

Builders for signed (and explicitly unsigned) ANS-104 data items.

A build runs these steps in order and either returns the complete item or
raises; no partial buffer ever escapes:

1. validate signature type, owner (32 bytes), target/anchor (32 bytes if set)
2. encode the tag block (`tags.encode_tags`)
3. deep-hash the 8-element field list (`deephash.signing_digest`)
4. call ``signer.sign(digest)`` once, awaiting the result if needed
5. check the signature size, then assemble

Wire layout (all integers little-endian)
----------------------------------------
    u16   signature type
    64B   signature
    32B   owner
    u8    target present   (+32B target if 1)
    u8    anchor present   (+32B anchor if 1)
    u64   number of tags
    u64   byte length of the tag block
    ...   tag block
    ...   data

Examples
--------
    from bundle_sdk.dataitem import build
    from bundle_sdk.wallet.signer import Ed25519Signer

    signer = Ed25519Signer.generate()
    raw = await build.build(
        owner=signer.public_key,
        tags=[("Content-Type", "application/json")],
        data=b'{"hello": "world"}',
        signer=signer,
    )

    # Integrity-only content, no ownership proof:
    raw = build.build_unsigned(tags=[("App", "demo")], data=b"...")
"""

from __future__ import annotations

import base64
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple

from ..config import BundleConfig
from ..errors import (InvalidAnchorLength, InvalidOwnerKeyLength,
                      InvalidSignatureLength, InvalidTargetLength,
                      SignerFailure, TagError, UnsupportedSignatureType)
from ..logging import get_logger
from ..utils.bytes import u8, u16_le, u64_le
from ..utils.hash import sha256
from ..wallet.signer import SigningPort, describe
from .deephash import signing_digest
from .tags import Tag, TagLike, encode_tags, normalize_tags, validate_tags

log = get_logger(__name__)

# -----------------------------------------------------------------------------
# Signature types
# -----------------------------------------------------------------------------

SIG_TYPE_ED25519 = 2
SIG_TYPE_SOLANA = 4

TARGET_SIZE = 32
ANCHOR_SIZE = 32


@dataclass(frozen=True)
class SignatureSpec:
    name: str
    signature_size: int
    owner_size: int


# Only the ed25519 family (64-byte signature, 32-byte owner) is supported.
SIGNATURE_TYPES: Dict[int, SignatureSpec] = {
    SIG_TYPE_ED25519: SignatureSpec("ed25519", 64, 32),
    SIG_TYPE_SOLANA: SignatureSpec("solana", 64, 32),
}


def signature_spec(signature_type: int) -> SignatureSpec:
    try:
        return SIGNATURE_TYPES[int(signature_type)]
    except KeyError:
        raise UnsupportedSignatureType(int(signature_type)) from None


# -----------------------------------------------------------------------------
# Output artifact
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class DataItem:
    """
    A finished data item. Immutable; `to_bytes()` yields the wire encoding.
    """

    signature_type: int
    signature: bytes
    owner: bytes
    target: Optional[bytes]
    anchor: Optional[bytes]
    tags: Tuple[Tag, ...]
    tag_block: bytes
    data: bytes

    def __post_init__(self) -> None:
        spec = signature_spec(self.signature_type)
        if len(self.signature) != spec.signature_size:
            raise InvalidSignatureLength("signature", spec.signature_size, len(self.signature))
        if len(self.owner) != spec.owner_size:
            raise InvalidOwnerKeyLength("owner", spec.owner_size, len(self.owner))
        _optional_field(self.target, "target", TARGET_SIZE, InvalidTargetLength)
        _optional_field(self.anchor, "anchor", ANCHOR_SIZE, InvalidAnchorLength)
        if self.tag_block != encode_tags(self.tags):
            raise TagError("tag_block is not the encoding of tags")

    @property
    def tags_count(self) -> int:
        return len(self.tags)

    @property
    def tags_byte_length(self) -> int:
        return len(self.tag_block)

    @property
    def id(self) -> bytes:
        """SHA-256 of the signature (the bundler's item id)."""
        return sha256(self.signature)

    @property
    def id_b64url(self) -> str:
        return base64.urlsafe_b64encode(self.id).rstrip(b"=").decode("ascii")

    def to_bytes(self) -> bytes:
        out = bytearray()
        out += u16_le(self.signature_type)
        out += self.signature
        out += self.owner
        out += u8(1 if self.target is not None else 0)
        if self.target is not None:
            out += self.target
        out += u8(1 if self.anchor is not None else 0)
        if self.anchor is not None:
            out += self.anchor
        out += u64_le(self.tags_count)
        out += u64_le(self.tags_byte_length)
        out += self.tag_block
        out += self.data
        return bytes(out)

    @property
    def size(self) -> int:
        """Length of `to_bytes()` without assembling it."""
        return (
            2
            + len(self.signature)
            + len(self.owner)
            + 1
            + (TARGET_SIZE if self.target is not None else 0)
            + 1
            + (ANCHOR_SIZE if self.anchor is not None else 0)
            + 16
            + len(self.tag_block)
            + len(self.data)
        )


def layout_offsets(
    *,
    has_target: bool = False,
    has_anchor: bool = False,
    signature_type: int = SIG_TYPE_ED25519,
) -> Dict[str, int]:
    """
    Byte offset of every header field for the given presence flags. The
    ``tags`` entry is where the tag block starts; data follows it.
    """
    spec = signature_spec(signature_type)
    off: Dict[str, int] = {"signature_type": 0, "signature": 2}
    pos = 2 + spec.signature_size
    off["owner"] = pos
    pos += spec.owner_size
    off["target_present"] = pos
    pos += 1
    if has_target:
        off["target"] = pos
        pos += TARGET_SIZE
    off["anchor_present"] = pos
    pos += 1
    if has_anchor:
        off["anchor"] = pos
        pos += ANCHOR_SIZE
    off["tags_count"] = pos
    off["tags_byte_length"] = pos + 8
    off["tags"] = pos + 16
    return off


# -----------------------------------------------------------------------------
# Validation helpers
# -----------------------------------------------------------------------------


def _ensure_bytes(value: object, name: str) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"{name} must be bytes-like, got {type(value).__name__}")


def _optional_field(
    value: Optional[bytes], name: str, size: int, exc: type
) -> Optional[bytes]:
    if value is None:
        return None
    b = _ensure_bytes(value, name)
    if len(b) != size:
        raise exc(name, size, len(b))
    return b


def _prepare(
    *,
    signature_type: int,
    owner: bytes,
    target: Optional[bytes],
    anchor: Optional[bytes],
    tags: Optional[Iterable[TagLike]],
    data: bytes,
    config: BundleConfig,
) -> Tuple[SignatureSpec, bytes, Optional[bytes], Optional[bytes], Tuple[Tag, ...], bytes, bytes]:
    spec = signature_spec(signature_type)
    owner_b = _ensure_bytes(owner, "owner")
    if len(owner_b) != spec.owner_size:
        raise InvalidOwnerKeyLength("owner", spec.owner_size, len(owner_b))
    target_b = _optional_field(target, "target", TARGET_SIZE, InvalidTargetLength)
    anchor_b = _optional_field(anchor, "anchor", ANCHOR_SIZE, InvalidAnchorLength)
    data_b = _ensure_bytes(data, "data")

    items = normalize_tags(tags)
    if config.strict_tags:
        validate_tags(items, config)
    tag_block = encode_tags(items)
    log.debug(
        "tags encoded",
        extra={"tags_count": len(items), "tags_byte_length": len(tag_block)},
    )
    return spec, owner_b, target_b, anchor_b, items, tag_block, data_b


def data_item_digest(
    *,
    owner: bytes,
    tags: Optional[Iterable[TagLike]],
    data: bytes,
    target: Optional[bytes] = None,
    anchor: Optional[bytes] = None,
    signature_type: Optional[int] = None,
    config: Optional[BundleConfig] = None,
) -> bytes:
    """
    The digest `create_data_item` would hand to the signer for these fields,
    for flows that sign out of band and build later with a fixed signature.
    """
    cfg = config or BundleConfig()
    sig_type = int(signature_type if signature_type is not None else cfg.signature_type)
    _, owner_b, target_b, anchor_b, _, tag_block, data_b = _prepare(
        signature_type=sig_type,
        owner=owner,
        target=target,
        anchor=anchor,
        tags=tags,
        data=data,
        config=cfg,
    )
    return signing_digest(sig_type, owner_b, target_b, anchor_b, tag_block, data_b)


# -----------------------------------------------------------------------------
# Signed builders
# -----------------------------------------------------------------------------


async def _maybe_await(x: Any) -> Any:
    if inspect.isawaitable(x):
        return await x
    return x


async def _call_signer(signer: SigningPort, digest: bytes) -> bytes:
    try:
        result = await _maybe_await(signer.sign(digest))
    except SignerFailure:
        raise
    except Exception as e:
        raise SignerFailure(
            f"{describe(signer)} raised {type(e).__name__}", reason=str(e) or None
        ) from e
    if not isinstance(result, (bytes, bytearray, memoryview)):
        raise SignerFailure(
            f"{describe(signer)} returned {type(result).__name__}, expected bytes"
        )
    return bytes(result)


async def create_data_item(
    *,
    owner: bytes,
    tags: Optional[Iterable[TagLike]],
    data: bytes,
    signer: SigningPort,
    target: Optional[bytes] = None,
    anchor: Optional[bytes] = None,
    signature_type: Optional[int] = None,
    config: Optional[BundleConfig] = None,
) -> DataItem:
    """
    Build and sign a data item, returning the `DataItem` artifact.

    Args:
        owner: raw public key of the signer (32 bytes)
        tags: ordered (name, value) pairs; empty or None for no tags
        data: payload bytes, may be empty
        signer: SigningPort, called exactly once with the 48-byte digest
        target, anchor: optional 32-byte fields
        signature_type: defaults to ``config.signature_type`` (2, ed25519)
        config: optional BundleConfig (tag policy, defaults)

    Raises:
        InvalidOwnerKeyLength, InvalidTargetLength, InvalidAnchorLength,
        UnsupportedSignatureType, TagError: before any hashing or signing.
        SignerFailure: the signer raised or returned a non-bytes value. A
            SignerFailure from the signer is re-raised as is; other exceptions
            are wrapped, keeping the original as ``__cause__``.
        InvalidSignatureLength: the signature size does not match the type.
    """
    cfg = config or BundleConfig()
    sig_type = int(signature_type if signature_type is not None else cfg.signature_type)
    spec, owner_b, target_b, anchor_b, items, tag_block, data_b = _prepare(
        signature_type=sig_type,
        owner=owner,
        target=target,
        anchor=anchor,
        tags=tags,
        data=data,
        config=cfg,
    )

    digest = signing_digest(sig_type, owner_b, target_b, anchor_b, tag_block, data_b)
    signature = await _call_signer(signer, digest)
    if len(signature) != spec.signature_size:
        raise InvalidSignatureLength("signature", spec.signature_size, len(signature))

    item = DataItem(
        signature_type=sig_type,
        signature=signature,
        owner=owner_b,
        target=target_b,
        anchor=anchor_b,
        tags=items,
        tag_block=tag_block,
        data=data_b,
    )
    if log.isEnabledFor(logging.DEBUG):
        log.debug(
            "data item signed",
            extra={"item_id": item.id_b64url, "data_size": len(data_b), "signer": describe(signer)},
        )
    return item


async def build(
    *,
    owner: bytes,
    tags: Optional[Iterable[TagLike]],
    data: bytes,
    signer: SigningPort,
    target: Optional[bytes] = None,
    anchor: Optional[bytes] = None,
    signature_type: Optional[int] = None,
    config: Optional[BundleConfig] = None,
) -> bytes:
    """
    Build and sign a data item, returning its wire bytes. See `create_data_item`.

    A `SignerFailure` raised by the signer propagates unchanged; any other
    exception from the signer is re-raised as `SignerFailure` with the
    original as ``__cause__``.
    """
    item = await create_data_item(
        owner=owner,
        tags=tags,
        data=data,
        signer=signer,
        target=target,
        anchor=anchor,
        signature_type=signature_type,
        config=config,
    )
    raw = item.to_bytes()
    if log.isEnabledFor(logging.DEBUG):
        log.debug("data item built", extra={"item_id": item.id_b64url, "size": len(raw)})
    return raw


# -----------------------------------------------------------------------------
# Unsigned builders
# -----------------------------------------------------------------------------


def create_unsigned_data_item(
    *,
    tags: Optional[Iterable[TagLike]],
    data: bytes,
    signature_type: Optional[int] = None,
    config: Optional[BundleConfig] = None,
) -> DataItem:
    """
    Data item with an all-zero signature and owner and no target/anchor.

    It carries no ownership proof: use it only for content where integrity
    matters and authorship does not (e.g. migration packages). Never awaits.
    """
    cfg = config or BundleConfig()
    sig_type = int(signature_type if signature_type is not None else cfg.signature_type)
    spec = signature_spec(sig_type)
    zero_owner = bytes(spec.owner_size)
    _, _, _, _, items, tag_block, data_b = _prepare(
        signature_type=sig_type,
        owner=zero_owner,
        target=None,
        anchor=None,
        tags=tags,
        data=data,
        config=cfg,
    )
    return DataItem(
        signature_type=sig_type,
        signature=bytes(spec.signature_size),
        owner=zero_owner,
        target=None,
        anchor=None,
        tags=items,
        tag_block=tag_block,
        data=data_b,
    )


def build_unsigned(
    *,
    tags: Optional[Iterable[TagLike]],
    data: bytes,
    signature_type: Optional[int] = None,
    config: Optional[BundleConfig] = None,
) -> bytes:
    raw = create_unsigned_data_item(
        tags=tags, data=data, signature_type=signature_type, config=config
    ).to_bytes()
    log.debug("unsigned data item built", extra={"size": len(raw)})
    return raw


__all__ = [
    "SIG_TYPE_ED25519",
    "SIG_TYPE_SOLANA",
    "TARGET_SIZE",
    "ANCHOR_SIZE",
    "SignatureSpec",
    "SIGNATURE_TYPES",
    "signature_spec",
    "DataItem",
    "layout_offsets",
    "data_item_digest",
    "create_data_item",
    "build",
    "create_unsigned_data_item",
    "build_unsigned",
]
