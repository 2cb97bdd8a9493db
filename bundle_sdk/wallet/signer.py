"""
bundle_sdk.wallet.signer
========================

The signing capability the data item builder depends on, plus two concrete
implementations.

`SigningPort`
    Anything with ``sign(digest: bytes) -> bytes`` (or an awaitable of bytes).
    The builder calls it once per item with the 48-byte deep hash and expects
    a raw 64-byte ed25519 signature back. Retries, approval prompts, sessions
    and transport all belong to the implementation.

`CallableSigner`
    Adapts a plain function or coroutine function, e.g. a wallet adapter's
    ``sign_message`` bound method.

`Ed25519Signer`
    A local software key (via `cryptography`), for session keys, tests and the
    CLI. Signing is synchronous but exposed through ``async def sign`` so it
    behaves like every other port.

Implementations report refusal (user declined, session expired, ...) by
raising `bundle_sdk.errors.SignerFailure`.
"""

from __future__ import annotations

import inspect
from typing import Awaitable, Callable, Protocol, Union, runtime_checkable

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey, Ed25519PublicKey)

__all__ = [
    "SignResult",
    "SigningPort",
    "CallableSigner",
    "Ed25519Signer",
    "ED25519_PUBLIC_KEY_SIZE",
    "ED25519_SIGNATURE_SIZE",
    "verify_ed25519",
    "describe",
]

ED25519_PUBLIC_KEY_SIZE = 32
ED25519_SIGNATURE_SIZE = 64

SignResult = Union[bytes, Awaitable[bytes]]


@runtime_checkable
class SigningPort(Protocol):
    def sign(self, digest: bytes) -> SignResult: ...


class CallableSigner:
    """
    Wrap ``fn(digest) -> bytes`` or ``async fn(digest) -> bytes`` as a SigningPort.
    """

    __slots__ = ("_fn",)

    def __init__(self, fn: Callable[[bytes], SignResult]) -> None:
        if not callable(fn):
            raise TypeError("CallableSigner expects a callable")
        self._fn = fn

    async def sign(self, digest: bytes) -> bytes:
        result = self._fn(digest)
        if inspect.isawaitable(result):
            result = await result
        return result


class Ed25519Signer:
    """
    Local ed25519 key.

    Create via:
        - Ed25519Signer.generate()
        - Ed25519Signer.from_seed(seed32)
        - Ed25519Signer(private_key)
    """

    def __init__(self, private_key: Ed25519PrivateKey) -> None:
        self._sk = private_key
        self._pk: bytes = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )

    # ---- Constructors ----

    @classmethod
    def generate(cls) -> "Ed25519Signer":
        return cls(Ed25519PrivateKey.generate())

    @classmethod
    def from_seed(cls, seed: bytes) -> "Ed25519Signer":
        """Deterministic key from a 32-byte ed25519 seed (RFC 8032 private key)."""
        seed = bytes(seed)
        if len(seed) != 32:
            raise ValueError(f"ed25519 seed must be 32 bytes, got {len(seed)}")
        return cls(Ed25519PrivateKey.from_private_bytes(seed))

    # ---- Properties ----

    @property
    def public_key(self) -> bytes:
        """Raw 32-byte public key; this is the data item owner."""
        return self._pk

    def seed(self) -> bytes:
        return self._sk.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )

    # ---- Operations ----

    async def sign(self, digest: bytes) -> bytes:
        return self.sign_sync(digest)

    def sign_sync(self, digest: bytes) -> bytes:
        return self._sk.sign(bytes(digest))

    def verify(self, digest: bytes, signature: bytes) -> bool:
        return verify_ed25519(self._pk, digest, signature)


def verify_ed25519(public_key: bytes, message: bytes, signature: bytes) -> bool:
    """Check a raw ed25519 signature against a raw 32-byte public key."""
    try:
        Ed25519PublicKey.from_public_bytes(bytes(public_key)).verify(
            bytes(signature), bytes(message)
        )
    except (InvalidSignature, ValueError):
        return False
    return True


def describe(signer: object) -> str:
    """Short label for logs, e.g. 'Ed25519Signer'."""
    return type(signer).__name__
