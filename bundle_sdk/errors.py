"""
Typed error classes for bundle-sdk.

Everything raised on purpose derives from `BundleSdkError`, so callers can
catch one base class or a specific failure:

- FieldLengthError and its subclasses: a fixed-size field had the wrong size
  (owner key, signature returned by the signer, target, anchor).
- SignerFailure: the injected signer reported failure (e.g. the user declined).
- UnsupportedSignatureType: the signature type has no known 64/32 layout.
- UnsupportedHashNodeType: the deep hash saw something that is neither bytes
  nor a list. Indicates a defect in the caller building the hash tree.
- TagError: tags violate the ANS-104 limits (strict mode only).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

__all__ = [
    "BundleSdkError",
    "FieldLengthError",
    "InvalidOwnerKeyLength",
    "InvalidSignatureLength",
    "InvalidTargetLength",
    "InvalidAnchorLength",
    "SignerFailure",
    "UnsupportedSignatureType",
    "UnsupportedHashNodeType",
    "TagError",
]


class BundleSdkError(Exception):
    """Base class for all bundle-sdk errors."""


@dataclass(slots=True, eq=False)
class FieldLengthError(BundleSdkError, ValueError):
    """A fixed-width field of the data item has the wrong byte length."""

    field: str
    expected: int
    got: int

    def __str__(self) -> str:
        return f"{self.field} must be {self.expected} bytes, got {self.got}"


class InvalidOwnerKeyLength(FieldLengthError):
    """Owner public key is not 32 bytes. Raised before any hashing or signing."""


class InvalidSignatureLength(FieldLengthError):
    """The signer returned a signature whose size does not match the signature type."""


class InvalidTargetLength(FieldLengthError):
    """A present target is not 32 bytes."""


class InvalidAnchorLength(FieldLengthError):
    """A present anchor is not 32 bytes."""


@dataclass(slots=True, eq=False)
class SignerFailure(BundleSdkError):
    """
    The signer could not produce a signature.

    Signer implementations raise this directly (e.g. when a user rejects an
    approval prompt); the builder also wraps any other exception escaping the
    signer into one, keeping the original as ``__cause__``.
    """

    message: str
    reason: Optional[str] = None

    def __str__(self) -> str:
        if self.reason:
            return f"signer failed: {self.message} (reason={self.reason})"
        return f"signer failed: {self.message}"


@dataclass(slots=True, eq=False)
class UnsupportedSignatureType(BundleSdkError, ValueError):
    signature_type: int

    def __str__(self) -> str:
        return f"unsupported signature type: {self.signature_type}"


@dataclass(slots=True, eq=False)
class UnsupportedHashNodeType(BundleSdkError, TypeError):
    """Deep-hash input node is neither bytes-like nor a list."""

    node_type: str

    def __str__(self) -> str:
        return f"deep hash cannot hash node of type {self.node_type}"


@dataclass(slots=True, eq=False)
class TagError(BundleSdkError, ValueError):
    message: str
    index: Optional[int] = None

    def __str__(self) -> str:
        where = f" [tag {self.index}]" if self.index is not None else ""
        return f"TagError{where}: {self.message}"
