"""
bundle-sdk (Python)
Write path for ANS-104 data items: tag encoding, deep hash, signing and
byte-exact assembly.
"""

from .version import __version__  # noqa: F401

# Core config & errors
from .config import BundleConfig  # noqa: F401
from .errors import (  # noqa: F401
    BundleSdkError,
    InvalidOwnerKeyLength,
    InvalidSignatureLength,
    SignerFailure,
    UnsupportedHashNodeType,
)

# Data items
from .dataitem.tags import Tag, encode_tags  # noqa: F401
from .dataitem.deephash import deep_hash, signing_digest  # noqa: F401
from .dataitem.build import (  # noqa: F401
    DataItem,
    build,
    build_unsigned,
    create_data_item,
    create_unsigned_data_item,
    data_item_digest,
)

# Signers
from .wallet.signer import CallableSigner, Ed25519Signer, SigningPort  # noqa: F401

# Utilities
from .utils.bytes import varint_encode, varint_decode, to_hex  # noqa: F401

__all__ = [
    "__version__",
    # Core
    "BundleConfig",
    "BundleSdkError", "InvalidOwnerKeyLength", "InvalidSignatureLength",
    "SignerFailure", "UnsupportedHashNodeType",
    # Data items
    "Tag", "encode_tags",
    "deep_hash", "signing_digest",
    "DataItem", "build", "build_unsigned",
    "create_data_item", "create_unsigned_data_item", "data_item_digest",
    # Signers
    "SigningPort", "CallableSigner", "Ed25519Signer",
    # Utils
    "varint_encode", "varint_decode", "to_hex",
]
