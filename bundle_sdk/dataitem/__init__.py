"""
bundle_sdk.dataitem
===================

Write path for ANS-104 data items.

Submodules
----------
- tags     : Tag model and the tag-block encoder.
- deephash : Deep hash (SHA-384 hash tree) and the data item signing digest.
- build    : Signed / unsigned builders and the DataItem artifact.

Typical usage
-------------
    from bundle_sdk.dataitem import build
    from bundle_sdk.wallet.signer import Ed25519Signer

    signer = Ed25519Signer.from_seed(seed)
    raw = await build.build(owner=signer.public_key, tags=[("App", "demo")],
                            data=b"hello", signer=signer)
"""

from __future__ import annotations

from . import build as build
from . import deephash as deephash
from . import tags as tags
from .build import DataItem, build_unsigned, create_data_item
from .deephash import deep_hash, signing_digest
from .tags import Tag, encode_tags

__all__ = [
    "build",
    "deephash",
    "tags",
    "DataItem",
    "Tag",
    "encode_tags",
    "deep_hash",
    "signing_digest",
    "create_data_item",
    "build_unsigned",
]
