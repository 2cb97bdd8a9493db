"""
bundle_sdk.wallet
=================

Signing ports for the data item builder:

- SigningPort protocol (what the builder calls).
- CallableSigner (wrap a sync/async function).
- Ed25519Signer (local software key via `cryptography`).
"""

from .signer import (CallableSigner, Ed25519Signer, SigningPort, SignResult,
                     verify_ed25519)

__all__ = [
    "SigningPort",
    "SignResult",
    "CallableSigner",
    "Ed25519Signer",
    "verify_ed25519",
]
