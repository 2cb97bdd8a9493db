from __future__ import annotations

import logging
from typing import List

import pytest

OWNER = b"\x01" * 32
FIXED_SIGNATURE = b"\x02" * 64


class RecordingSigner:
    """Returns a fixed signature and remembers every digest it was asked to sign."""

    def __init__(self, signature: bytes = FIXED_SIGNATURE) -> None:
        self.signature = signature
        self.calls: List[bytes] = []

    async def sign(self, digest: bytes) -> bytes:
        self.calls.append(digest)
        return self.signature


@pytest.fixture
def owner() -> bytes:
    return OWNER


@pytest.fixture
def recording_signer() -> RecordingSigner:
    return RecordingSigner()


@pytest.fixture
def reset_sdk_logger():
    yield
    logger = logging.getLogger("bundle_sdk")
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
