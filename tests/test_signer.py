import pytest

from bundle_sdk.wallet.signer import (CallableSigner, Ed25519Signer,
                                      SigningPort, describe, verify_ed25519)

SEED = bytes(range(32))
DIGEST = b"\x07" * 48


def test_from_seed_is_deterministic():
    a = Ed25519Signer.from_seed(SEED)
    b = Ed25519Signer.from_seed(SEED)
    assert a.public_key == b.public_key
    assert len(a.public_key) == 32
    assert a.seed() == SEED
    # ed25519 signatures are deterministic
    assert a.sign_sync(DIGEST) == b.sign_sync(DIGEST)


@pytest.mark.parametrize("size", [0, 31, 33, 64])
def test_from_seed_rejects_wrong_size(size):
    with pytest.raises(ValueError, match="32 bytes"):
        Ed25519Signer.from_seed(b"\x00" * size)


@pytest.mark.asyncio
async def test_sign_and_verify():
    signer = Ed25519Signer.generate()
    sig = await signer.sign(DIGEST)
    assert len(sig) == 64
    assert signer.verify(DIGEST, sig)
    assert verify_ed25519(signer.public_key, DIGEST, sig)

    tampered = bytes([sig[0] ^ 1]) + sig[1:]
    assert not signer.verify(DIGEST, tampered)
    assert not signer.verify(b"\x08" * 48, sig)
    assert not verify_ed25519(Ed25519Signer.generate().public_key, DIGEST, sig)


def test_verify_with_malformed_key_is_false():
    assert not verify_ed25519(b"\x00" * 5, DIGEST, b"\x00" * 64)


@pytest.mark.asyncio
async def test_callable_signer_accepts_sync_and_async_functions():
    seen = []

    def sync_fn(digest):
        seen.append(digest)
        return b"s" * 64

    async def async_fn(digest):
        seen.append(digest)
        return b"a" * 64

    assert await CallableSigner(sync_fn).sign(DIGEST) == b"s" * 64
    assert await CallableSigner(async_fn).sign(DIGEST) == b"a" * 64
    assert seen == [DIGEST, DIGEST]


def test_callable_signer_requires_callable():
    with pytest.raises(TypeError):
        CallableSigner(b"nope")  # type: ignore[arg-type]


def test_signers_satisfy_the_port():
    assert isinstance(Ed25519Signer.generate(), SigningPort)
    assert isinstance(CallableSigner(lambda d: d), SigningPort)
    assert not isinstance(object(), SigningPort)
    assert describe(Ed25519Signer.generate()) == "Ed25519Signer"
