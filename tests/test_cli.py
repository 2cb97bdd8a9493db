import json
import logging

import pytest
from typer.testing import CliRunner

from bundle_sdk.cli.main import app
from bundle_sdk.dataitem.build import data_item_digest
from bundle_sdk.utils.bytes import from_hex
from bundle_sdk.version import __version__
from bundle_sdk.wallet.signer import Ed25519Signer, verify_ed25519

runner = CliRunner()
SEED_HEX = "0x" + "00" * 32


@pytest.fixture(autouse=True)
def _isolate(monkeypatch):
    for name in ("SIGNATURE_TYPE", "STRICT_TAGS", "LOG_LEVEL", "LOG_FORMAT", "SIGNER_SEED"):
        monkeypatch.delenv(f"BUNDLE_{name}", raising=False)
    yield
    logger = logging.getLogger("bundle_sdk")
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0, result.output
    assert __version__ in result.stdout


def test_tags():
    result = runner.invoke(app, ["tags", "-t", "App=Soulon"])
    assert result.exit_code == 0, result.output
    out = json.loads(result.stdout)
    assert out == {"count": 1, "byteLength": 13, "hex": "0x02064170700c536f756c6f6e00"}


def test_tags_without_separator_is_usage_error():
    result = runner.invoke(app, ["tags", "-t", "App"])
    assert result.exit_code != 0


def test_strict_tags_flag():
    result = runner.invoke(app, ["--strict-tags", "tags", "-t", "App="])
    assert result.exit_code == 1


def test_build_writes_signed_item(tmp_path):
    payload = tmp_path / "note.txt"
    payload.write_bytes(b"hello")
    out = tmp_path / "note.item"

    result = runner.invoke(
        app,
        ["build", "--seed", SEED_HEX, "-d", str(payload), "-o", str(out), "-t", "App=Soulon"],
    )
    assert result.exit_code == 0, result.output
    summary = json.loads(result.stdout)

    raw = out.read_bytes()
    signer = Ed25519Signer.from_seed(bytes(32))
    assert len(raw) == summary["size"] == 134
    assert summary["tags"] == 1
    assert raw[66:98] == signer.public_key
    assert from_hex(summary["owner"]) == signer.public_key

    digest = data_item_digest(owner=signer.public_key, tags=[("App", "Soulon")], data=b"hello")
    assert verify_ed25519(signer.public_key, digest, raw[2:66])


def test_build_requires_seed(tmp_path):
    result = runner.invoke(app, ["build", "-o", str(tmp_path / "x.item")])
    assert result.exit_code == 1


def test_build_unsigned(tmp_path):
    out = tmp_path / "pkg.item"
    result = runner.invoke(app, ["build-unsigned", "-o", str(out), "-t", "App=Soulon"])
    assert result.exit_code == 0, result.output
    raw = out.read_bytes()
    assert json.loads(result.stdout)["size"] == len(raw) == 129
    assert raw[2:98] == bytes(96)


def test_digest_matches_library():
    owner = "0x" + "01" * 32
    result = runner.invoke(app, ["digest", "--owner", owner, "-t", "App=Soulon"])
    assert result.exit_code == 0, result.output
    expected = data_item_digest(owner=b"\x01" * 32, tags=[("App", "Soulon")], data=b"")
    assert result.stdout.strip() == "0x" + expected.hex()


def test_digest_rejects_short_owner():
    result = runner.invoke(app, ["digest", "--owner", "0x" + "01" * 31])
    assert result.exit_code == 1
    assert "owner must be 32 bytes" in result.output
