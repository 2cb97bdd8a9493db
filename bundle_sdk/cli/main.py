"""
bundle_sdk.cli.main
===================

`bundle-sdk`: build ANS-104 data items from the shell.

Examples
--------
    $ bundle-sdk version
    $ bundle-sdk tags -t App=Soulon -t Content-Type=text/plain
    $ bundle-sdk digest --owner 0x0101...01 --data-file note.txt -t App=Soulon
    $ BUNDLE_SIGNER_SEED=0x... bundle-sdk build --data-file note.txt --out note.item -t App=Soulon
    $ bundle-sdk build-unsigned --data-file pkg.bin --out pkg.item

Configuration
-------------
- Signature type : `--sig-type` or env `BUNDLE_SIGNATURE_TYPE` (default: 2)
- Strict tags    : `--strict-tags` or env `BUNDLE_STRICT_TAGS`
- Signer seed    : `--seed` or env `BUNDLE_SIGNER_SEED` (32-byte hex, ed25519)
- Logging        : `--log-level` / env `BUNDLE_LOG_LEVEL`, env `BUNDLE_LOG_FORMAT`
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

import typer

from .. import logging as blog
from ..config import BundleConfig
from ..dataitem import build as builder
from ..dataitem.tags import Tag, encode_tags, normalize_tags, validate_tags
from ..errors import BundleSdkError
from ..utils.bytes import from_hex, to_hex
from ..version import version as sdk_version
from ..wallet.signer import Ed25519Signer

app = typer.Typer(
    name="bundle-sdk",
    help="Build, hash and sign ANS-104 data items.",
    no_args_is_help=True,
    add_completion=False,
)

__all__ = ["app", "main", "run"]


@dataclass
class Ctx:
    config: BundleConfig


def _print_json(obj: Any) -> None:
    typer.echo(json.dumps(obj, indent=2, ensure_ascii=False))


def _fail(msg: str) -> None:
    typer.secho(msg, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _parse_tags(raw: Optional[List[str]]) -> List[Tag]:
    out: List[Tag] = []
    for item in raw or []:
        name, sep, value = item.partition("=")
        if not sep:
            raise typer.BadParameter(f"tag must look like name=value, got {item!r}")
        out.append(Tag(name, value))
    return out


def _parse_hex(value: Optional[str], name: str) -> Optional[bytes]:
    if value is None:
        return None
    try:
        return from_hex(value)
    except ValueError as e:
        raise typer.BadParameter(f"{name}: {e}") from e


def _read_data(path: Optional[Path]) -> bytes:
    if path is None:
        return b""
    return path.read_bytes()


def _tags_opt() -> Any:
    return typer.Option(None, "--tag", "-t", help="Tag as name=value (repeatable, ordered).")


def _data_opt() -> Any:
    return typer.Option(
        None, "--data-file", "-d", exists=True, dir_okay=False, help="Payload file."
    )


def _target_opt() -> Any:
    return typer.Option(None, "--target", help="Optional 32-byte target (hex).")


def _anchor_opt() -> Any:
    return typer.Option(None, "--anchor", help="Optional 32-byte anchor (hex).")


@app.callback()
def _root(
    ctx: typer.Context,
    sig_type: Optional[int] = typer.Option(
        None, "--sig-type", help="Signature type.", envvar="BUNDLE_SIGNATURE_TYPE"
    ),
    strict_tags: bool = typer.Option(
        False, "--strict-tags", help="Enforce ANS-104 tag limits.", envvar="BUNDLE_STRICT_TAGS"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="DEBUG, INFO, WARNING, ...", envvar="BUNDLE_LOG_LEVEL"
    ),
) -> None:
    overrides: dict = {"strict_tags": strict_tags}
    if sig_type is not None:
        overrides["signature_type"] = sig_type
    if log_level is not None:
        overrides["log_level"] = log_level.upper()
    try:
        cfg = BundleConfig.with_overrides(BundleConfig.from_env(), **overrides)
    except ValueError as e:
        _fail(f"invalid configuration: {e}")
    blog.configure_from_config(cfg)
    ctx.obj = Ctx(config=cfg)


@app.command("version")
def version_cmd() -> None:
    """Print the SDK version."""
    typer.echo(sdk_version())


@app.command("tags")
def tags_cmd(ctx: typer.Context, tag: Optional[List[str]] = _tags_opt()) -> None:
    """Encode tags and print the tag block."""
    cfg: BundleConfig = ctx.obj.config
    items = normalize_tags(_parse_tags(tag))
    try:
        if cfg.strict_tags:
            validate_tags(items, cfg)
    except BundleSdkError as e:
        _fail(str(e))
    block = encode_tags(items)
    _print_json({"count": len(items), "byteLength": len(block), "hex": to_hex(block)})


@app.command("digest")
def digest_cmd(
    ctx: typer.Context,
    owner: str = typer.Option(..., "--owner", help="32-byte owner public key (hex)."),
    tag: Optional[List[str]] = _tags_opt(),
    data_file: Optional[Path] = _data_opt(),
    target: Optional[str] = _target_opt(),
    anchor: Optional[str] = _anchor_opt(),
) -> None:
    """Print the 48-byte digest a signer would sign for these fields."""
    cfg: BundleConfig = ctx.obj.config
    try:
        digest = builder.data_item_digest(
            owner=_parse_hex(owner, "owner") or b"",
            tags=_parse_tags(tag),
            data=_read_data(data_file),
            target=_parse_hex(target, "target"),
            anchor=_parse_hex(anchor, "anchor"),
            config=cfg,
        )
    except BundleSdkError as e:
        _fail(str(e))
    typer.echo(to_hex(digest))


@app.command("build")
def build_cmd(
    ctx: typer.Context,
    out: Path = typer.Option(..., "--out", "-o", dir_okay=False, help="Output file."),
    seed: Optional[str] = typer.Option(
        None, "--seed", help="32-byte ed25519 seed (hex).", envvar="BUNDLE_SIGNER_SEED"
    ),
    tag: Optional[List[str]] = _tags_opt(),
    data_file: Optional[Path] = _data_opt(),
    target: Optional[str] = _target_opt(),
    anchor: Optional[str] = _anchor_opt(),
) -> None:
    """Build and sign a data item with a local ed25519 key."""
    cfg: BundleConfig = ctx.obj.config
    if not seed:
        _fail("a signer seed is required (--seed or BUNDLE_SIGNER_SEED)")
    try:
        signer = Ed25519Signer.from_seed(_parse_hex(seed, "seed") or b"")
    except ValueError as e:
        _fail(str(e))

    async def _run() -> builder.DataItem:
        return await builder.create_data_item(
            owner=signer.public_key,
            tags=_parse_tags(tag),
            data=_read_data(data_file),
            signer=signer,
            target=_parse_hex(target, "target"),
            anchor=_parse_hex(anchor, "anchor"),
            config=cfg,
        )

    with blog.trace_scope():
        try:
            item = asyncio.run(_run())
        except BundleSdkError as e:
            _fail(str(e))
        raw = item.to_bytes()
        out.write_bytes(raw)
    _print_json(
        {
            "id": item.id_b64url,
            "owner": to_hex(item.owner),
            "size": len(raw),
            "tags": item.tags_count,
            "out": str(out),
        }
    )


@app.command("build-unsigned")
def build_unsigned_cmd(
    ctx: typer.Context,
    out: Path = typer.Option(..., "--out", "-o", dir_okay=False, help="Output file."),
    tag: Optional[List[str]] = _tags_opt(),
    data_file: Optional[Path] = _data_opt(),
) -> None:
    """Build a data item with zeroed signature and owner (no ownership proof)."""
    cfg: BundleConfig = ctx.obj.config
    try:
        raw = builder.build_unsigned(tags=_parse_tags(tag), data=_read_data(data_file), config=cfg)
    except BundleSdkError as e:
        _fail(str(e))
    out.write_bytes(raw)
    _print_json({"size": len(raw), "out": str(out)})


def main() -> None:  # pragma: no cover - console entrypoint
    app()


def run(argv: Optional[List[str]] = None) -> int:
    """Invoke the CLI programmatically and return its exit code."""
    try:
        app(args=argv, standalone_mode=False)
    except typer.Exit as e:
        return int(e.exit_code or 0)
    return 0


if __name__ == "__main__":  # pragma: no cover
    main()
