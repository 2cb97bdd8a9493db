"""
SDK configuration: default signature type, tag-limit policy and logging.

- Sane defaults, overridable via environment variables (BUNDLE_*).
- Nothing here is read implicitly by the builders; pass a `BundleConfig`
  explicitly or rely on the defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

# ANS-104 limits on tags.
MAX_TAGS = 128
MAX_TAG_NAME_BYTES = 1024
MAX_TAG_VALUE_BYTES = 3072

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off", "")
_LOG_FORMATS = ("json", "text")


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v is not None else default


def _parse_bool(val: Any, default: bool = False) -> bool:
    if val is None:
        return default
    if isinstance(val, bool):
        return val
    s = str(val).strip().lower()
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    raise ValueError(f"expected a boolean flag, got: {val!r}")


def _parse_int(val: Any, default: int) -> int:
    """Accepts int, decimal str, or 0x-hex str."""
    if val is None or val == "":
        return int(default)
    if isinstance(val, int):
        return val
    s = str(val).strip()
    if s.lower().startswith("0x"):
        return int(s, 16)
    return int(s, 10)


def _check_log_format(fmt: Optional[str]) -> Optional[str]:
    if fmt is None or fmt == "":
        return None
    f = fmt.strip().lower()
    if f not in _LOG_FORMATS:
        raise ValueError(f"log_format must be one of {_LOG_FORMATS}, got: {fmt!r}")
    return f


@dataclass(slots=True)
class BundleConfig:
    # Data item
    signature_type: int = 2
    # Tag policy
    strict_tags: bool = False
    max_tags: int = MAX_TAGS
    max_tag_name_bytes: int = MAX_TAG_NAME_BYTES
    max_tag_value_bytes: int = MAX_TAG_VALUE_BYTES
    # Logging
    log_level: str = "INFO"
    log_format: Optional[str] = None

    def __post_init__(self) -> None:
        if not 0 <= int(self.signature_type) <= 0xFFFF:
            raise ValueError("signature_type must fit in an unsigned 16-bit field")
        for name in ("max_tags", "max_tag_name_bytes", "max_tag_value_bytes"):
            if int(getattr(self, name)) < 0:
                raise ValueError(f"{name} must be non-negative")
        self.log_format = _check_log_format(self.log_format)

    @classmethod
    def from_env(cls, prefix: str = "BUNDLE_") -> "BundleConfig":
        """
        Create config from environment variables:

        BUNDLE_SIGNATURE_TYPE      (int or 0x-hex)
        BUNDLE_STRICT_TAGS         (1/0, true/false)
        BUNDLE_MAX_TAGS            (int)
        BUNDLE_MAX_TAG_NAME_BYTES  (int)
        BUNDLE_MAX_TAG_VALUE_BYTES (int)
        BUNDLE_LOG_LEVEL           (DEBUG/INFO/...)
        BUNDLE_LOG_FORMAT          (json/text)
        """
        return cls(
            signature_type=_parse_int(_env(f"{prefix}SIGNATURE_TYPE"), 2),
            strict_tags=_parse_bool(_env(f"{prefix}STRICT_TAGS"), False),
            max_tags=_parse_int(_env(f"{prefix}MAX_TAGS"), MAX_TAGS),
            max_tag_name_bytes=_parse_int(
                _env(f"{prefix}MAX_TAG_NAME_BYTES"), MAX_TAG_NAME_BYTES
            ),
            max_tag_value_bytes=_parse_int(
                _env(f"{prefix}MAX_TAG_VALUE_BYTES"), MAX_TAG_VALUE_BYTES
            ),
            log_level=(_env(f"{prefix}LOG_LEVEL", "INFO") or "INFO").upper(),
            log_format=_env(f"{prefix}LOG_FORMAT"),
        )

    @classmethod
    def with_overrides(
        cls, base: Optional["BundleConfig"] = None, **overrides: Any
    ) -> "BundleConfig":
        """
        Build from an existing config plus keyword overrides.
        Unknown keys are ignored.
        """
        base = base or cls.from_env()
        data = base.to_dict()
        data.update({k: v for k, v in overrides.items() if k in data})
        if "signature_type" in overrides:
            data["signature_type"] = _parse_int(overrides["signature_type"], base.signature_type)
        if "strict_tags" in overrides:
            data["strict_tags"] = _parse_bool(overrides["strict_tags"], base.strict_tags)
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "signature_type": int(self.signature_type),
            "strict_tags": bool(self.strict_tags),
            "max_tags": int(self.max_tags),
            "max_tag_name_bytes": int(self.max_tag_name_bytes),
            "max_tag_value_bytes": int(self.max_tag_value_bytes),
            "log_level": self.log_level,
            "log_format": self.log_format,
        }


DEFAULT = BundleConfig()

__all__ = [
    "BundleConfig",
    "DEFAULT",
    "MAX_TAGS",
    "MAX_TAG_NAME_BYTES",
    "MAX_TAG_VALUE_BYTES",
]
