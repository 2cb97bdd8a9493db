import pytest

from bundle_sdk.config import MAX_TAGS, BundleConfig


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "SIGNATURE_TYPE",
        "STRICT_TAGS",
        "MAX_TAGS",
        "MAX_TAG_NAME_BYTES",
        "MAX_TAG_VALUE_BYTES",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(f"BUNDLE_{name}", raising=False)
    return monkeypatch


def test_defaults(clean_env):
    cfg = BundleConfig.from_env()
    assert cfg == BundleConfig()
    assert cfg.signature_type == 2
    assert cfg.strict_tags is False
    assert cfg.max_tags == MAX_TAGS == 128
    assert cfg.log_level == "INFO"
    assert cfg.log_format is None


def test_from_env(clean_env):
    clean_env.setenv("BUNDLE_SIGNATURE_TYPE", "0x4")
    clean_env.setenv("BUNDLE_STRICT_TAGS", "yes")
    clean_env.setenv("BUNDLE_MAX_TAGS", "16")
    clean_env.setenv("BUNDLE_LOG_LEVEL", "debug")
    clean_env.setenv("BUNDLE_LOG_FORMAT", "JSON")

    cfg = BundleConfig.from_env()
    assert cfg.signature_type == 4
    assert cfg.strict_tags is True
    assert cfg.max_tags == 16
    assert cfg.log_level == "DEBUG"
    assert cfg.log_format == "json"


def test_custom_prefix(clean_env):
    clean_env.setenv("APP_SIGNATURE_TYPE", "4")
    assert BundleConfig.from_env(prefix="APP_").signature_type == 4


def test_invalid_bool_is_rejected(clean_env):
    clean_env.setenv("BUNDLE_STRICT_TAGS", "maybe")
    with pytest.raises(ValueError, match="boolean"):
        BundleConfig.from_env()


def test_invalid_values_are_rejected():
    with pytest.raises(ValueError, match="log_format"):
        BundleConfig(log_format="xml")
    with pytest.raises(ValueError, match="16-bit"):
        BundleConfig(signature_type=70000)
    with pytest.raises(ValueError, match="max_tags"):
        BundleConfig(max_tags=-1)


def test_with_overrides():
    base = BundleConfig(max_tags=5)
    cfg = BundleConfig.with_overrides(base, signature_type="4", strict_tags="on", unknown=1)
    assert cfg.signature_type == 4
    assert cfg.strict_tags is True
    assert cfg.max_tags == 5
    assert base.signature_type == 2
    assert cfg.to_dict()["signature_type"] == 4
