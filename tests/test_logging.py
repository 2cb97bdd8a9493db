import io
import json
import logging

from bundle_sdk import logging as blog


def _record(msg="data item built", **extra):
    return logging.makeLogRecord(
        {"name": "bundle_sdk.dataitem.build", "levelno": logging.DEBUG,
         "levelname": "DEBUG", "msg": msg, **extra}
    )


def test_json_formatter_includes_context_and_extras():
    with blog.trace_scope("t-123"):
        blog.bind(component="uploader")
        line = blog.JSONFormatter().format(_record(owner=b"\x01\x02", size=134))
    payload = json.loads(line)
    assert payload["msg"] == "data item built"
    assert payload["level"] == "DEBUG"
    assert payload["logger"] == "bundle_sdk.dataitem.build"
    assert payload["trace_id"] == "t-123"
    assert payload["component"] == "uploader"
    assert payload["owner"] == "0102"
    assert payload["size"] == 134


def test_trace_scope_restores_previous_context():
    blog.clear_context()
    blog.bind(component="outer")
    with blog.trace_scope() as tid:
        assert len(tid) == 12
        assert blog.context()["trace_id"] == tid
        blog.bind(component="inner")
    assert blog.context() == {"component": "outer"}
    blog.unbind("component")
    assert blog.context() == {}


def test_text_formatter_is_one_line():
    blog.clear_context()
    with blog.trace_scope("abc"):
        line = blog.TextFormatter().format(_record(size=134))
    parts = line.split(" | ")
    assert parts[1].strip() == "DEBUG"
    assert parts[2] == "bundle_sdk.dataitem.build"
    assert "trace_id=abc" in parts
    assert "size=134" in parts
    assert parts[-1] == "data item built"


def test_configure_writes_json_to_stream(reset_sdk_logger):
    buf = io.StringIO()
    logger = blog.configure(json=True, level="DEBUG", stream=buf)
    assert logger.name == "bundle_sdk"
    assert logger.propagate is False

    blog.get_logger("bundle_sdk.dataitem.build").debug("hello", extra={"size": 1})
    payload = json.loads(buf.getvalue().strip())
    assert payload["msg"] == "hello"
    assert payload["size"] == 1


def test_configure_level_filters(reset_sdk_logger):
    buf = io.StringIO()
    blog.configure(json=False, level="WARNING", stream=buf)
    log = blog.get_logger("bundle_sdk.test")
    log.info("quiet")
    log.warning("loud")
    out = buf.getvalue()
    assert "quiet" not in out
    assert "loud" in out


def test_with_fields_adds_constant_fields(reset_sdk_logger):
    buf = io.StringIO()
    blog.configure(json=True, level="INFO", stream=buf)
    adapter = blog.with_fields(blog.get_logger("bundle_sdk.x"), item_id="abc")
    adapter.info("uploaded")
    assert json.loads(buf.getvalue())["item_id"] == "abc"
