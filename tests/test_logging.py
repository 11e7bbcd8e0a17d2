import json
import logging
import sys

import pytest

from bordercross.utils.logging import JsonFormatter, configure_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)


def _record(msg="Dropping row %s", args=("x",), **extra):
    record = logging.LogRecord(
        name="bordercross.analysis.filters",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=args,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_merges_extras():
    line = JsonFormatter().format(_record(border="US-Mexico Border", date="13 Foo 2020"))
    payload = json.loads(line)

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "bordercross.analysis.filters"
    assert payload["msg"] == "Dropping row x"
    assert payload["border"] == "US-Mexico Border"
    assert payload["date"] == "13 Foo 2020"
    assert "lineno" not in payload


def test_json_formatter_stringifies_unserializable_values(tmp_path):
    payload = json.loads(JsonFormatter().format(_record(output_dir=tmp_path)))
    assert payload["output_dir"] == str(tmp_path)


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = _record()
        record.exc_info = sys.exc_info()
    payload = json.loads(JsonFormatter().format(record))
    assert "RuntimeError: boom" in payload["exc"]


def test_configure_logging_replaces_only_its_own_handler(root_logger):
    other = logging.NullHandler()
    root_logger.addHandler(other)

    configure_logging(logging.DEBUG)
    configure_logging(logging.ERROR, json_format=True)

    ours = [h for h in root_logger.handlers if h.get_name() == "bordercross"]
    assert len(ours) == 1
    assert isinstance(ours[0].formatter, JsonFormatter)
    assert other in root_logger.handlers
    assert root_logger.level == logging.ERROR
