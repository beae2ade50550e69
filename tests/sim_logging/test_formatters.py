import json
import logging
import sys

import pytest

from geotrack.sim_logging import DefaultSessionFilter, DevFormatter, JSONFormatter


def _record(msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="geotrack.test",
        level=logging.INFO,
        pathname="test.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.unit
class TestJSONFormatter:
    def test_basic_fields(self) -> None:
        output = json.loads(JSONFormatter("production").format(_record("estimate ready")))

        assert output["level"] == "INFO"
        assert output["logger"] == "geotrack.test"
        assert output["message"] == "estimate ready"
        assert output["env"] == "production"
        assert "timestamp" in output

    def test_includes_context_fields(self) -> None:
        record = _record(session_id="s-1", tier="premium")
        output = json.loads(JSONFormatter().format(record))

        assert output["session_id"] == "s-1"
        assert output["tier"] == "premium"
        assert "trip_id" not in output

    def test_includes_exception(self) -> None:
        try:
            raise ValueError("broken")
        except ValueError:
            record = _record()
            record.exc_info = sys.exc_info()

        output = json.loads(JSONFormatter().format(record))
        assert "ValueError: broken" in output["exception"]


@pytest.mark.unit
class TestDevFormatter:
    def test_includes_session_placeholder(self) -> None:
        record = _record("state change")
        DefaultSessionFilter().filter(record)

        line = DevFormatter().format(record)

        assert "[session=-]" in line
        assert "geotrack.test: state change" in line

    def test_keeps_existing_session(self) -> None:
        record = _record(session_id="abc")
        DefaultSessionFilter().filter(record)

        assert "[session=abc]" in DevFormatter().format(record)
