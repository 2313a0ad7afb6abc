"""Tests for log levels and the record formatter."""

from datetime import datetime

import pytest

from daylogger.errors import MissingPropertyValueError
from daylogger.record import (
    LogLevel,
    LogRecord,
    format_record,
    parse_record_line,
    source_file_name,
)

WHEN = datetime(2024, 1, 1, 9, 30, 5, 125000)


def make_record(**overrides) -> LogRecord:
    values = {
        "timestamp": WHEN,
        "level": LogLevel.ERROR,
        "message": "disk full",
        "file_name": "/srv/app/storage/writer.py",
        "line": 42,
        "function_name": "flush",
        "call_context": "MainThread",
    }
    values.update(overrides)
    return LogRecord(**values)


class TestLogLevel:
    """Test level ordering and names."""

    def test_ordering(self):
        assert LogLevel.INFO < LogLevel.DEBUG < LogLevel.WARNING < LogLevel.ERROR

    def test_display_names(self):
        names = [level.display_name for level in LogLevel.all()]
        assert names == ["Info", "Debug", "Warning", "Error"]

    def test_at_least(self):
        assert LogLevel.ERROR.at_least(LogLevel.WARNING)
        assert LogLevel.DEBUG.at_least(LogLevel.DEBUG)
        assert not LogLevel.INFO.at_least(LogLevel.DEBUG)

    def test_from_display_name(self):
        assert LogLevel.from_display_name("Warning") is LogLevel.WARNING

    def test_from_unknown_display_name(self):
        with pytest.raises(ValueError):
            LogLevel.from_display_name("Fatal")


class TestSourceFileName:
    """Test basename extraction from source paths."""

    def test_strips_directories(self):
        assert source_file_name("/srv/app/writer.py") == "writer.py"

    def test_bare_name(self):
        assert source_file_name("writer.py") == "writer.py"

    def test_empty_path(self):
        assert source_file_name("") == ""


class TestFormatRecord:
    """Test the record text layout."""

    def test_header_line(self):
        text = format_record(make_record())
        assert text == (
            "2024-01-01 09:30:05.125 [Error] [writer.py] [42] [MainThread] flush -> disk full"
        )

    def test_unknown_call_context(self):
        text = format_record(make_record(call_context=None))
        assert "[unknown] flush" in text

    def test_properties_block(self):
        text = format_record(make_record(properties={"code": "28", "retries": 3}))
        lines = text.split("\n")
        assert lines[0].endswith("-> disk full")
        assert lines[1] == "PROPERTIES ¬ "
        assert lines[2] == 'code: "28"'
        assert lines[3] == 'retries: "3"'
        assert text.endswith("\n")

    def test_one_properties_marker(self):
        text = format_record(make_record(properties={"a": 1, "b": 2}))
        assert text.count("PROPERTIES ¬") == 1

    def test_empty_properties_have_no_block(self):
        text = format_record(make_record(properties={}))
        assert "PROPERTIES" not in text
        assert "\n" not in text

    def test_null_property_fails_fast(self):
        with pytest.raises(MissingPropertyValueError) as exc:
            format_record(make_record(properties={"code": None}))
        assert exc.value.key == "code"

    def test_record_is_immutable(self):
        record = make_record()
        with pytest.raises(AttributeError):
            record.message = "changed"


class TestParseRecordLine:
    """Test reading a formatted record back."""

    @pytest.mark.parametrize("level", list(LogLevel))
    def test_round_trip(self, level):
        record = make_record(level=level, message="retry -> later [2]")
        parsed = parse_record_line(format_record(record))
        assert parsed.level is level
        assert parsed.message == "retry -> later [2]"
        assert parsed.timestamp == WHEN
        assert parsed.file_name == "writer.py"
        assert parsed.line == 42
        assert parsed.function_name == "flush"

    def test_first_line_of_property_record(self):
        text = format_record(make_record(properties={"code": "28"}))
        parsed = parse_record_line(text.split("\n")[0])
        assert parsed.message == "disk full"

    def test_non_record_line(self):
        assert parse_record_line("Log Created: 2024-01-01") is None
