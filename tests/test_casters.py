"""Tests for _casters.py: _cast_bool, byte sizes, durations."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from tomlstack._casters import ByteConfig, TimeConfig, _cast_bool, parse_byte_size, parse_duration


class TestCastBool:
    @pytest.mark.parametrize("value", ["1", "true", "True", "yes", "on", "t", "Y"])
    def test_truthy_strings(self, value):
        assert _cast_bool(value) is True

    @pytest.mark.parametrize("value", ["0", "false", "FALSE", "no", "off", "f", ""])
    def test_falsy_strings(self, value):
        assert _cast_bool(value) is False

    def test_native_values(self):
        assert _cast_bool(True) is True
        assert _cast_bool(0) is False

    def test_invalid_raises(self):
        with pytest.raises(ValueError, match="Cannot cast"):
            _cast_bool("maybe")
        with pytest.raises(ValueError, match="Cannot cast"):
            _cast_bool(["x"])


class TestByteSize:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("4KiB", 4096),
            ("5MB", 5_000_000),
            ("1 GiB", 1024**3),
            ("512", 512),
            (2048, 2048),
        ],
    )
    def test_parses(self, raw, expected):
        assert parse_byte_size(raw) == expected

    def test_invalid_raises_value_error(self):
        with pytest.raises(ValueError, match="Invalid byte size"):
            parse_byte_size("lots")

    def test_byte_config_from_string(self):
        size = ByteConfig.model_validate("10MB")
        assert size.parsed == 10_000_000
        assert size.raw == "10MB"

    def test_byte_config_from_integer(self):
        size = ByteConfig.model_validate(1024)
        assert (size.parsed, size.raw) == (1024, "1024")

    def test_byte_config_invalid(self):
        with pytest.raises(ValidationError):
            ByteConfig.model_validate("lots")


class TestDuration:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("30s", timedelta(seconds=30)),
            ("2m 30s", timedelta(minutes=2, seconds=30)),
            ("1h30m", timedelta(hours=1, minutes=30)),
            ("250ms", timedelta(milliseconds=250)),
            ("1.5h", timedelta(minutes=90)),
            ("2 days", timedelta(days=2)),
            ("1w", timedelta(weeks=1)),
            ("45", timedelta(seconds=45)),
            (10, timedelta(seconds=10)),
            (0.5, timedelta(milliseconds=500)),
        ],
    )
    def test_parses(self, raw, expected):
        assert parse_duration(raw) == expected

    @pytest.mark.parametrize("raw", ["", "abc", "5s junk!", "-5s", True])
    def test_invalid(self, raw):
        with pytest.raises(ValueError, match="Invalid duration"):
            parse_duration(raw)

    def test_unknown_unit(self):
        with pytest.raises(ValueError, match="Unknown duration unit"):
            parse_duration("10 parsecs")

    def test_time_config(self):
        timeout = TimeConfig.model_validate("1m 30s")
        assert timeout.parsed == timedelta(seconds=90)
        assert timeout.raw == "1m 30s"

    def test_time_config_invalid(self):
        with pytest.raises(ValidationError):
            TimeConfig.model_validate("soon")
