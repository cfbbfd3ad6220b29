"""Tests for _loader.py: reading, interpolating and parsing one source."""

import logging
from pathlib import Path

import pytest

from tomlstack._loader import load_source, parse_text
from tomlstack._types import (
    EnvVarNotFoundError,
    FileSource,
    InlineSource,
    ParseError,
    SourceNotFoundError,
    SourceReadError,
)


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


class TestFileSources:
    def test_existing_file_parsed(self, tmp_path):
        path = _write(tmp_path / "app.toml", '[app]\nname = "demo"\nport = 8080\n')
        assert load_source(FileSource(path)) == {"app": {"name": "demo", "port": 8080}}

    def test_optional_missing_file_skipped(self, tmp_path, caplog):
        path = tmp_path / "missing.toml"
        with caplog.at_level(logging.WARNING, logger="tomlstack._loader"):
            assert load_source(FileSource(path, required=False)) is None
        assert "optional" in caplog.text
        assert str(path) in caplog.text

    def test_required_missing_file_raises(self, tmp_path):
        path = tmp_path / "missing.toml"
        with pytest.raises(SourceNotFoundError) as exc_info:
            load_source(FileSource(path, required=True))
        assert exc_info.value.path == str(path)

    def test_unreadable_path_raises_read_error(self, tmp_path):
        with pytest.raises(SourceReadError):
            load_source(FileSource(tmp_path, required=False))

    def test_utf8_content(self, tmp_path):
        path = _write(tmp_path / "i18n.toml", 'greeting = "héllo wörld"\n')
        assert load_source(FileSource(path)) == {"greeting": "héllo wörld"}

    def test_file_content_interpolated(self, tmp_path):
        path = _write(tmp_path / "db.toml", '[db]\nhost = "${DB_HOST:localhost}"\n')
        assert load_source(FileSource(path), environ={"DB_HOST": "db.internal"}) == {
            "db": {"host": "db.internal"}
        }


class TestInlineSources:
    def test_inline_parsed(self):
        assert load_source(InlineSource("x = 1\ny = [1, 2]")) == {"x": 1, "y": [1, 2]}

    def test_inline_interpolated(self):
        source = InlineSource('name = "${APP_NAME}"')
        assert load_source(source, environ={"APP_NAME": "svc"}) == {"name": "svc"}

    def test_empty_inline_is_empty_table(self):
        assert load_source(InlineSource("")) == {}


class TestFailures:
    def test_malformed_inline_raises_parse_error(self):
        with pytest.raises(ParseError) as exc_info:
            load_source(InlineSource("[app\nname = "))
        assert exc_info.value.origin == "<inline>"

    def test_malformed_optional_file_still_fatal(self, tmp_path):
        path = _write(tmp_path / "broken.toml", "key = = value\n")
        with pytest.raises(ParseError, match="broken.toml"):
            load_source(FileSource(path, required=False))

    def test_duplicate_keys_rejected(self):
        with pytest.raises(ParseError):
            load_source(InlineSource("a = 1\na = 2\n"))

    def test_interpolation_error_propagates(self, caplog):
        with caplog.at_level(logging.ERROR, logger="tomlstack._loader"):
            with pytest.raises(EnvVarNotFoundError):
                parse_text('secret = "${NOT_SET_ANYWHERE}"', "<inline>", environ={})
        assert "NOT_SET_ANYWHERE" in caplog.text

    def test_unknown_source_type(self):
        with pytest.raises(TypeError):
            load_source("not a source")
