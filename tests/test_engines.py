"""Tests for the HTML to Markdown conversion engines."""

import re
import shutil
import subprocess
from unittest.mock import Mock, patch

import pytest

from evernote_md.converters.engines import (
    BasicEngine,
    ConversionEngine,
    MarkdownifyEngine,
    PandocEngine,
    create_engine,
)
from evernote_md.errors import ConfigError, EngineError


class TestMarkdownifyEngine:
    def test_paragraph(self):
        assert MarkdownifyEngine().convert("<p>Milk</p>") == "Milk"

    def test_enml_note(self):
        text = MarkdownifyEngine().convert(
            "<en-note><h1>Agenda</h1><ul><li>Budget</li></ul></en-note>"
        )
        assert "# Agenda" in text
        assert "- Budget" in text
        assert "<" not in text

    def test_todos(self):
        text = MarkdownifyEngine().convert(
            '<en-note><div><en-todo checked="true"/>Done</div><div><en-todo/>Open</div></en-note>'
        )
        assert re.search(r"\\?\[x\\?\] Done", text)
        assert re.search(r"\\?\[ \\?\] Open", text)

    def test_scripts_removed(self):
        text = MarkdownifyEngine().convert("<p>Hi</p><script>alert(1)</script>")
        assert text == "Hi"

    def test_empty_body(self):
        assert MarkdownifyEngine().convert("   ") == ""

    def test_library_failure_becomes_engine_error(self, monkeypatch):
        def boom(*args, **kwargs):
            raise ValueError("bad markup")

        monkeypatch.setattr("evernote_md.converters.engines.md", boom)
        with pytest.raises(EngineError, match="bad markup"):
            MarkdownifyEngine().convert("<p>x</p>")


class TestPandocEngine:
    def test_missing_executable(self):
        with patch("evernote_md.converters.engines.shutil.which", return_value=None):
            with pytest.raises(EngineError, match="not found"):
                PandocEngine()

    def test_convert_pipes_html_through_pandoc(self):
        completed = Mock(returncode=0, stdout="Milk\n", stderr="")
        with patch("evernote_md.converters.engines.shutil.which", return_value="/usr/bin/pandoc"), \
                patch("evernote_md.converters.engines.subprocess.run", return_value=completed) as run:
            engine = PandocEngine(timeout=5)
            assert engine.convert("<p>Milk</p>") == "Milk\n"

        args, kwargs = run.call_args
        assert args[0] == ["/usr/bin/pandoc", "--from", "html", "--to", "markdown"]
        assert kwargs["input"] == "<p>Milk</p>"
        assert kwargs["timeout"] == 5

    def test_nonzero_exit(self):
        completed = Mock(returncode=64, stdout="", stderr="pandoc: parse failure\nmore")
        with patch("evernote_md.converters.engines.shutil.which", return_value="/usr/bin/pandoc"), \
                patch("evernote_md.converters.engines.subprocess.run", return_value=completed):
            with pytest.raises(EngineError, match="code 64"):
                PandocEngine().convert("<p>x</p>")

    def test_timeout(self):
        with patch("evernote_md.converters.engines.shutil.which", return_value="/usr/bin/pandoc"), \
                patch("evernote_md.converters.engines.subprocess.run",
                      side_effect=subprocess.TimeoutExpired(cmd="pandoc", timeout=1)):
            with pytest.raises(EngineError, match="timed out"):
                PandocEngine(timeout=1).convert("<p>x</p>")

    @pytest.mark.skipif(shutil.which("pandoc") is None, reason="pandoc not installed")
    def test_real_pandoc(self):
        text = PandocEngine().convert("<p>Milk</p>")
        assert "Milk" in text
        assert "<p>" not in text


def test_basic_engine():
    assert BasicEngine().convert("<p><b>Milk</b></p>") == "**Milk**"


def test_create_engine_by_name():
    assert isinstance(create_engine("markdownify"), MarkdownifyEngine)
    assert isinstance(create_engine("basic"), BasicEngine)
    assert isinstance(create_engine("basic"), ConversionEngine)


def test_create_engine_unknown():
    with pytest.raises(ConfigError):
        create_engine("word")
