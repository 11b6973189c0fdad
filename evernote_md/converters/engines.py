#!/usr/bin/env python3
# Copyright (c) 2025 Denis Darkin
# SPDX-License-Identifier: MIT
"""
Conversion engines turning a note's HTML body into Markdown.

Every engine exposes ``convert(html) -> str`` and raises EngineError on
failure. Engines hold no per-note state, so a single instance is shared
by all worker threads.
"""

import shutil
import subprocess
from typing import Protocol, runtime_checkable

from bs4 import BeautifulSoup
from markdownify import markdownify as md

from ..errors import ConfigError, EngineError
from .markdown_utils import html_to_markdown, normalize_blank_lines


@runtime_checkable
class ConversionEngine(Protocol):
    """Anything that can turn HTML into Markdown."""

    name: str

    def convert(self, html: str) -> str:
        ...


class MarkdownifyEngine:
    """In-process conversion with BeautifulSoup + markdownify."""

    name = 'markdownify'

    def __init__(self, heading_style: str = 'ATX', bullets: str = '-'):
        self.heading_style = heading_style
        self.bullets = bullets

    def convert(self, html: str) -> str:
        if not html.strip():
            return ''
        try:
            soup = BeautifulSoup(html, 'html.parser')
            for tag in soup(['script', 'style']):
                tag.decompose()
            # ENML checkboxes: <en-todo checked="true"/>
            for todo in soup.find_all('en-todo'):
                checked = todo.get('checked', '').lower() == 'true'
                todo.replace_with('[x] ' if checked else '[ ] ')
            body = soup.find('en-note') or soup
            text = md(str(body), heading_style=self.heading_style, bullets=self.bullets)
        except Exception as e:
            raise EngineError(f"markdownify failed: {e}") from e
        return normalize_blank_lines(text)


class PandocEngine:
    """Run the pandoc executable once per note.

    Args:
        executable: Name or path of the pandoc binary
        timeout: Seconds allowed per conversion
        output_format: Pandoc writer, 'markdown' by default
    """

    name = 'pandoc'

    def __init__(self, executable: str = 'pandoc', timeout: float = 60.0,
                 output_format: str = 'markdown'):
        self.timeout = timeout
        self.output_format = output_format
        self.executable = shutil.which(executable)
        if self.executable is None:
            raise EngineError(f"pandoc executable not found: {executable}")

    def convert(self, html: str) -> str:
        cmd = [self.executable, '--from', 'html', '--to', self.output_format]
        try:
            result = subprocess.run(
                cmd,
                input=html,
                capture_output=True,
                text=True,
                encoding='utf-8',
                errors='replace',
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise EngineError(f"pandoc timed out after {self.timeout}s") from e
        except OSError as e:
            raise EngineError(f"pandoc could not be started: {e}") from e

        if result.returncode != 0:
            details = result.stderr.strip().splitlines()[:5]
            raise EngineError(f"pandoc exited with code {result.returncode}: {' '.join(details)}")

        return result.stdout


class BasicEngine:
    """Regex-only conversion, no third-party parser involved."""

    name = 'basic'

    def convert(self, html: str) -> str:
        return html_to_markdown(html)


def create_engine(name: str, pandoc_timeout: float = 60.0) -> ConversionEngine:
    """Build the engine registered under ``name``.

    Raises:
        ConfigError: Unknown engine name
        EngineError: Engine exists but cannot run here (e.g. pandoc missing)
    """
    if name == 'markdownify':
        return MarkdownifyEngine()
    if name == 'pandoc':
        return PandocEngine(timeout=pandoc_timeout)
    if name == 'basic':
        return BasicEngine()
    raise ConfigError(f"unknown engine {name!r}")
